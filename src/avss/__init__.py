"""
This code is currently a work in progress. It has not been audited.  DO NOT
USE THIS MODULE TO PROTECT REAL SECRETS!

This package implements Asynchronous Verifiable Secret Sharing (AVSS) with
bivariate polynomials and Pedersen commitments over secp256k1.

Modules:
- point: Defines the Point class for handling points on an elliptic curve.
- group: Group order and the independent generators G and H, random scalars
  and Pedersen commitments.
- polynomial: Univariate and bivariate polynomials, restriction and Horner
  evaluation.
- commitment: The commitment matrix binding the dealer's polynomials.
- verification: Checks for dealt polynomials, cross points and final shares.
- lagrange: Lagrange interpolation of labeled shares.
- dealer, node, session: The dealer, the participant state machine, and an
  in-memory session running the Echo and Ready rounds.
- reconstruction: Verified reconstruction of the secret.
- auth: Session admission verifiers.
"""

from .point import Point, G
from .constants import P, Q
from .group import GroupParameters, SECP256K1, H
from .errors import (
    AVSSError,
    AuthenticationError,
    DuplicateIndexError,
    EntropyError,
    InvalidPointError,
    InvalidStateError,
    NotEnoughSharesError,
    ProtocolError,
    ReconstructionError,
)
from .polynomial import (
    BivariatePolynomial,
    UnivariatePolynomial,
    evaluate_at_x,
    evaluate_at_y,
    generate_random_bivariate_polynomial,
    poly_eval,
)
from .commitment import CommitmentMatrix
from .verification import verify_point, verify_poly, verify_secret, verify_share
from .lagrange import LabeledShare, interpolate, interpolation_set, lagrange_coefficient
from .messages import CrossPoints, Dealing, Echo, Ready, Round
from .reconstruction import FinalShare, reconstruct_secret
from .dealer import Dealer
from .node import Node, NodeState
from .session import Session
from .auth import TokenVerifier, Verifier
