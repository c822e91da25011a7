"""
This module defines the Dealer, which splits a secret among the participants
of an AVSS session.

The dealer draws a secret polynomial f with f(0, 0) equal to the secret and a
blinding polynomial f' with a random constant term, publishes the commitment
matrix binding both, and hands each participant i its four restricted
polynomials f(i, y), f'(i, y), f(x, i) and f'(x, i).
"""

import logging
from typing import Tuple
from .commitment import CommitmentMatrix
from .group import GroupParameters, SECP256K1
from .messages import Dealing
from .polynomial import evaluate_at_x, evaluate_at_y, generate_random_bivariate_polynomial

logger = logging.getLogger(__name__)


class Dealer:
    """Class representing the dealer of one sharing session."""

    def __init__(
        self,
        secret: int,
        threshold: int,
        participants: int,
        params: GroupParameters = SECP256K1,
    ):
        """
        Generate the dealer's polynomials and commitment matrix.

        Parameters:
        secret (int): The secret to share.
        threshold (int): The number of shares needed to reconstruct, t.
        participants (int): The number of participants, n.
        params (GroupParameters): The commitment group.

        Raises:
        ValueError: If the arguments are not integers or 1 <= t < n does not hold.
        EntropyError: If the randomness source fails.
        """
        if not all(isinstance(arg, int) for arg in (secret, threshold, participants)):
            raise ValueError(
                "All arguments (secret, threshold, participants) must be integers."
            )
        if not 1 <= threshold < participants:
            raise ValueError(
                f"Threshold must satisfy 1 <= t < n, got t={threshold}, n={participants}."
            )

        self.threshold = threshold
        self.participants = participants
        self.params = params
        self.f = generate_random_bivariate_polynomial(secret, threshold, params)
        self.f_prime = generate_random_bivariate_polynomial(
            params.random_scalar(), threshold, params
        )
        self.commitment = CommitmentMatrix.build(self.f, self.f_prime, params)
        logger.info(
            "Dealer committed to a %d-of-%d sharing, digest %s",
            threshold,
            participants,
            self.commitment.digest().hex()[:16],
        )

    def deal(self, index: int) -> Dealing:
        """
        Compute the private dealing for participant `index`.

        Raises:
        ValueError: If the index is outside [1, n].
        """
        if not isinstance(index, int) or not 1 <= index <= self.participants:
            raise ValueError(f"Participant index must be in [1, {self.participants}].")

        return Dealing(
            index=index,
            commitment=self.commitment,
            a=evaluate_at_x(self.f, index),
            a_prime=evaluate_at_x(self.f_prime, index),
            b=evaluate_at_y(self.f, index),
            b_prime=evaluate_at_y(self.f_prime, index),
        )

    def deal_all(self) -> Tuple[Dealing, ...]:
        return tuple(self.deal(index) for index in range(1, self.participants + 1))
