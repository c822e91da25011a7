"""
Reconstruction of the shared secret from completed participants' shares.

Each share is checked against the commitment matrix before it is used, so a
faulty participant cannot steer the result. Any t valid shares interpolate to
the same secret; the secret and the blinding term recovered together must
open the commitment C[0][0].
"""

import logging
from typing import Iterable, NamedTuple
from .commitment import CommitmentMatrix
from .errors import NotEnoughSharesError, ReconstructionError
from .lagrange import LabeledShare, interpolate, interpolation_set
from .verification import verify_secret, verify_share

logger = logging.getLogger(__name__)


class FinalShare(NamedTuple):
    """A completed participant's share (i, f(i, 0), f'(i, 0))."""

    index: int
    value: int
    blinding: int


def reconstruct_secret(
    commitment: CommitmentMatrix, shares: Iterable[FinalShare], threshold: int = None
) -> int:
    """
    Recover the secret from at least t final shares.

    Parameters:
    commitment (CommitmentMatrix): The dealer's commitment matrix.
    shares (Iterable[FinalShare]): Shares from completed participants.
    threshold (int, optional): The number of shares to interpolate.
    Defaults to the size of the commitment matrix.

    Returns:
    int: The secret f(0, 0).

    Raises:
    DuplicateIndexError: If two shares carry the same index.
    NotEnoughSharesError: If fewer than t shares pass verify_share.
    ReconstructionError: If the result does not open C[0][0].
    """
    if threshold is None:
        threshold = len(commitment)
    shares = tuple(FinalShare(*share) for share in shares)
    if shares:
        interpolation_set(LabeledShare(share.index, share.value) for share in shares)

    valid = []
    for share in shares:
        if verify_share(commitment, share.index, share.value, share.blinding):
            valid.append(share)
        else:
            logger.warning("Discarding invalid share from participant %d", share.index)

    if len(valid) < threshold:
        raise NotEnoughSharesError(
            f"Expected at least {threshold} valid shares, received {len(valid)}."
        )

    chosen = valid[:threshold]
    params = commitment.params
    secret = interpolate(
        (LabeledShare(share.index, share.value) for share in chosen), 0, params
    )
    blinding = interpolate(
        (LabeledShare(share.index, share.blinding) for share in chosen), 0, params
    )

    if not verify_secret(commitment, secret, blinding):
        raise ReconstructionError("Reconstructed secret does not open the commitment.")

    logger.debug(
        "Reconstructed secret from participants %s",
        ", ".join(str(share.index) for share in chosen),
    )
    return secret
