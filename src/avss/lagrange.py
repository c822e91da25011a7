"""
Lagrange interpolation over the scalar field.

Shares are points (index, value) on a univariate polynomial. Interpolating
any t of them with distinct indexes recovers the unique polynomial of degree
at most t - 1 through them, and so the same value at every x for every choice
of t honest shares. Reconstruction evaluates at x = 0.

Duplicate indexes make a Lagrange basis term divide by zero, so they are
rejected when the interpolation set is built, before any arithmetic runs.
"""

from typing import Iterable, NamedTuple, Tuple
from .errors import DuplicateIndexError
from .group import GroupParameters, SECP256K1


class LabeledShare(NamedTuple):
    """A point (index, value) on a univariate polynomial."""

    index: int
    value: int


def interpolation_set(shares: Iterable[LabeledShare]) -> Tuple[LabeledShare, ...]:
    """
    Validate a collection of shares for interpolation.

    Parameters:
    shares (Iterable[LabeledShare]): The shares to interpolate.

    Returns:
    Tuple[LabeledShare, ...]: The shares in their original order.

    Raises:
    ValueError: If there are no shares or an index is not a positive integer.
    DuplicateIndexError: If two shares carry the same index.
    """
    shares = tuple(LabeledShare(*share) for share in shares)
    if not shares:
        raise ValueError("Need at least one share.")

    seen = set()
    for share in shares:
        if not isinstance(share.index, int) or share.index < 1:
            raise ValueError(f"Share index must be a positive integer, got {share.index!r}.")
        if share.index in seen:
            raise DuplicateIndexError(f"Duplicate share index {share.index}.")
        seen.add(share.index)
    return shares


def lagrange_coefficient(
    participant_indexes: Tuple[int, ...],
    participant_index: int,
    x: int = 0,
    params: GroupParameters = SECP256K1,
) -> int:
    """
    Calculate the Lagrange basis polynomial of one index evaluated at x.

    Parameters:
    participant_indexes (Tuple[int, ...]): All indexes in the interpolation set.
    participant_index (int): The index whose basis polynomial is evaluated.
    x (int, optional): The evaluation point. Defaults to 0.
    params (GroupParameters): The group whose order the field is defined by.

    Returns:
    int: lambda_i(x) reduced modulo the group order.

    Raises:
    DuplicateIndexError: If the indexes are not unique.
    """
    if len(participant_indexes) != len(set(participant_indexes)):
        raise DuplicateIndexError("Participant indexes must be unique.")

    # lambda_i(x) = prod (x - p_j)/(p_i - p_j), j != i
    numerator = 1
    denominator = 1
    for index in participant_indexes:
        if index == participant_index:
            continue
        numerator = numerator * (x - index)
        denominator = denominator * (participant_index - index)
    return (numerator * params.inverse(denominator)) % params.order


def interpolate(
    shares: Iterable[LabeledShare], x: int = 0, params: GroupParameters = SECP256K1
) -> int:
    """
    Evaluate at x the polynomial passing through the given shares.

    Parameters:
    shares (Iterable[LabeledShare]): Shares with pairwise distinct indexes.
    x (int, optional): The evaluation point. Defaults to 0, the secret.
    params (GroupParameters): The group whose order the field is defined by.

    Returns:
    int: The interpolated value reduced modulo the group order.

    Raises:
    ValueError: If the share set is empty or malformed.
    DuplicateIndexError: If two shares carry the same index.
    """
    shares = interpolation_set(shares)
    indexes = tuple(share.index for share in shares)

    result = 0
    for share in shares:
        coefficient = lagrange_coefficient(indexes, share.index, x, params)
        result = (result + coefficient * share.value) % params.order
    return result
