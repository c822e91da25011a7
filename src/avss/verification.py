"""
Verification primitives that tie claimed polynomials, cross-evaluation points
and final shares back to the public commitment matrix.

All functions are pure and return a boolean. A False result means the dealer
or the sending peer is faulty; it is never a reason to raise. A single
mismatching coefficient or point fails the whole check.
"""

from typing import Sequence
from .commitment import CommitmentMatrix


def verify_poly(
    commitment: CommitmentMatrix,
    index: int,
    a: Sequence[int],
    a_prime: Sequence[int],
    b: Sequence[int],
    b_prime: Sequence[int],
) -> bool:
    """
    Verify the four restricted polynomials the dealer sent participant i.

    Parameters:
    commitment (CommitmentMatrix): The dealer's commitment matrix.
    index (int): The participant index i.
    a (Sequence[int]): Coefficients of f(i, y).
    a_prime (Sequence[int]): Coefficients of f'(i, y).
    b (Sequence[int]): Coefficients of f(x, i).
    b_prime (Sequence[int]): Coefficients of f'(x, i).

    Returns:
    bool: True if every row and column commitment matches, False otherwise.
    """
    t = len(commitment)
    if any(len(poly) != t for poly in (a, a_prime, b, b_prime)):
        return False

    params = commitment.params

    # g^A_i(l) h^A'_i(l) == prod_j C_jl^(i^j), 0 <= l <= t - 1
    row_commitments = commitment.evaluate_at_x(index)
    for l in range(t):
        if params.commit(a[l], a_prime[l]) != row_commitments[l]:
            return False

    # g^B_i(j) h^B'_i(j) == prod_l C_jl^(i^l), 0 <= j <= t - 1
    column_commitments = commitment.evaluate_at_y(index)
    for j in range(t):
        if params.commit(b[j], b_prime[j]) != column_commitments[j]:
            return False

    return True


def verify_point(
    commitment: CommitmentMatrix,
    m: int,
    i: int,
    alpha: int,
    alpha_prime: int,
    beta: int,
    beta_prime: int,
) -> bool:
    """
    Verify the cross-evaluation point participant m sent participant i.

    Parameters:
    commitment (CommitmentMatrix): The dealer's commitment matrix.
    m (int): The sender index.
    i (int): The receiver index.
    alpha (int): The claimed f(m, i).
    alpha_prime (int): The claimed f'(m, i).
    beta (int): The claimed f(i, m).
    beta_prime (int): The claimed f'(i, m).

    Returns:
    bool: True if both pairs open the matrix evaluated at (m, i) and (i, m).
    """
    params = commitment.params

    # g^alpha h^alpha' == prod_{j,l} C_jl^(m^j i^l)
    if params.commit(alpha, alpha_prime) != commitment.evaluate(m, i):
        return False
    # g^beta h^beta' == prod_{j,l} C_jl^(i^j m^l)
    return params.commit(beta, beta_prime) == commitment.evaluate(i, m)


def verify_share(
    commitment: CommitmentMatrix, index: int, sigma: int, sigma_prime: int
) -> bool:
    """
    Verify a final share (sigma, sigma') = (f(i, 0), f'(i, 0)).

    Parameters:
    commitment (CommitmentMatrix): The dealer's commitment matrix.
    index (int): The participant index i.
    sigma (int): The claimed share of the secret.
    sigma_prime (int): The claimed share of the blinding term.

    Returns:
    bool: True if commit(sigma, sigma') == sum_j C[j][0] * i^j.
    """
    params = commitment.params
    return params.commit(sigma, sigma_prime) == commitment.evaluate(index, 0)


def verify_secret(commitment: CommitmentMatrix, secret: int, blinding: int) -> bool:
    """Check that (secret, blinding) opens the constant-term commitment C[0][0]."""
    return commitment.params.commit(secret, blinding) == commitment.secret_commitment
