"""
The commitment module builds and evaluates the matrix of Pedersen commitments
that binds the dealer to its secret polynomial f and blinding polynomial f'.

Each entry is C[j][l] = f[j][l]*G + f'[j][l]*H. Because commitments are
additively homomorphic, evaluating a column of C at x = i commits to the
coefficients of the restricted polynomials f(i, y) and f'(i, y), evaluating a
row at y = i commits to f(x, i) and f'(x, i), and evaluating the whole matrix
at (x, y) commits to the single pair (f(x, y), f'(x, y)). The verification
primitives compare those evaluations with commitments to the values a
participant claims.

The matrix is published once per sharing session and is read-only afterwards,
so it is safe to share by reference between threads.
"""

from __future__ import annotations
from hashlib import sha256
from typing import Sequence, Tuple
from .group import GroupParameters, SECP256K1
from .point import Point
from .polynomial import BivariatePolynomial


def evaluate_points(points: Sequence[Point], x: int) -> Point:
    """
    Evaluate sum_k points[k] * x^k using Horner's method on points.

    Parameters:
    points (Sequence[Point]): Commitments to polynomial coefficients, lowest
    degree first.
    x (int): The point at which to evaluate.

    Returns:
    Point: The commitment to the polynomial's value at x.
    """
    result = Point()  # Point at infinity
    for point in reversed(points):
        result = x * result + point
    return result


class CommitmentMatrix:
    """Class representing a t x t matrix of Pedersen commitments."""

    __slots__ = ("matrix", "params", "_digest")

    def __init__(
        self,
        matrix: Sequence[Sequence[Point]],
        params: GroupParameters = SECP256K1,
    ):
        """
        Initialize a commitment matrix from its entries.

        Parameters:
        matrix (Sequence[Sequence[Point]]): matrix[j][l] commits to the
        coefficient pair of x^j y^l.
        params (GroupParameters): The group the commitments live in.

        Raises:
        ValueError: If the matrix is empty or not square.
        TypeError: If an entry is not a Point.
        InvalidPointError: If an entry is not on the curve.
        """
        rows = tuple(tuple(row) for row in matrix)
        size = len(rows)
        if size == 0:
            raise ValueError("A commitment matrix needs at least one entry.")
        if any(len(row) != size for row in rows):
            raise ValueError(f"Commitment matrix must be {size} x {size}.")
        for row in rows:
            for point in row:
                if not isinstance(point, Point):
                    raise TypeError("All commitments must be Point instances.")
                point.validate()

        self.matrix: Tuple[Tuple[Point, ...], ...] = rows
        self.params = params
        self._digest = None

    @classmethod
    def build(
        cls,
        f: BivariatePolynomial,
        f_prime: BivariatePolynomial,
        params: GroupParameters = SECP256K1,
    ) -> CommitmentMatrix:
        """
        Commit to a secret polynomial and its blinding polynomial.

        Parameters:
        f (BivariatePolynomial): The secret polynomial.
        f_prime (BivariatePolynomial): The blinding polynomial.
        params (GroupParameters): The group to commit in.

        Returns:
        CommitmentMatrix: C with C[j][l] = f[j][l]*G + f'[j][l]*H.

        Raises:
        ValueError: If the polynomials have different thresholds.
        """
        if len(f) != len(f_prime):
            raise ValueError(
                "The secret and blinding polynomials must have the same threshold."
            )

        # C_jl = g^f_jl h^f'_jl, 0 <= j, l <= t - 1
        matrix = tuple(
            tuple(
                params.commit(value, blinding)
                for value, blinding in zip(f_row, f_prime_row)
            )
            for f_row, f_prime_row in zip(f.coefficients, f_prime.coefficients)
        )
        return cls(matrix, params)

    def __len__(self) -> int:
        return len(self.matrix)

    def __getitem__(self, index: int) -> Tuple[Point, ...]:
        return self.matrix[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommitmentMatrix):
            return NotImplemented
        return self.params == other.params and self.matrix == other.matrix

    def __hash__(self) -> int:
        return hash(self.digest())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(threshold={len(self)}, digest={self.digest().hex()[:16]})"

    @property
    def threshold(self) -> int:
        return len(self.matrix)

    @property
    def secret_commitment(self) -> Point:
        """The commitment C[0][0] to the secret and its blinding term."""
        return self.matrix[0][0]

    def column(self, l: int) -> Tuple[Point, ...]:
        return tuple(row[l] for row in self.matrix)

    def evaluate_at_x(self, x0: int) -> Tuple[Point, ...]:
        """
        Commit to the coefficients of f(x0, y) by evaluating each column at x0.

        Returns:
        Tuple[Point, ...]: Entry l is sum_j C[j][l] * x0^j.
        """
        return tuple(evaluate_points(self.column(l), x0) for l in range(len(self)))

    def evaluate_at_y(self, y0: int) -> Tuple[Point, ...]:
        """
        Commit to the coefficients of f(x, y0) by evaluating each row at y0.

        Returns:
        Tuple[Point, ...]: Entry j is sum_l C[j][l] * y0^l.
        """
        return tuple(evaluate_points(row, y0) for row in self.matrix)

    def evaluate(self, x: int, y: int) -> Point:
        """Commit to (f(x, y), f'(x, y)): sum_{j,l} C[j][l] * x^j * y^l."""
        return evaluate_points(self.evaluate_at_y(y), x)

    def digest(self) -> bytes:
        """
        Compute the SHA-256 reference to this matrix carried by Echo and Ready
        messages. The point at infinity is encoded as a single zero byte.
        """
        if self._digest is None:
            digest = sha256()
            digest.update(len(self.matrix).to_bytes(2, "big"))
            for row in self.matrix:
                for point in row:
                    digest.update(b"\x00" if point.is_zero() else point.sec_serialize())
            self._digest = digest.digest()
        return self._digest
