"""
The polynomial module provides the univariate and bivariate polynomials the
dealer shares a secret with.

A bivariate polynomial f(x, y) = sum_j sum_l f[j][l] x^j y^l of degree t - 1
in each variable is stored as a t x t matrix of scalars. Fixing one variable
gives a univariate "restricted" polynomial of t coefficients; each participant
i receives the row restriction f(i, y) and the column restriction f(x, i) of
both the secret polynomial and the blinding polynomial.

The restrictions are consistent with each other:

    evaluate_at_x(f, a).evaluate(b) == evaluate_at_y(f, b).evaluate(a) == f(a, b)

which is what lets two participants cross-check each other's shares.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Sequence, Tuple
from .group import GroupParameters, SECP256K1


class UnivariatePolynomial:
    """Class representing a polynomial in one variable, lowest degree first."""

    __slots__ = ("coefficients", "params")

    def __init__(self, coefficients: Iterable[int], params: GroupParameters = SECP256K1):
        """
        Initialize a univariate polynomial.

        Parameters:
        coefficients (Iterable[int]): The coefficients c_0, ..., c_(t - 1).
        params (GroupParameters): The group whose order the coefficients are
        reduced by.

        Raises:
        ValueError: If there are no coefficients.
        TypeError: If a coefficient is not an integer.
        """
        coefficients = tuple(coefficients)
        if not coefficients:
            raise ValueError("A polynomial needs at least one coefficient.")
        for coefficient in coefficients:
            if not isinstance(coefficient, int):
                raise TypeError("All coefficients must be integers.")

        self.params = params
        self.coefficients: Tuple[int, ...] = tuple(c % params.order for c in coefficients)

    def __len__(self) -> int:
        return len(self.coefficients)

    def __iter__(self) -> Iterator[int]:
        return iter(self.coefficients)

    def __getitem__(self, index: int) -> int:
        return self.coefficients[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnivariatePolynomial):
            return NotImplemented
        return self.params == other.params and self.coefficients == other.coefficients

    def __hash__(self) -> int:
        return hash((self.params, self.coefficients))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self.coefficients)})"

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    def evaluate(self, x: int) -> int:
        """
        Evaluate the polynomial at a given point x using Horner's method.

        Parameters:
        x (int): The point at which the polynomial is evaluated.

        Returns:
        int: The value of the polynomial at x, reduced modulo the group order.

        Raises:
        TypeError: If x is not an integer.
        """
        if not isinstance(x, int):
            raise TypeError("The value of x must be an integer.")

        q = self.params.order
        y = 0
        for coefficient in reversed(self.coefficients):
            y = (y * x + coefficient) % q
        return y

    def replace(self, index: int, value: int) -> UnivariatePolynomial:
        """Return a copy with one coefficient replaced."""
        coefficients = list(self.coefficients)
        coefficients[index] = value
        return self.__class__(coefficients, self.params)


class BivariatePolynomial:
    """Class representing a t x t bivariate polynomial."""

    __slots__ = ("coefficients", "params")

    def __init__(
        self, coefficients: Sequence[Sequence[int]], params: GroupParameters = SECP256K1
    ):
        """
        Initialize a bivariate polynomial from its coefficient matrix.

        Parameters:
        coefficients (Sequence[Sequence[int]]): coefficients[j][l] is the
        coefficient of x^j y^l.
        params (GroupParameters): The group whose order the coefficients are
        reduced by.

        Raises:
        ValueError: If the matrix is empty or not square.
        TypeError: If a coefficient is not an integer.
        """
        rows = tuple(tuple(row) for row in coefficients)
        size = len(rows)
        if size == 0:
            raise ValueError("A bivariate polynomial needs at least one coefficient.")
        if any(len(row) != size for row in rows):
            raise ValueError(
                f"Coefficient matrix must be {size} x {size} to have equal degree in x and y."
            )
        for row in rows:
            for coefficient in row:
                if not isinstance(coefficient, int):
                    raise TypeError("All coefficients must be integers.")

        self.params = params
        self.coefficients: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(c % params.order for c in row) for row in rows
        )

    def __len__(self) -> int:
        return len(self.coefficients)

    def __getitem__(self, index: int) -> Tuple[int, ...]:
        return self.coefficients[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BivariatePolynomial):
            return NotImplemented
        return self.params == other.params and self.coefficients == other.coefficients

    def __hash__(self) -> int:
        return hash((self.params, self.coefficients))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(threshold={len(self)})"

    @property
    def threshold(self) -> int:
        return len(self.coefficients)

    @property
    def constant_term(self) -> int:
        return self.coefficients[0][0]

    def evaluate(self, x: int, y: int) -> int:
        """Evaluate f(x, y)."""
        return evaluate_at_x(self, x).evaluate(y)


def generate_random_bivariate_polynomial(
    secret: int, threshold: int, params: GroupParameters = SECP256K1
) -> BivariatePolynomial:
    """
    Generate a random t x t bivariate polynomial with the given constant term.

    Parameters:
    secret (int): The value of f[0][0].
    threshold (int): The number of coefficients per variable, t.
    params (GroupParameters): The group to draw scalars from.

    Returns:
    BivariatePolynomial: f with f[0][0] = secret and every other coefficient
    drawn independently at random.

    Raises:
    ValueError: If the threshold is less than one.
    TypeError: If the threshold or secret is not an integer.
    EntropyError: If the randomness source fails.
    """
    if not isinstance(threshold, int) or not isinstance(secret, int):
        raise TypeError("The secret and threshold must be integers.")
    if threshold < 1:
        raise ValueError("The threshold must be at least one.")

    # f_jl <- $ Z_q, f_00 = s
    coefficients = [
        [params.random_scalar() for _ in range(threshold)] for _ in range(threshold)
    ]
    coefficients[0][0] = secret % params.order
    return BivariatePolynomial(coefficients, params)


def evaluate_at_x(f: BivariatePolynomial, x0: int) -> UnivariatePolynomial:
    """
    Fix x = x0 and return f(x0, y) as a polynomial in y.

    Parameters:
    f (BivariatePolynomial): The bivariate polynomial.
    x0 (int): The value of x.

    Returns:
    UnivariatePolynomial: Coefficients c_l = sum_j f[j][l] x0^j.
    """
    q = f.params.order
    t = len(f)
    coefficients = [0] * t
    x_power = 1
    for j in range(t):
        row = f.coefficients[j]
        for l in range(t):
            coefficients[l] = (coefficients[l] + row[l] * x_power) % q
        x_power = (x_power * x0) % q
    return UnivariatePolynomial(coefficients, f.params)


def evaluate_at_y(f: BivariatePolynomial, y0: int) -> UnivariatePolynomial:
    """
    Fix y = y0 and return f(x, y0) as a polynomial in x.

    Parameters:
    f (BivariatePolynomial): The bivariate polynomial.
    y0 (int): The value of y.

    Returns:
    UnivariatePolynomial: Coefficients c_j = sum_l f[j][l] y0^l.
    """
    coefficients = [
        UnivariatePolynomial(row, f.params).evaluate(y0) for row in f.coefficients
    ]
    return UnivariatePolynomial(coefficients, f.params)


def poly_eval(poly: UnivariatePolynomial, x: int) -> int:
    """Horner evaluation of a univariate polynomial at x."""
    return poly.evaluate(x)
