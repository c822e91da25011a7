"""
This module defines GroupParameters, the immutable context every scalar and
commitment operation runs in: the group order, the base point G, and a second
generator H with no known discrete-log relation to G.

H is derived by hashing a domain tag onto the curve (try-and-increment), so
its discrete logarithm with respect to G is unknown to everyone, including
whoever computes it. A single default instance, SECP256K1, is built when the
module is imported and is never mutated; functions that need the group take
it as an explicit `params` argument defaulting to that instance.
"""

from __future__ import annotations
from hashlib import sha256
import secrets
from .constants import P, Q, H_DOMAIN
from .errors import EntropyError, InvalidPointError
from .point import Point, G


def derive_generator(domain: bytes) -> Point:
    """
    Hash a domain tag to a curve point with an even y-coordinate.

    Parameters:
    domain (bytes): The domain separation tag.

    Returns:
    Point: The first candidate sha256(domain || counter) that is a valid
    x-coordinate, lifted to the curve.
    """
    counter = 0
    while True:
        digest = sha256(domain + counter.to_bytes(4, "big")).digest()
        x = int.from_bytes(digest, "big")
        counter += 1
        if x >= P:
            continue
        try:
            return Point.lift_x(x)
        except InvalidPointError:
            continue


class GroupParameters:
    """Order and generators of the commitment group."""

    __slots__ = ("_order", "_g", "_h")

    def __init__(self, order: int, g: Point, h: Point):
        """
        Initialize the group parameters.

        Parameters:
        order (int): The prime order of the group.
        g (Point): The base point.
        h (Point): The blinding generator.

        Raises:
        InvalidPointError: If either generator is not on the curve or is the
        point at infinity.
        ValueError: If G and H are the same point.
        """
        for generator in (g, h):
            generator.validate()
            if generator.is_zero():
                raise InvalidPointError("Generators must not be the point at infinity.")
        if g == h:
            raise ValueError("G and H must be independent generators.")

        self._order = order
        self._g = g
        self._h = h

    @property
    def order(self) -> int:
        return self._order

    @property
    def G(self) -> Point:
        return self._g

    @property
    def H(self) -> Point:
        return self._h

    def __setattr__(self, name, value):
        if hasattr(self, "_h"):
            raise AttributeError("GroupParameters are immutable.")
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroupParameters):
            return NotImplemented
        return (self._order, self._g, self._h) == (other._order, other._g, other._h)

    def __hash__(self) -> int:
        return hash((self._order, self._g, self._h))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(order={self._order:#x}, G={self._g!r}, H={self._h!r})"

    def random_scalar(self) -> int:
        """
        Draw a uniformly random nonzero scalar.

        Returns:
        int: A scalar in the range [1, order - 1].

        Raises:
        EntropyError: If the operating system randomness source fails.
        """
        try:
            return secrets.randbelow(self._order - 1) + 1
        except (OSError, NotImplementedError) as e:
            raise EntropyError("Unable to read from the randomness source.") from e

    def reduce(self, value: int) -> int:
        return value % self._order

    def inverse(self, value: int) -> int:
        """
        Compute the modular inverse of a scalar.

        Raises:
        ZeroDivisionError: If the value is congruent to zero.
        """
        value %= self._order
        if value == 0:
            raise ZeroDivisionError("Zero has no inverse modulo the group order.")
        return pow(value, self._order - 2, self._order)

    def commit(self, value: int, blinding: int) -> Point:
        """
        Compute the Pedersen commitment value*G + blinding*H.

        Parameters:
        value (int): The committed scalar.
        blinding (int): The blinding scalar.

        Returns:
        Point: The commitment.
        """
        # C = g^v h^r
        return (value * self._g) + (blinding * self._h)


# The second generator H
H: Point = derive_generator(H_DOMAIN)

# Default group for all operations
SECP256K1: GroupParameters = GroupParameters(Q, G, H)
