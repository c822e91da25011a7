"""
This module defines the Point class, which represents affine points on the
secp256k1 elliptic curve. Points are the public half of every Pedersen
commitment in the AVSS scheme: commitment matrix entries, homomorphic
evaluations of rows and columns, and the left-hand side of each verification
equation.

The class provides point addition, doubling, negation and scalar
multiplication, membership checks, and SEC 1 compressed encoding. Points are
treated as immutable values; every operation returns a new Point.
"""

from __future__ import annotations
from typing import Optional
from .constants import P, Q, B, G_x, G_y
from .errors import InvalidPointError


class Point:
    """Class representing an elliptic curve point."""

    __slots__ = ("x", "y")

    def __init__(self, x: Optional[int] = None, y: Optional[int] = None):
        """
        Initialize a point on the curve.

        Parameters:
        x (Optional[int], optional): The x-coordinate of the point.
            Defaults to None, representing the point at infinity.
        y (Optional[int], optional): The y-coordinate of the point.
            Defaults to None, also representing the point at infinity.

        The constructor does not check curve membership, arithmetic creates
        many intermediate points. Use is_on_curve() or validate() at trust
        boundaries.
        """
        self.x = x
        self.y = y

    @classmethod
    def lift_x(cls, x: int) -> Point:
        """
        Return the point with the given x-coordinate and an even y-coordinate.

        Parameters:
        x (int): Candidate x-coordinate in [0, P).

        Returns:
        Point: The curve point with that x-coordinate and even y.

        Raises:
        InvalidPointError: If x is out of range or x^3 + 7 is not a square mod P.
        """
        if not 0 <= x < P:
            raise InvalidPointError("The x-coordinate must be in the range [0, P).")
        y_squared = (pow(x, 3, P) + B) % P
        y = pow(y_squared, (P + 1) // 4, P)
        if pow(y, 2, P) != y_squared:
            raise InvalidPointError("No curve point has this x-coordinate.")
        return cls(x, y if y % 2 == 0 else P - y)

    @classmethod
    def sec_deserialize(cls, hex_public_key: str) -> Point:
        """
        Deserialize a SEC 1 compressed hex-encoded point.

        Parameters:
        hex_public_key (str): Hexadecimal string of 33 bytes representing the
        compressed point.

        Returns:
        Point: The decoded point.

        Raises:
        InvalidPointError: If the input is not a valid hex string, has the
        wrong length or prefix, or does not represent a curve point.
        """
        try:
            hex_bytes = bytes.fromhex(hex_public_key)
        except ValueError as e:
            raise InvalidPointError("Invalid hex input.") from e
        if len(hex_bytes) != 33:
            raise InvalidPointError(
                "Input must be exactly 33 bytes long for SEC 1 compressed format."
            )
        if hex_bytes[0] not in (2, 3):
            raise InvalidPointError("Compressed point prefix must be 0x02 or 0x03.")

        even = cls.lift_x(int.from_bytes(hex_bytes[1:], "big"))
        return even if hex_bytes[0] == 2 else -even

    def sec_serialize(self) -> bytes:
        """
        Serialize the point to its SEC 1 compressed format.

        Returns:
        bytes: The prefix byte followed by the 32-byte x-coordinate.

        Raises:
        ValueError: If the point is at infinity.
        """
        if self.x is None or self.y is None:
            raise ValueError("Cannot serialize the point at infinity.")

        prefix = b"\x02" if self.y % 2 == 0 else b"\x03"
        return prefix + self.x.to_bytes(32, "big")

    def is_zero(self) -> bool:
        """
        Check if the point is the identity element (point at infinity).

        Returns:
        bool: True if the point is at infinity, False otherwise.
        """
        return self.x is None or self.y is None

    def is_on_curve(self) -> bool:
        """
        Check whether the point satisfies y^2 = x^3 + 7 over the field.

        The point at infinity is considered on the curve.
        """
        if self.is_zero():
            return self.x is None and self.y is None
        if not isinstance(self.x, int) or not isinstance(self.y, int):
            return False
        if not (0 <= self.x < P and 0 <= self.y < P):
            return False
        return (self.y * self.y - pow(self.x, 3, P) - B) % P == 0

    def validate(self) -> Point:
        """
        Return the point unchanged if it lies on the curve.

        Raises:
        InvalidPointError: If the point is not on the curve.
        """
        if not self.is_on_curve():
            raise InvalidPointError(f"{self!r} is not on the secp256k1 curve.")
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __neg__(self) -> Point:
        """
        Negate the point by reflecting it over the x-axis.

        Returns:
        Point: The negated point, or the point at infinity unchanged.
        """
        if self.x is None or self.y is None:
            return self

        return self.__class__(self.x, (P - self.y) % P)

    def _dbl(self) -> Point:
        """
        Double the point. A point at infinity or of order 2 doubles to
        infinity.
        """
        if self.x is None or self.y is None or self.y == 0:
            return self.__class__()

        x = self.x
        y = self.y
        s = (3 * x * x * pow(2 * y, P - 2, P)) % P
        sum_x = (s * s - 2 * x) % P
        sum_y = (s * (x - sum_x) - y) % P

        return self.__class__(sum_x, sum_y)

    def __add__(self, other: Point) -> Point:
        """
        Add two points on the curve.

        Parameters:
        other (Point): Another point to add to this point.

        Returns:
        Point: The sum of the two points.

        Raises:
        TypeError: If other is not a Point.
        """
        if not isinstance(other, Point):
            raise TypeError("The other object must be an instance of Point")

        if self.x is None or self.y is None:
            return other
        if other.x is None or other.y is None:
            return self
        if self == other:
            return self._dbl()
        if self.x == other.x:
            return self.__class__()  # Point at infinity
        s = ((other.y - self.y) * pow(other.x - self.x, P - 2, P)) % P
        sum_x = (s * s - self.x - other.x) % P
        sum_y = (s * (self.x - sum_x) - self.y) % P

        return self.__class__(sum_x, sum_y)

    def __sub__(self, other: Point) -> Point:
        if not isinstance(other, Point):
            raise TypeError("The other object must be an instance of Point")

        return self + -other

    def __rmul__(self, scalar: int) -> Point:
        """
        Multiply this point by an integer scalar using the double-and-add
        method. The scalar is reduced modulo the curve order first.

        Parameters:
        scalar (int): The scalar to multiply this point by.

        Returns:
        Point: The result of the scalar multiplication.

        Raises:
        TypeError: If the scalar is not an integer.
        """
        if not isinstance(scalar, int) or isinstance(scalar, bool):
            raise TypeError("The scalar must be an integer")

        scalar %= Q

        p = self
        r = self.__class__()
        while scalar:
            if scalar & 1:
                r = r + p
            p = p._dbl()
            scalar >>= 1

        return r

    def __str__(self) -> str:
        if self.is_zero():
            return "0"
        return f"X: 0x{self.x:x}\nY: 0x{self.y:x}"

    def __repr__(self) -> str:
        if self.is_zero():
            return f"{self.__class__.__name__}(x=None, y=None)"
        return f"{self.__class__.__name__}(x={self.x}, y={self.y})"


# The generator point G
G: Point = Point(G_x, G_y)
