"""
These constants define the elliptic curve secp256k1 used for all commitments in
the AVSS scheme. The curve operates over a finite field of prime order P, with a
base point G of order Q, specified by its coordinates G_x and G_y.

H_DOMAIN is the tag hashed onto the curve to obtain the second generator H, so
that nobody knows the discrete logarithm of H with respect to G.
"""

# secp256k1 constants for elliptic curve cryptography

# The prime modulus of the field
P: int = 2**256 - 2**32 - 977

# The order of the curve
Q: int = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Curve equation y^2 = x^3 + B
B: int = 7

# X-coordinate of the generator point G
G_x: int = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798

# Y-coordinate of the generator point G
G_y: int = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8

# Domain separation tag for deriving the generator H
H_DOMAIN: bytes = b"AVSS-secp256k1-Pedersen-H"
