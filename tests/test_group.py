import unittest
from unittest import mock

from avss import G, H, Q, SECP256K1, GroupParameters, EntropyError, InvalidPointError, Point
from avss.group import derive_generator


class GroupTests(unittest.TestCase):
    def test_default_parameters(self):
        self.assertEqual(SECP256K1.order, Q)
        self.assertEqual(SECP256K1.G, G)
        self.assertEqual(SECP256K1.H, H)

    def test_derive_generator_is_deterministic(self):
        self.assertEqual(derive_generator(b"AVSS-secp256k1-Pedersen-H"), H)
        other = derive_generator(b"another domain")
        self.assertTrue(other.is_on_curve())
        self.assertNotEqual(other, H)

    def test_parameters_are_immutable(self):
        with self.assertRaises(AttributeError):
            SECP256K1._order = 7
        with self.assertRaises(AttributeError):
            SECP256K1.G = H

    def test_rejects_bad_generators(self):
        with self.assertRaises(InvalidPointError):
            GroupParameters(Q, G, Point(1, 1))
        with self.assertRaises(InvalidPointError):
            GroupParameters(Q, Point(), H)
        with self.assertRaises(ValueError):
            GroupParameters(Q, G, G)

    def test_random_scalar_range(self):
        for _ in range(50):
            scalar = SECP256K1.random_scalar()
            self.assertTrue(1 <= scalar < Q)

    def test_random_scalar_entropy_failure(self):
        with mock.patch("avss.group.secrets.randbelow", side_effect=OSError("no entropy")):
            with self.assertRaises(EntropyError):
                SECP256K1.random_scalar()

    def test_inverse(self):
        for value in (1, 2, 12345, Q - 1, Q + 3):
            self.assertEqual((value * SECP256K1.inverse(value)) % Q, 1)
        with self.assertRaises(ZeroDivisionError):
            SECP256K1.inverse(Q)

    def test_commit_is_homomorphic(self):
        a, a_prime, b, b_prime = 11, 22, 33, 44
        self.assertEqual(SECP256K1.commit(a, a_prime), a * G + a_prime * H)
        self.assertEqual(
            SECP256K1.commit(a, a_prime) + SECP256K1.commit(b, b_prime),
            SECP256K1.commit(a + b, a_prime + b_prime),
        )
        self.assertNotEqual(SECP256K1.commit(a, a_prime), SECP256K1.commit(a_prime, a))


if __name__ == "__main__":
    unittest.main()
