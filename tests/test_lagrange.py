import unittest

from avss import (
    Q,
    SECP256K1,
    DuplicateIndexError,
    LabeledShare,
    UnivariatePolynomial,
    interpolate,
    interpolation_set,
    lagrange_coefficient,
)


class LagrangeTests(unittest.TestCase):
    def setUp(self):
        self.threshold = 7
        self.secret = SECP256K1.random_scalar()
        self.poly = UnivariatePolynomial(
            (self.secret,) + tuple(SECP256K1.random_scalar() for _ in range(self.threshold - 1))
        )
        self.shares = [LabeledShare(i, self.poly.evaluate(i)) for i in range(1, 10)]

    def test_robustness(self):
        self.assertEqual(interpolate(self.shares[:7], 0), self.secret)
        self.assertEqual(interpolate(self.shares[1:8], 0), self.secret)
        self.assertEqual(interpolate(self.shares[2:9], 0), self.secret)
        self.assertEqual(interpolate(self.shares[::-1][:7]), self.secret)
        self.assertEqual(interpolate(self.shares), self.secret)

    def test_interpolate_other_points(self):
        self.assertEqual(interpolate(self.shares[:7], 12), self.poly.evaluate(12))
        self.assertEqual(interpolate(self.shares[1:8], 1), self.shares[0].value)

    def test_too_few_shares_give_wrong_secret(self):
        self.assertNotEqual(interpolate(self.shares[:6], 0), self.secret)

    def test_lagrange_coefficients_sum_to_one(self):
        indexes = (1, 3, 4, 8)
        total = sum(lagrange_coefficient(indexes, i) for i in indexes) % Q
        self.assertEqual(total, 1)

    def test_small_line(self):
        # f(x) = 5 + 2x
        shares = [LabeledShare(1, 7), LabeledShare(2, 9)]
        self.assertEqual(interpolate(shares), 5)
        self.assertEqual(interpolate([(3, 11), (7, 19)]), 5)

    def test_duplicate_indexes_rejected(self):
        shares = self.shares[:6] + [LabeledShare(1, 42)]
        with self.assertRaises(DuplicateIndexError):
            interpolation_set(shares)
        with self.assertRaises(DuplicateIndexError):
            interpolate(shares)
        with self.assertRaises(DuplicateIndexError):
            lagrange_coefficient((1, 2, 2), 1)

    def test_malformed_sets_rejected(self):
        with self.assertRaises(ValueError):
            interpolation_set([])
        with self.assertRaises(ValueError):
            interpolation_set([LabeledShare(0, 1)])
        with self.assertRaises(ValueError):
            interpolation_set([LabeledShare(-2, 1)])


if __name__ == "__main__":
    unittest.main()
