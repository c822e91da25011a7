import unittest

from avss import (
    SECP256K1,
    CommitmentMatrix,
    evaluate_at_x,
    evaluate_at_y,
    generate_random_bivariate_polynomial,
    poly_eval,
    verify_point,
    verify_poly,
    verify_secret,
    verify_share,
)


class VerificationTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        # 7 out of 9 nodes
        cls.threshold = 7
        cls.participants = 9
        cls.secret = SECP256K1.random_scalar()
        cls.f = generate_random_bivariate_polynomial(cls.secret, cls.threshold)
        cls.f_prime = generate_random_bivariate_polynomial(
            SECP256K1.random_scalar(), cls.threshold
        )
        cls.C = CommitmentMatrix.build(cls.f, cls.f_prime)

    def restrictions(self, index):
        return (
            evaluate_at_x(self.f, index),
            evaluate_at_x(self.f_prime, index),
            evaluate_at_y(self.f, index),
            evaluate_at_y(self.f_prime, index),
        )

    def cross_point(self, m, i):
        return (
            poly_eval(evaluate_at_x(self.f, m), i),
            poly_eval(evaluate_at_x(self.f_prime, m), i),
            poly_eval(evaluate_at_x(self.f, i), m),
            poly_eval(evaluate_at_x(self.f_prime, i), m),
        )

    def test_verify_poly_honest(self):
        for index in range(1, self.participants + 1):
            self.assertTrue(verify_poly(self.C, index, *self.restrictions(index)))

    def test_verify_poly_detects_altered_coefficient(self):
        polys = self.restrictions(5)
        for which in range(4):
            for coefficient in (0, self.threshold - 1):
                altered = list(polys)
                poly = altered[which]
                altered[which] = poly.replace(coefficient, poly[coefficient] + 1)
                self.assertFalse(
                    verify_poly(self.C, 5, *altered),
                    f"polynomial {which}, coefficient {coefficient}",
                )

    def test_verify_poly_wrong_index(self):
        self.assertFalse(verify_poly(self.C, 4, *self.restrictions(5)))

    def test_verify_poly_swapped_restrictions(self):
        a, a_prime, b, b_prime = self.restrictions(5)
        self.assertFalse(verify_poly(self.C, 5, b, b_prime, a, a_prime))

    def test_verify_poly_wrong_length(self):
        a, a_prime, b, b_prime = self.restrictions(5)
        self.assertFalse(verify_poly(self.C, 5, a[:-1], a_prime, b, b_prime))
        self.assertFalse(verify_poly(self.C, 5, a, a_prime, b, tuple(b_prime) + (0,)))

    def test_verify_point_honest(self):
        self.assertTrue(verify_point(self.C, 3, 5, *self.cross_point(3, 5)))
        self.assertTrue(verify_point(self.C, 9, 1, *self.cross_point(9, 1)))

    def test_verify_point_detects_altered_scalar(self):
        point = self.cross_point(3, 5)
        for which in range(4):
            altered = list(point)
            altered[which] = (altered[which] + 1) % SECP256K1.order
            self.assertFalse(verify_point(self.C, 3, 5, *altered), f"scalar {which}")

    def test_verify_point_is_directional(self):
        alpha, alpha_prime, beta, beta_prime = self.cross_point(3, 5)
        self.assertFalse(verify_point(self.C, 3, 5, beta, beta_prime, alpha, alpha_prime))
        self.assertTrue(verify_point(self.C, 5, 3, beta, beta_prime, alpha, alpha_prime))

    def test_verify_share(self):
        for index in range(1, self.participants + 1):
            sigma = poly_eval(evaluate_at_x(self.f, index), 0)
            sigma_prime = poly_eval(evaluate_at_x(self.f_prime, index), 0)
            self.assertTrue(verify_share(self.C, index, sigma, sigma_prime))
        self.assertFalse(verify_share(self.C, 3, sigma, sigma_prime))
        self.assertFalse(verify_share(self.C, index, sigma + 1, sigma_prime))

    def test_verify_secret(self):
        self.assertTrue(verify_secret(self.C, self.secret, self.f_prime[0][0]))
        self.assertFalse(verify_secret(self.C, self.secret + 1, self.f_prime[0][0]))


if __name__ == "__main__":
    unittest.main()
