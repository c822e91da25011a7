import unittest

from avss import Point, G, H, P, Q, InvalidPointError


class PointTests(unittest.TestCase):
    def test_generators_on_curve(self):
        self.assertTrue(G.is_on_curve())
        self.assertTrue(H.is_on_curve())
        self.assertNotEqual(G, H)
        self.assertEqual(H.y % 2, 0)

    def test_infinity(self):
        infinity = Point()
        self.assertTrue(infinity.is_zero())
        self.assertTrue(infinity.is_on_curve())
        self.assertEqual(G + infinity, G)
        self.assertEqual(infinity + G, G)
        self.assertTrue((G - G).is_zero())
        self.assertEqual(-infinity, infinity)

    def test_scalar_multiplication(self):
        self.assertEqual(2 * G, G + G)
        self.assertEqual(3 * G, G + G + G)
        self.assertTrue((Q * G).is_zero())
        self.assertTrue((0 * G).is_zero())
        self.assertEqual((Q + 5) * G, 5 * G)
        self.assertEqual(-1 * G, -G)
        a, b = 0xDEADBEEF, 0xC0FFEE
        self.assertEqual(a * G + b * G, (a + b) * G)
        self.assertEqual(a * (b * G), (a * b) * G)

    def test_scalar_must_be_integer(self):
        with self.assertRaises(TypeError):
            1.5 * G
        with self.assertRaises(TypeError):
            G + 1

    def test_sec_serialization(self):
        point = 12345 * G
        encoded = point.sec_serialize()
        self.assertEqual(len(encoded), 33)
        self.assertEqual(Point.sec_deserialize(encoded.hex()), point)
        self.assertEqual(Point.sec_deserialize((-point).sec_serialize().hex()), -point)
        with self.assertRaises(ValueError):
            Point().sec_serialize()

    def test_sec_deserialize_rejects_malformed(self):
        with self.assertRaises(InvalidPointError):
            Point.sec_deserialize("zz")
        with self.assertRaises(InvalidPointError):
            Point.sec_deserialize("02" + "00" * 31)
        with self.assertRaises(InvalidPointError):
            Point.sec_deserialize("05" + G.sec_serialize().hex()[2:])
        # x = 5 has no point on secp256k1
        with self.assertRaises(InvalidPointError):
            Point.sec_deserialize("02" + (5).to_bytes(32, "big").hex())

    def test_validate(self):
        self.assertIs(G.validate(), G)
        self.assertFalse(Point(1, 1).is_on_curve())
        self.assertFalse(Point(G.x, None).is_on_curve())
        self.assertFalse(Point(G.x + P, G.y).is_on_curve())
        with self.assertRaises(InvalidPointError):
            Point(1, 1).validate()
        with self.assertRaises(ValueError):
            Point(1, 1).validate()

    def test_hashable(self):
        self.assertEqual(len({G, G + Point(), 2 * G}), 2)


if __name__ == "__main__":
    unittest.main()
