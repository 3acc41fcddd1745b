import math
import unittest

from bigrational import DEFAULT_GCD, Rational, binary_gcd, get_gcd, set_gcd


class BinaryGcdTests(unittest.TestCase):
    def test_agrees_with_math_gcd(self):
        pairs = [
            (12, 18),
            (-12, 18),
            (12, -18),
            (-12, -18),
            (17, 5),
            (0, 9),
            (9, 0),
            (0, 0),
            (1, 1),
            (2**200 * 3, 2**150 * 9),
            (10**40 + 7, 10**20 + 3),
        ]
        for a, b in pairs:
            with self.subTest(a=a, b=b):
                self.assertEqual(binary_gcd(a, b), math.gcd(a, b))

    def test_result_is_non_negative(self):
        self.assertEqual(binary_gcd(-4, -6), 2)


class GcdConfigurationTests(unittest.TestCase):
    def tearDown(self):
        set_gcd(None)

    def test_default_collaborator(self):
        self.assertIs(DEFAULT_GCD, math.gcd)
        self.assertIs(get_gcd(), DEFAULT_GCD)

    def test_set_gcd_returns_previous(self):
        previous = set_gcd(binary_gcd)
        self.assertIs(previous, DEFAULT_GCD)
        self.assertIs(get_gcd(), binary_gcd)
        self.assertIs(set_gcd(None), binary_gcd)
        self.assertIs(get_gcd(), DEFAULT_GCD)

    def test_reduce_uses_configured_collaborator(self):
        calls = []

        def recording_gcd(a, b):
            calls.append((a, b))
            return binary_gcd(a, b)

        set_gcd(recording_gcd)
        self.assertEqual(Rational(10, 20).reduce().as_pair(), (1, 2))
        self.assertEqual(calls, [(10, 20)])

    def test_keyword_overrides_configured_collaborator(self):
        set_gcd(lambda a, b: 1)
        self.assertEqual(Rational(10, 20).reduce().as_pair(), (10, 20))
        self.assertEqual(Rational(10, 20).reduce(gcd=math.gcd).as_pair(), (1, 2))

    def test_rejects_non_callables(self):
        with self.assertRaises(TypeError):
            set_gcd(5)
        self.assertIs(get_gcd(), DEFAULT_GCD)

    def test_swap_is_logged(self):
        with self.assertLogs("bigrational.gcd", level="DEBUG"):
            set_gcd(binary_gcd)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
