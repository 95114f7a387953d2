from __future__ import annotations

import importlib.util
import math
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for numeric kernel tests")
class NumericKernelTests(unittest.TestCase):
    def test_results_are_python_floats(self) -> None:
        from exprcalc import numeric

        for out in (numeric.add(1, 2), numeric.negate(3.0), numeric.power(2.0, 10.0)):
            with self.subTest(out=out):
                self.assertIsInstance(out, float)

    def test_double_precision(self) -> None:
        from exprcalc import numeric

        self.assertEqual(numeric.add(0.1, 0.2), 0.1 + 0.2)
        self.assertEqual(numeric.divide(1.0, 3.0), 1.0 / 3.0)

    def test_ieee_special_values(self) -> None:
        from exprcalc import numeric

        self.assertEqual(numeric.divide(1.0, 0.0), math.inf)
        self.assertTrue(math.isnan(numeric.divide(0.0, 0.0)))
        self.assertTrue(math.isnan(numeric.power(-8.0, 0.5)))
        self.assertTrue(math.isnan(numeric.add(numeric.NAN, 1.0)))

    def test_power_handles_negative_base_with_integral_exponent(self) -> None:
        from exprcalc import numeric

        self.assertEqual(numeric.power(-2.0, 2.0), 4.0)
        self.assertEqual(numeric.power(-2.0, 3.0), -8.0)
        self.assertEqual(numeric.power(2.0, -2.0), 0.25)

    def test_unknown_operator_is_rejected(self) -> None:
        from exprcalc import numeric

        with self.assertRaises(KeyError):
            numeric.apply_binary("%", 1.0, 2.0)
        with self.assertRaises(KeyError):
            numeric.apply_unary("!", 1.0)


if __name__ == "__main__":
    unittest.main()
