import unittest
from decimal import Decimal
from fractions import Fraction

from bigrational import (
    ONE,
    ZERO,
    BigRational,
    RationalFormatError,
    parse,
    value_of,
    value_of_parts,
)


class ParsingTests(unittest.TestCase):
    def test_simple_values(self):
        self.assertEqual(value_of("0"), ZERO)
        self.assertEqual(value_of("1"), ONE)
        self.assertEqual(value_of("0.0"), ZERO)
        self.assertEqual(value_of("0/1"), ZERO)
        self.assertEqual(value_of("0/2"), ZERO)
        self.assertEqual(value_of(".5"), BigRational(1, 2))
        self.assertEqual(value_of("+7"), BigRational(7))
        self.assertEqual(value_of("3."), BigRational(3))

    def test_decimal_strings(self):
        self.assertEqual(str(value_of("123")), "123")
        self.assertEqual(str(value_of("123.456")), "123.456")
        self.assertEqual(str(value_of("-246/2")), "-123")
        self.assertEqual(str(value_of("123.456/-0.1")), "-1234.56")
        self.assertEqual(str(value_of("1.23456E5")), "123456")
        self.assertEqual(str(value_of("-1.23456E5")), "-123456")
        self.assertEqual(str(value_of("123E5")), "12300000")
        self.assertEqual(str(value_of("-123E5")), "-12300000")
        self.assertEqual(value_of("25e-2"), BigRational(1, 4))

    def test_chained_division(self):
        self.assertEqual(value_of("1/2/3"), BigRational(1, 6))
        self.assertEqual(value_of("1.5/0.5/3"), ONE)
        self.assertEqual(value_of(" 1 / 2 "), BigRational(1, 2))

    def test_repeating_fraction(self):
        self.assertEqual(value_of("0.1[6]"), BigRational(1, 6))
        self.assertEqual(value_of("0.[3]"), BigRational(1, 3))
        self.assertEqual(value_of("1.[3]"), BigRational(4, 3))
        self.assertEqual(value_of("0.[142857]"), BigRational(1, 7))
        self.assertEqual(value_of("-0.[3]"), BigRational(-1, 3))
        self.assertEqual(value_of("0.[3]e1"), BigRational(10, 3))

    def test_value_of_parts(self):
        self.assertEqual(value_of_parts(True, None, None, None, None), ZERO)
        self.assertEqual(value_of_parts(True, "", "", "", ""), ZERO)
        self.assertEqual(value_of_parts(True, "0", "", "", ""), ZERO)
        self.assertEqual(value_of_parts(True, "0", "0", "0", "0"), ZERO)
        self.assertEqual(str(value_of_parts(True, "0", "456", "", "")), "0.456")
        self.assertEqual(str(value_of_parts(True, "123", "45", "", "")), "123.45")
        self.assertEqual(value_of_parts(True, "", "", "3", "").reduce().to_rational_string(), "1/3")
        self.assertEqual(value_of_parts(True, "1", "", "3", "").reduce().to_rational_string(), "4/3")
        self.assertEqual(value_of_parts(True, "1", "2", "3", "").reduce().to_rational_string(), "37/30")
        self.assertEqual(str(value_of_parts(False, "123", "45", "", "")), "-123.45")
        self.assertEqual(str(value_of_parts(True, "123", "45", "", "3")), "123450")
        self.assertEqual(str(value_of_parts(True, "123", "45", "", "-2")), "1.2345")

    def test_malformed_text(self):
        for text in ("", " ", "abc", "1.2.3", "--1", "1e", ".", "1/", "[3]", "1[3]", "0.[]", "1 2/3", "0x10"):
            with self.subTest(text=text):
                with self.assertRaises(RationalFormatError):
                    value_of(text)
        with self.assertRaises(ValueError):
            value_of("one")

    def test_zero_denominator(self):
        for text in ("1/0", "1/0.0", "2/3/0", "5/-0"):
            with self.subTest(text=text):
                with self.assertRaises(ZeroDivisionError):
                    value_of(text)

    def test_parse_requires_text(self):
        with self.assertRaises(TypeError):
            parse(12)

    def test_numeric_values(self):
        self.assertEqual(value_of(0.5), BigRational(1, 2))
        self.assertEqual(value_of(Decimal("0.25")), BigRational(1, 4))
        self.assertEqual(value_of(Fraction(1, 3)), BigRational(1, 3))
        self.assertEqual(value_of(42), BigRational(42))
        with self.assertRaises(TypeError):
            value_of(None)

    def test_rational_string_round_trip(self):
        samples = [
            ZERO,
            ONE,
            BigRational(4, 4),
            BigRational(-2, 3),
            BigRational(22, 7),
            BigRational(10 ** 30 + 1, 3 ** 40),
            BigRational.from_mixed(-5, 1, 8),
        ]
        for value in samples:
            with self.subTest(value=value.to_rational_string()):
                self.assertEqual(value_of(value.to_rational_string()), value)

    def test_very_long_digit_strings(self):
        digits = "9" * 6000
        self.assertEqual(value_of(digits), BigRational(10 ** 6000 - 1))
        self.assertEqual(value_of("0." + digits), BigRational(10 ** 6000 - 1, 10 ** 6000))
        value = BigRational(10 ** 5000 + 1, 7)
        self.assertEqual(value_of(value.to_rational_string()), value)

    def test_decimal_string_round_trip(self):
        for value in (BigRational(1, 4), BigRational(-5, 8), BigRational(123456, 1000), BigRational(7, 1)):
            with self.subTest(value=repr(value)):
                self.assertEqual(value_of(str(value)), value)
        third = value_of(str(BigRational(1, 3)))
        self.assertEqual(third, BigRational(1, 3).with_scale(34))


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
