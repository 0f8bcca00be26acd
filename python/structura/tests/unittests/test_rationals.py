
import random
import sys
import unittest

from structura.moremath.rationals import (NAN, NEG_INF, ONE, POS_INF,
                                          UINT32_MAX, ZERO, Fraction,
                                          Ordering, Sign, Truth)


class TestFractionConstruction(unittest.TestCase):
    def test_reduction(self):
        self.assertEqual(Fraction.make(6, 24, Sign.PLUS), Fraction(1, 4))
        self.assertEqual(Fraction(6, 24).numerator, 1)
        self.assertEqual(Fraction(6, 24).denominator, 4)

    def test_reduction_is_idempotent(self):
        rng = random.Random(9)
        for _ in range(200):
            numerator = rng.randint(1, 1000)
            denominator = rng.randint(1, 1000)
            factor = rng.randint(1, 1000)
            sign = rng.choice([Sign.PLUS, Sign.MINUS])
            self.assertEqual(
                Fraction(numerator * factor, denominator * factor, sign),
                Fraction(numerator, denominator, sign))

    def test_sentinels(self):
        self.assertEqual(Fraction(5, 7, Sign.NAN), NAN)
        self.assertEqual(Fraction(3, 0, Sign.PLUS), POS_INF)
        self.assertEqual(Fraction(3, 0, Sign.MINUS), NEG_INF)
        self.assertTrue(POS_INF.is_pos_inf())
        self.assertTrue(NEG_INF.is_neg_inf())
        self.assertTrue(NAN.is_nan())
        self.assertFalse(NAN.is_finite())
        self.assertFalse(POS_INF.is_finite())

    def test_zero_is_canonical(self):
        negative_zero = Fraction(0, 5, Sign.MINUS)
        self.assertEqual(negative_zero, ZERO)
        self.assertIs(negative_zero.sign, Sign.PLUS)
        self.assertEqual(negative_zero.denominator, 0)
        self.assertTrue(ZERO.is_zero())
        self.assertTrue(ZERO.is_finite())
        self.assertFalse(ZERO.is_positive())

    def test_zero_over_zero_is_infinity(self):
        self.assertEqual(Fraction(0, 0, Sign.PLUS), POS_INF)

    def test_from_int(self):
        self.assertEqual(Fraction.from_int(-3), Fraction(3, 1, Sign.MINUS))
        self.assertEqual(Fraction.from_int(0), ZERO)
        with self.assertRaises(ValueError):
            Fraction.from_int(1 << 32)

    def test_invalid_components(self):
        for arguments in [(-1, 2), (1, 1 << 32), (1.5, 2), (True, 2)]:
            with self.assertRaises(ValueError):
                Fraction(*arguments)
        with self.assertRaises(ValueError):
            Fraction(1, 2, "+")

    def test_hash_matches_equality(self):
        self.assertEqual(len({Fraction(2, 4), Fraction(1, 2), Fraction(3, 6)}), 1)
        self.assertEqual(hash(NAN), hash(Fraction(1, 1, Sign.NAN)))

    def test_strings(self):
        self.assertEqual(str(Fraction(1, 4)), "1/4")
        self.assertEqual(str(Fraction(1, 4, Sign.MINUS)), "-1/4")
        self.assertEqual(str(Fraction(6, 2, Sign.MINUS)), "-3")
        self.assertEqual(str(ZERO), "0")
        self.assertEqual(str(NAN), "NaN")
        self.assertEqual(str(POS_INF), "+inf")
        self.assertEqual(str(NEG_INF), "-inf")
        self.assertEqual(repr(Fraction(6, 24)), "Fraction(1, 4, Sign.PLUS)")


class TestFractionArithmetic(unittest.TestCase):
    def test_add(self):
        self.assertEqual(Fraction(1, 3).add(Fraction(7, 4)), Fraction(25, 12))
        self.assertEqual(Fraction(1, 2) + Fraction(1, 2, Sign.MINUS), ZERO)
        self.assertEqual(Fraction(1, 2, Sign.MINUS) + Fraction(1, 3),
                         Fraction(1, 6, Sign.MINUS))
        self.assertEqual(1 - Fraction(1, 3), Fraction(2, 3))
        self.assertEqual(Fraction(1, 3) + 1, Fraction(4, 3))

    def test_mul(self):
        self.assertEqual(Fraction(4, 3).mul(Fraction(3, 4)), ONE)
        self.assertTrue((Fraction(4, 3) * Fraction(3, 4)).is_one())
        self.assertEqual(Fraction(2, 3) * Fraction(9, 4, Sign.MINUS),
                         Fraction(3, 2, Sign.MINUS))
        self.assertEqual(2 * Fraction(1, 4), Fraction(1, 2))

    def test_div(self):
        self.assertEqual(Fraction(1, 3).div(ZERO), POS_INF)
        self.assertEqual(Fraction(1, 3, Sign.MINUS) / ZERO, NEG_INF)
        self.assertEqual(ZERO / ZERO, NAN)
        self.assertEqual(POS_INF / NEG_INF, NAN)
        self.assertEqual(ONE / POS_INF, ZERO)
        self.assertEqual(POS_INF / Fraction(2), POS_INF)
        self.assertEqual(Fraction(1, 2) / Fraction(3, 4), Fraction(2, 3))
        self.assertEqual(1 / Fraction(1, 5), Fraction(5))

    def test_sentinel_arithmetic(self):
        self.assertEqual(POS_INF + NEG_INF, NAN)
        self.assertEqual(POS_INF + POS_INF, POS_INF)
        self.assertEqual(POS_INF - Fraction(5), POS_INF)
        self.assertEqual(ZERO * POS_INF, NAN)
        self.assertEqual(NEG_INF * Fraction(2, 1, Sign.MINUS), POS_INF)
        self.assertEqual(NAN + ONE, NAN)
        self.assertEqual(NAN * ZERO, NAN)

    def test_neg_and_inv(self):
        self.assertIs(ZERO.neg(), ZERO)
        self.assertEqual(-POS_INF, NEG_INF)
        self.assertEqual(-Fraction(1, 2), Fraction(1, 2, Sign.MINUS))
        self.assertEqual(+Fraction(1, 2), Fraction(1, 2))
        self.assertEqual(ZERO.inv(), POS_INF)
        self.assertEqual(NEG_INF.inv(), ZERO)
        self.assertEqual(Fraction(2, 3, Sign.MINUS).inv(),
                         Fraction(3, 2, Sign.MINUS))
        self.assertEqual(NAN.inv(), NAN)

    def test_inverse_laws(self):
        rng = random.Random(12)
        for _ in range(200):
            value = Fraction(rng.randint(1, 10000), rng.randint(1, 10000),
                             rng.choice([Sign.PLUS, Sign.MINUS]))
            self.assertEqual(value.add(value.neg()), ZERO)
            self.assertEqual(value.mul(value.inv()), ONE)

    def test_scale_by_int(self):
        self.assertEqual(Fraction(1, 3).scale_by_int(-6),
                         Fraction(2, 1, Sign.MINUS))
        self.assertEqual(Fraction(1, 3).scale_by_int(0), ZERO)
        self.assertEqual(POS_INF.scale_by_int(0), NAN)
        self.assertEqual(POS_INF.scale_by_int(-2), NEG_INF)
        self.assertEqual(NAN.scale_by_int(3), NAN)

    def test_saturation(self):
        largest = Fraction(UINT32_MAX)
        self.assertEqual(largest + ONE, POS_INF)
        self.assertEqual(-largest - ONE, NEG_INF)
        self.assertEqual(largest.scale_by_int(2), POS_INF)
        self.assertEqual(Fraction(1, UINT32_MAX) * Fraction(1, 2), ZERO)
        self.assertEqual(Fraction(1, UINT32_MAX) * Fraction(1, UINT32_MAX),
                         ZERO)

    def test_unrepresentable_result_is_rounded(self):
        above_one = (Fraction(UINT32_MAX, UINT32_MAX - 1)
                     * Fraction(UINT32_MAX - 2, UINT32_MAX - 4))
        self.assertFalse(above_one.is_inf())
        self.assertIs(above_one.gt(ONE), Truth.TRUE)
        self.assertIs(above_one.gt(Fraction(1000)), Truth.FALSE)
        self.assertAlmostEqual(above_one.to_double(), 1.0, places=8)
        below_one = (Fraction(UINT32_MAX - 1, UINT32_MAX)
                     * Fraction(UINT32_MAX - 4, UINT32_MAX - 2))
        self.assertFalse(below_one.is_zero())
        self.assertIs(below_one.lt(ONE), Truth.TRUE)
        self.assertAlmostEqual(below_one.to_double(), 1.0, places=8)

    def test_tiny_sum_is_rounded_not_zero(self):
        total = Fraction(1, UINT32_MAX) + Fraction(1, UINT32_MAX - 1)
        self.assertFalse(total.is_zero())
        self.assertLessEqual(total.numerator, UINT32_MAX)
        self.assertLessEqual(total.denominator, UINT32_MAX)
        self.assertAlmostEqual(total.to_double(), 2 / UINT32_MAX, delta=1e-15)

    def test_large_value_is_rounded_on_numerator(self):
        large = Fraction(UINT32_MAX - 1, 3).scale_by_int(2)
        self.assertFalse(large.is_inf())
        self.assertLessEqual(large.numerator, UINT32_MAX)
        self.assertAlmostEqual(large.to_double() / ((UINT32_MAX - 1) * 2 / 3),
                               1.0, places=8)
        self.assertEqual(Fraction(UINT32_MAX - 1, 3).scale_by_int(4), POS_INF)

    def test_to_double(self):
        self.assertEqual(Fraction(1, 4).to_double(), 0.25)
        self.assertEqual(float(Fraction(1, 2, Sign.MINUS)), -0.5)
        self.assertEqual(ZERO.to_double(), 0.0)
        self.assertEqual(ONE.to_double(), 1.0)
        self.assertEqual(NAN.to_double(), -sys.float_info.max)
        self.assertEqual(NEG_INF.to_double(), -sys.float_info.max)
        self.assertEqual(POS_INF.to_double(), sys.float_info.max)


class TestFractionComparison(unittest.TestCase):
    def test_compare(self):
        self.assertIs(Fraction(1, 3).compare(Fraction(4, 7)), Ordering.LESS)
        self.assertIs(Fraction(4, 7).compare(Fraction(1, 3)), Ordering.GREATER)
        self.assertIs(Fraction(2, 4).compare(Fraction(1, 2)), Ordering.EQUAL)
        self.assertIs(ZERO.compare(Fraction(1, 2, Sign.MINUS)),
                      Ordering.GREATER)
        self.assertIs(NEG_INF.compare(POS_INF), Ordering.LESS)
        self.assertIs(Fraction(10 ** 9).compare(POS_INF), Ordering.LESS)
        self.assertIs(Fraction(10 ** 9).compare(NEG_INF), Ordering.GREATER)

    def test_incomparable(self):
        for other in (ZERO, ONE, POS_INF, NAN):
            self.assertIs(NAN.compare(other), Ordering.INCOMPARABLE)
            self.assertIs(NAN.eq(other), Truth.UNKNOWN)
        self.assertIs(POS_INF.compare(POS_INF), Ordering.INCOMPARABLE)
        self.assertIs(NEG_INF.lt(NEG_INF), Truth.UNKNOWN)

    def test_truth_values(self):
        self.assertIs(Fraction(1, 3).lt(Fraction(1, 2)), Truth.TRUE)
        self.assertIs(Fraction(1, 3).ge(Fraction(1, 2)), Truth.FALSE)
        self.assertIs(Fraction(1, 2).le(Fraction(2, 4)), Truth.TRUE)
        self.assertIs(Fraction(1, 2).ne(Fraction(2, 4)), Truth.FALSE)
        self.assertIs(NAN.ne(ONE), Truth.UNKNOWN)
        self.assertIs(ONE.gt(NAN), Truth.UNKNOWN)
        self.assertFalse(Truth.UNKNOWN)
        self.assertTrue(Truth.TRUE)
        self.assertIs(Truth.UNKNOWN.negated(), Truth.UNKNOWN)

    def test_rich_comparisons(self):
        self.assertTrue(Fraction(1, 2) < 1)
        self.assertTrue(Fraction(3, 2) >= ONE)
        self.assertTrue(NEG_INF <= ZERO)
        self.assertFalse(NAN < ONE)
        self.assertFalse(NAN >= ONE)
        self.assertFalse(POS_INF > POS_INF)
        self.assertEqual(sorted([ONE, Fraction(1, 3), NEG_INF, ZERO]),
                         [NEG_INF, ZERO, Fraction(1, 3), ONE])

    def test_equality_is_structural(self):
        self.assertEqual(NAN, NAN)
        self.assertNotEqual(POS_INF, NEG_INF)
        self.assertNotEqual(Fraction(1, 2), Fraction(1, 2, Sign.MINUS))
        self.assertNotEqual(ONE, 1)
