"""Tests for storefront.price module."""

import unittest

from storefront.price import coerce_price_input, effective_price, normalize_price, parse_price_input


class TestNormalizePrice(unittest.TestCase):
    """Test normalization of heterogeneous price fields."""

    def test_number_returned_unchanged(self):
        """Test finite non-negative numbers pass through."""
        self.assertEqual(normalize_price(15), 15)
        self.assertEqual(normalize_price(12.75), 12.75)
        self.assertEqual(normalize_price(0), 0)

    def test_currency_text(self):
        """Test currency symbols and thousands separators are stripped."""
        self.assertEqual(normalize_price("$10.00"), 10.0)
        self.assertEqual(normalize_price("$1,234.50"), 1234.5)
        self.assertEqual(normalize_price("$1,299.00"), 1299.0)
        self.assertEqual(normalize_price("€ 7"), 7.0)

    def test_multiple_decimal_points_parse_leading_number(self):
        """Test only the leading number is parsed."""
        self.assertEqual(normalize_price("12.5.3"), 12.5)

    def test_invalid_values_become_zero(self):
        """Test unreadable prices degrade to the 0 sentinel."""
        self.assertEqual(normalize_price("abc"), 0)
        self.assertEqual(normalize_price(""), 0)
        self.assertEqual(normalize_price(None), 0)
        self.assertEqual(normalize_price([10]), 0)
        self.assertEqual(normalize_price({"amount": 10}), 0)

    def test_negative_values_become_zero(self):
        """Test negative numbers and negative text yield 0."""
        self.assertEqual(normalize_price(-5), 0)
        self.assertEqual(normalize_price("-5.00"), 0)

    def test_non_finite_and_bool_become_zero(self):
        """Test NaN, infinity and booleans are not prices."""
        self.assertEqual(normalize_price(float("nan")), 0)
        self.assertEqual(normalize_price(float("inf")), 0)
        self.assertEqual(normalize_price(True), 0)

    def test_out_of_range_integer_becomes_zero(self):
        """Test integers beyond float range are not prices."""
        self.assertEqual(normalize_price(10**400), 0)
        self.assertEqual(normalize_price(-(10**400)), 0)
        self.assertEqual(effective_price({"discountPrice": 10**400, "oldPrice": 20}), 20)


class TestEffectivePrice(unittest.TestCase):
    """Test the discounted-over-original price rule."""

    def test_discount_takes_precedence(self):
        """Test discountPrice wins when both prices are present."""
        self.assertEqual(effective_price({"discountPrice": "$18.50", "oldPrice": 24.99}), 18.5)

    def test_old_price_fallback(self):
        """Test oldPrice is used without a discount."""
        self.assertEqual(effective_price({"oldPrice": 20}), 20)

    def test_zero_or_invalid_discount_falls_through(self):
        """Test a zero or unreadable discount counts as absent."""
        self.assertEqual(effective_price({"discountPrice": 0, "oldPrice": 20}), 20)
        self.assertEqual(effective_price({"discountPrice": "free", "oldPrice": "$9"}), 9.0)

    def test_unpriced_item(self):
        """Test items without prices yield 0."""
        self.assertEqual(effective_price({"name": "No price"}), 0)
        self.assertEqual(effective_price({"price": 15}), 0)

    def test_non_mapping_item(self):
        """Test non-mapping catalog entries yield 0."""
        self.assertEqual(effective_price(None), 0)
        self.assertEqual(effective_price("not a book"), 0)

    def test_item_not_mutated(self):
        """Test computing the price leaves the item untouched."""
        item = {"discountPrice": "$1,234.50", "oldPrice": "$1,500.00"}
        original = dict(item)
        self.assertEqual(effective_price(item), 1234.5)
        self.assertEqual(item, original)


class TestParsePriceInput(unittest.TestCase):
    """Test integer parsing of price input fields."""

    def test_integer_text(self):
        """Test plain and padded integers."""
        self.assertEqual(parse_price_input("15"), 15)
        self.assertEqual(parse_price_input(" 20 "), 20)
        self.assertEqual(parse_price_input("-3"), -3)

    def test_trailing_text_ignored(self):
        """Test digits after the leading integer are ignored."""
        self.assertEqual(parse_price_input("15.99"), 15)
        self.assertEqual(parse_price_input("25 dollars"), 25)

    def test_unreadable_input(self):
        """Test unreadable input returns None."""
        self.assertIsNone(parse_price_input(""))
        self.assertIsNone(parse_price_input("abc"))
        self.assertIsNone(parse_price_input(None))
        self.assertIsNone(parse_price_input(True))

    def test_numbers(self):
        """Test numeric input is accepted."""
        self.assertEqual(parse_price_input(7), 7)
        self.assertEqual(parse_price_input(7.9), 7)


class TestCoercePriceInput(unittest.TestCase):
    """Test coercion of price input into its stored form."""

    def test_empty_stays_empty(self):
        """Test empty input means "use catalog bound"."""
        self.assertEqual(coerce_price_input(""), "")
        self.assertEqual(coerce_price_input(None), "")

    def test_valid_input(self):
        """Test valid input is stored as an integer string."""
        self.assertEqual(coerce_price_input("25"), "25")
        self.assertEqual(coerce_price_input("007"), "7")
        self.assertEqual(coerce_price_input(30), "30")

    def test_negative_clamped(self):
        """Test negative input is clamped to 0."""
        self.assertEqual(coerce_price_input("-5"), "0")

    def test_unreadable_input_becomes_zero(self):
        """Test non-numeric input is coerced to 0 rather than rejected."""
        self.assertEqual(coerce_price_input("abc"), "0")


if __name__ == "__main__":
    unittest.main(verbosity=2)
