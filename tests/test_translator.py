"""Tests for translate(), translate_counted() and the phrase formatter."""

from decimal import Decimal
from fractions import Fraction

import pytest

from i18n_light.formatter import (
    coerce_count,
    count_placeholders,
    format_phrase,
    plural_suffix,
    split_counted_args,
)


class TestTranslate:
    """Simple form"""

    def test_plain_phrase(self, i18n):
        assert i18n.translate("greetings.hello") == "Hello"

    def test_placeholder(self, i18n):
        i18n.set_locale("it")
        assert i18n.translate("greetings.hello_name", "Mario") == "Ciao Mario"

    def test_fallback_phrase_is_formatted(self, make_i18n):
        i18n = make_i18n()
        i18n.set_locale("fr")
        assert i18n.translate("greetings.hello_name", "Marie") == "Hello Marie"

    def test_missing_path_is_returned(self, i18n):
        assert i18n.translate("no.exist") == "no.exist"

    def test_surplus_args_are_ignored(self, i18n):
        assert i18n.translate("greetings.hello", "unused") == "Hello"

    def test_missing_args_return_unformatted(self, i18n):
        assert i18n.translate("greetings.hello_name") == "Hello %s"


class TestTranslateCounted:
    """Counted form"""

    def test_zero(self, i18n):
        assert i18n.translate_counted("messages", 0) == "No messages"

    def test_one(self, i18n):
        assert i18n.translate_counted("messages", 1) == "1 message"

    def test_many(self, i18n):
        assert i18n.translate_counted("messages", 2, 2) == "2 messages"

    def test_count_is_not_a_placeholder_value(self, i18n):
        # Only the arguments before the count fill placeholders
        assert i18n.translate_counted("messages", 5) == "%d messages"

    def test_extra_placeholders(self, i18n):
        assert i18n.translate_counted("files", 3, "docs", 3) == "3 files in docs"
        assert i18n.translate_counted("files", "docs", 0) == "No files in docs"

    def test_other_locale(self, i18n):
        i18n.set_locale("it")
        assert i18n.translate_counted("messages", 7, 7) == "7 messaggi"

    def test_counted_fallback(self, i18n):
        i18n.set_locale("fr")
        assert i18n.translate_counted("messages", 1) == "1 message"

    def test_numeric_string_count(self, i18n):
        assert i18n.translate_counted("messages", "1") == "1 message"

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (Decimal(0), "No messages"),
            (Decimal("1.0"), "1 message"),
            (Decimal(2), "2 messages"),
            (Fraction(1, 1), "1 message"),
            (Fraction(3, 1), "3 messages"),
        ],
    )
    def test_decimal_and_fraction_counts(self, i18n, count, expected):
        assert i18n.translate_counted("messages", count, count) == expected

    @pytest.mark.parametrize("count", ["lots", None, object()])
    def test_non_numeric_count_uses_zero_bucket(self, i18n, count):
        assert i18n.translate_counted("messages", count) == "No messages"

    def test_missing_count_uses_zero_bucket(self, i18n):
        assert i18n.translate_counted("messages") == "No messages"

    def test_missing_variant_returns_counted_path(self, i18n):
        assert i18n.translate_counted("greetings", 2) == "greetings.many"


class TestFormatter:
    """Formatter helpers"""

    @pytest.mark.parametrize(
        ("count", "suffix"),
        [(0, "zero"), (1, "one"), (2, "many"), (-1, "many"), (0.5, "many"), (1.0, "one")],
    )
    def test_plural_suffix(self, count, suffix):
        assert plural_suffix(count) == suffix

    def test_coerce_count(self):
        assert coerce_count(3) == 3
        assert coerce_count(" 2.5 ") == 2.5
        assert coerce_count("abc") == 0
        assert coerce_count([1]) == 0
        assert coerce_count(Decimal("2.5")) == 2.5
        assert coerce_count(Decimal("sNaN")) == 0
        assert coerce_count(1j) == 0

    def test_split_counted_args(self):
        assert split_counted_args(("a", "b", 2)) == (["a", "b"], 2)
        assert split_counted_args((1,)) == ([], 1)
        assert split_counted_args(()) == ([], 0)

    @pytest.mark.parametrize(
        ("phrase", "expected"),
        [("Hello", 0), ("%s and %d", 2), ("100%%", 0), ("%5.2f%%", 1), ("%*d", 2)],
    )
    def test_count_placeholders(self, phrase, expected):
        assert count_placeholders(phrase) == expected

    def test_format_phrase(self):
        assert format_phrase("%s has %d items", ["cart", 3]) == "cart has 3 items"
        assert format_phrase("100%%", []) == "100%"
        assert format_phrase("%.1f%%", [12.34]) == "12.3%"

    def test_format_failure_returns_phrase(self):
        assert format_phrase("%d items", ["many"]) == "%d items"
        assert format_phrase("100%", []) == "100%"
