"""Placeholder substitution and plural suffix selection.

Phrases use printf-style placeholders ("%s", "%d", "%.2f", "%%"),
substituted positionally with Python's % operator.
"""

from collections.abc import Sequence
from numbers import Complex, Number, Real
import re
from typing import Any

from i18n_light.core.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_RE = re.compile(
    r"%(?P<flags_width>[#0\- +]*(?:\*|\d+)?(?:\.(?:\*|\d+))?)[hlL]?"
    r"(?P<conversion>[diouxXeEfFgGcrsa%])"
)

ZERO_SUFFIX = "zero"
ONE_SUFFIX = "one"
MANY_SUFFIX = "many"


def count_placeholders(phrase: str) -> int:
    """Number of positional values the phrase's placeholders consume."""
    count = 0
    for match in PLACEHOLDER_RE.finditer(phrase):
        if match.group("conversion") == "%":
            continue
        count += 1 + match.group("flags_width").count("*")
    return count


def format_phrase(phrase: str, args: Sequence[Any]) -> str:
    """Substitute positional args into the phrase's placeholders.

    Surplus args are ignored. Other mismatches are not validated up
    front; if the substitution fails the unformatted phrase is returned.
    """
    try:
        return phrase % tuple(args[: count_placeholders(phrase)])
    except (TypeError, ValueError) as e:
        logger.warning(
            "phrase_format_failed",
            phrase=phrase,
            arg_count=len(args),
            error=str(e),
        )
        return phrase


def coerce_count(value: Any) -> float:
    """Coerce a count argument to a number.

    Real numbers (including Decimal and Fraction) pass through, numeric
    strings are parsed, anything else counts as zero.
    """
    if isinstance(value, Real) or (
        isinstance(value, Number) and not isinstance(value, Complex)
    ):
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError):
            pass
    elif isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    logger.warning("plural_count_invalid", count=repr(value))
    return 0.0


def plural_suffix(count: float) -> str:
    """Select the zero/one/many variant key for a count."""
    if count == 0:
        return ZERO_SUFFIX
    if count == 1:
        return ONE_SUFFIX
    return MANY_SUFFIX


def split_counted_args(args: Sequence[Any]) -> tuple[list[Any], float]:
    """Split counted-call args into (placeholder values, count).

    The count is always the last argument and is never a placeholder
    value. With no arguments at all the count is treated as zero.
    """
    if not args:
        logger.warning("plural_count_invalid", count=None)
        return [], 0.0
    return list(args[:-1]), coerce_count(args[-1])
