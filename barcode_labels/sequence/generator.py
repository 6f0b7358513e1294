"""
Code sequence generation from numeric ranges and manual text entry.
"""

import math
import re

from barcode_labels.exceptions import InputValidationError
from barcode_labels.logger import get_logger
from barcode_labels.models.labels import SequenceInput

logger = get_logger(__name__)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")

INVALID_RANGE_FIELDS = "Please ensure Start, End, and Increment are valid numbers."
INVALID_PADDING = "Padding must be a non-negative number."


def padding_too_large(padding: int, max_padding: int) -> InputValidationError:
    return InputValidationError(
        "padding_too_large",
        f"Padding cannot be greater than {max_padding}.",
        {"padding": padding, "limit": max_padding}
    )


def parse_int(text: str | None) -> int | None:
    """Parse an integer form value. Returns None unless the whole value is an integer."""
    if text is None:
        return None
    text = text.strip()
    if not _INTEGER_RE.match(text):
        return None
    try:
        return int(text)
    except ValueError:
        # Digit strings past the interpreter's int conversion limit
        return None


def parse_float(text: str | None) -> float | None:
    """Parse a decimal form value. Returns None for empty or non-numeric values."""
    if text is None or not text.strip():
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def pad_number(number: int, padding: int) -> str:
    """Left-pad the decimal form of number with zeros to at least padding characters."""
    number_part = str(number)
    if padding > 0:
        number_part = number_part.zfill(padding)
    return number_part


def sequence_length(start: int, end: int, increment: int) -> int:
    """Number of codes a range produces."""
    if start > end:
        return 0
    return (end - start) // increment + 1


def generate(
    start: int,
    end: int,
    increment: int = 1,
    prefix: str = "",
    suffix: str = "",
    padding: int = 0,
    max_codes: int | None = None
) -> list[str]:
    """
    Generate codes from start to end inclusive.

    Args:
        start: First number
        end: Last number; the sequence stops at or before it
        increment: Step between numbers (values below 1 mean 1)
        prefix: Text placed before each number
        suffix: Text placed after each number
        padding: Minimum width of the number part, zero-padded
        max_codes: Reject ranges producing more codes than this

    Returns:
        Ordered list of codes; empty when start > end

    Example:
        >>> generate(1, 10, 3, padding=3)
        ['001', '004', '007', '010']
    """
    if increment < 1:
        increment = 1

    count = sequence_length(start, end, increment)
    if max_codes is not None and count > max_codes:
        raise InputValidationError(
            "too_many_codes",
            f"Range produces {count} codes; the limit is {max_codes}.",
            {"count": count, "limit": max_codes}
        )

    return [
        f"{prefix}{pad_number(number, padding)}{suffix}"
        for number in range(start, end + 1, increment)
    ]


def generate_from_fields(
    fields: SequenceInput,
    max_codes: int | None = None,
    max_padding: int | None = None
) -> list[str]:
    """
    Generate codes from the range fields of the form.

    A start greater than end yields an empty list rather than an error.

    Raises:
        InputValidationError: If start or end is not an integer, or padding is
            negative, non-numeric or above max_padding
    """
    start = parse_int(fields.start)
    end = parse_int(fields.end)
    if start is None or end is None:
        raise InputValidationError(
            "invalid_range_fields",
            INVALID_RANGE_FIELDS,
            {"start": fields.start, "end": fields.end}
        )

    increment = parse_int(fields.increment)
    if increment is None or increment < 1:
        increment = 1

    padding = 0
    if fields.padding.strip():
        padding = parse_int(fields.padding)
        if padding is None or padding < 0:
            raise InputValidationError("invalid_padding", INVALID_PADDING, {"padding": fields.padding})
        if max_padding is not None and padding > max_padding:
            raise padding_too_large(padding, max_padding)

    codes = generate(
        start,
        end,
        increment,
        prefix=fields.prefix,
        suffix=fields.suffix,
        padding=padding,
        max_codes=max_codes
    )

    logger.debug("Generated code sequence", extra={
        "start": start,
        "end": end,
        "increment": increment,
        "count": len(codes)
    })

    return codes


def codes_from_manual_entry(text: str | None) -> list[str]:
    """Each non-blank line of the manual entry, trimmed, is one code."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]
