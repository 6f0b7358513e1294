"""
Key:value parameter blocks that generate codes into the manual entry.

Example block:

    prefix: SN-
    range: 1-100
    increment: 5
    padding: 4
"""

from dataclasses import dataclass

from barcode_labels.exceptions import InputValidationError
from barcode_labels.logger import get_logger
from barcode_labels.sequence.generator import generate, padding_too_large, parse_int

logger = get_logger(__name__)

EMPTY_PARAMETERS = "Please enter processing parameters."
INVALID_RANGE = "Invalid range. Please use the format: range: 1-100"
START_AFTER_END = "Start of range cannot be greater than end."
INVALID_INCREMENT = "Increment must be a positive number."
INVALID_PADDING = "Padding must be a non-negative number."


@dataclass(frozen=True)
class TextParameters:
    """Validated generator parameters taken from a parameter block."""
    start: int
    end: int
    increment: int = 1
    prefix: str = ""
    suffix: str = ""
    padding: int = 0


@dataclass(frozen=True)
class ProcessTextResult:
    """Outcome of processing a parameter block."""
    manual_data: str
    generated_codes: list[str]
    parameters: str = ""


def parse_parameter_block(text: str) -> dict[str, str]:
    """
    Split text into a mapping of lowercase key to value.

    Each line is split on its first colon. Lines without a colon are
    ignored and a repeated key keeps its last value.
    """
    params: dict[str, str] = {}
    for line in text.split("\n"):
        key, sep, value = line.partition(":")
        if key and sep:
            params[key.strip().lower()] = value.strip()
    return params


def _parse_range(value: str | None) -> tuple[int, int] | None:
    if not value:
        return None
    parts = value.split("-")
    if len(parts) != 2:
        return None
    start, end = parse_int(parts[0]), parse_int(parts[1])
    if start is None or end is None:
        return None
    return start, end


def validate_parameters(text: str, max_padding: int | None = None) -> TextParameters:
    """
    Parse and validate a parameter block.

    Checks run in a fixed order and the first failure is reported:
    empty input, range, start after end, increment, padding.

    Raises:
        InputValidationError: With the user-facing message of the failed check
    """
    text = (text or "").strip()
    if not text:
        raise InputValidationError("empty_parameters", EMPTY_PARAMETERS)

    params = parse_parameter_block(text)

    bounds = _parse_range(params.get("range"))
    if bounds is None:
        raise InputValidationError("invalid_range", INVALID_RANGE, {"range": params.get("range")})
    start, end = bounds

    if start > end:
        raise InputValidationError("start_after_end", START_AFTER_END, {"start": start, "end": end})

    increment = 1
    if params.get("increment"):
        increment = parse_int(params["increment"])
        if increment is None or increment < 1:
            raise InputValidationError(
                "invalid_increment", INVALID_INCREMENT, {"increment": params["increment"]}
            )

    padding = 0
    if params.get("padding"):
        padding = parse_int(params["padding"])
        if padding is None or padding < 0:
            raise InputValidationError(
                "invalid_padding", INVALID_PADDING, {"padding": params["padding"]}
            )
        if max_padding is not None and padding > max_padding:
            raise padding_too_large(padding, max_padding)

    return TextParameters(
        start=start,
        end=end,
        increment=increment,
        prefix=params.get("prefix", ""),
        suffix=params.get("suffix", ""),
        padding=padding
    )


def append_codes(manual_data: str | None, codes: list[str]) -> str:
    """Append codes to existing manual entry text, one per line."""
    existing = (manual_data or "").strip()
    return (existing + "\n" if existing else "") + "\n".join(codes)


def process_text(
    text: str,
    manual_data: str = "",
    max_codes: int | None = None,
    max_padding: int | None = None
) -> ProcessTextResult:
    """
    Generate codes from a parameter block and append them to the manual entry.

    Args:
        text: Parameter block
        manual_data: Current manual entry text
        max_codes: Reject ranges producing more codes than this
        max_padding: Reject padding values above this

    Returns:
        Result with the new manual entry text and cleared parameter input
    """
    params = validate_parameters(text, max_padding)

    codes = generate(
        params.start,
        params.end,
        params.increment,
        prefix=params.prefix,
        suffix=params.suffix,
        padding=params.padding,
        max_codes=max_codes
    )

    logger.info("Parameter block processed", extra={
        "start": params.start,
        "end": params.end,
        "increment": params.increment,
        "generated": len(codes)
    })

    return ProcessTextResult(
        manual_data=append_codes(manual_data, codes),
        generated_codes=codes
    )
