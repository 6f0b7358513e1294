"""
Code sequence package - range generation, manual entry and parameter blocks.
"""

from barcode_labels.sequence.generator import (
    generate,
    generate_from_fields,
    codes_from_manual_entry,
    parse_int,
    parse_float,
)
from barcode_labels.sequence.text_params import (
    TextParameters,
    ProcessTextResult,
    parse_parameter_block,
    validate_parameters,
    process_text,
)

__all__ = [
    "generate",
    "generate_from_fields",
    "codes_from_manual_entry",
    "parse_int",
    "parse_float",
    "TextParameters",
    "ProcessTextResult",
    "parse_parameter_block",
    "validate_parameters",
    "process_text",
]
