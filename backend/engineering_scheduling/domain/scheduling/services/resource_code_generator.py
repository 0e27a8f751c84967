"""
Resource Code Generator

Codes look like ``{PREFIX}-{YEAR}-{SEQUENCE}``, e.g. ``PER-2025-0001``.
The prefix is fixed per resource type; the sequence restarts every year.

Numbering is shared state across concurrent creators. ``next_sequence`` only
computes the next number from the codes it is given; the caller must read the
existing codes and insert the new one in the same transaction (the store keeps
``resource_code`` unique so a lost race fails loudly instead of duplicating).
"""

from collections.abc import Iterable
from datetime import date

from ....core.config import settings
from ..value_objects.enums import RESOURCE_TYPE_PREFIXES, ResourceType


def code_pattern(resource_type: ResourceType, year: int | None = None) -> str:
    """Leading part shared by every code of a type and year, e.g. ``EQP-2025-``."""
    year = year or date.today().year
    return f"{RESOURCE_TYPE_PREFIXES[resource_type]}-{year}-"


def generate_code(
    resource_type: ResourceType, sequence: int, year: int | None = None
) -> str:
    """
    Build the resource code for a sequence number.

    Args:
        resource_type: Type that determines the prefix
        sequence: Positive sequence number within the type and year
        year: Code year (defaults to the current year)

    Returns:
        The formatted resource code

    Raises:
        ValueError: If sequence is not positive
    """
    if sequence < 1:
        raise ValueError(f"Sequence must be positive, got {sequence}")
    width = settings.RESOURCE_CODE_SEQUENCE_WIDTH
    return f"{code_pattern(resource_type, year)}{sequence:0{width}d}"


def extract_sequence(code: str) -> int:
    """Sequence number of a code, or 0 when the code is malformed."""
    parts = code.split("-")
    if len(parts) != 3 or not parts[2].isdigit():
        return 0
    return int(parts[2])


def next_sequence(
    existing_codes: Iterable[str], resource_type: ResourceType, year: int | None = None
) -> int:
    """
    Next free sequence for a type and year: max(existing) + 1, or 1 if none.

    Codes of other types or years and malformed codes are ignored.
    """
    pattern = code_pattern(resource_type, year)
    sequences = [
        seq
        for seq in (extract_sequence(code) for code in existing_codes if code.startswith(pattern))
        if seq > 0
    ]
    return max(sequences) + 1 if sequences else 1
