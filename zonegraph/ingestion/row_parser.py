# -*- coding: utf-8 -*-
"""
Row parser for zone CSV records.

Turns one CSV row plus its header into a Zone. Columns are looked up by name,
so reordered headers are fine; a missing expected column or a non-integer
cell in a numeric column raises with the offending column named. No I/O.

Examples:
    header = ['Zone', 'FamilySize', ...]
    zone = parse_zone_row(header, ['Tempe', '4', ...], row_number=2)
"""
# Standard library
import re
from typing import Dict, List, Optional, Sequence

# Config imports (direct)
from config.ingestion_config import (
    INTEGER_PATTERN,
    INT_COLUMNS,
    INT_MAX,
    INT_MIN,
    OPTIONAL_INT_COLUMNS,
    REQUIRED_COLUMNS,
    STR_COLUMNS,
    TRANSIT_AFFIRMATIVE,
    TRANSIT_COLUMN,
    UTILITIES_COLUMN,
    UTILITY_DELIMITER,
    ZONE_COLUMN,
)

# Local
from zonegraph.utils.dataclasses import Zone, ZoneAttributes
from zonegraph.utils.exceptions import InvalidFieldError, MissingColumnError, RowParseError

_INTEGER = re.compile(INTEGER_PATTERN)


def index_header(header: Sequence[str]) -> Dict[str, int]:
    """Map column name -> position (first occurrence wins)."""
    index: Dict[str, int] = {}
    for i, name in enumerate(header):
        index.setdefault(name, i)
    return index


def _cell(index: Dict[str, int], row: Sequence[str], column: str,
          row_number: Optional[int]) -> str:
    if column not in index:
        raise MissingColumnError(column, row_number)
    return row[index[column]]


def parse_int(column: str, value: str, row_number: Optional[int] = None) -> int:
    """
    Parse an integer cell; surrounding whitespace is ignored, empty is invalid.

    Only an optional sign and ASCII digits are accepted (no '1_000', no
    non-ASCII digits), and the value must fit a signed 64-bit integer so the
    store can hold it.
    """
    text = value.strip()
    if not _INTEGER.fullmatch(text):
        raise InvalidFieldError(column, value, row_number)
    number = int(text)
    if not INT_MIN <= number <= INT_MAX:
        raise InvalidFieldError(column, value, row_number,
                                reason="is out of range for a 64-bit integer")
    return number


def parse_bool(value: str) -> bool:
    """True only for the exact affirmative token; anything else is False."""
    return value == TRANSIT_AFFIRMATIVE


def split_utilities(value: str) -> List[str]:
    """
    Split the multi-value Utilities cell.

    Names are stripped, empty names dropped and repeats collapsed (first
    occurrence keeps its position), so '' or 'Water,,Water' never produce an
    empty-named utility or a double count.
    """
    names = (part.strip() for part in value.split(UTILITY_DELIMITER))
    return list(dict.fromkeys(name for name in names if name))


def parse_zone_row(header: Sequence[str], row: Sequence[str],
                   row_number: Optional[int] = None) -> Zone:
    """
    Parse one CSV row into a Zone (without buildings).

    Args:
        header: Column names in file order
        row: Cell values, same arity as header
        row_number: 1-based line number in the source, used in error messages

    Returns:
        Zone with attributes and utilities filled in

    Raises:
        RowParseError: Header/row arity mismatch
        MissingColumnError: A required column is not in the header
        InvalidFieldError: A numeric column holds a non-integer value
    """
    if len(header) != len(row):
        raise RowParseError(
            f"expected {len(header)} cells, got {len(row)}", row_number
        )

    index = index_header(header)
    for column in REQUIRED_COLUMNS:
        if column not in index:
            raise MissingColumnError(column, row_number)

    values = {}
    for column in INT_COLUMNS:
        values[column] = parse_int(column, _cell(index, row, column, row_number), row_number)
    for column in STR_COLUMNS:
        values[column] = _cell(index, row, column, row_number)
    for column in OPTIONAL_INT_COLUMNS:
        if column in index:
            values[column] = parse_int(column, row[index[column]], row_number)

    values[TRANSIT_COLUMN] = parse_bool(_cell(index, row, TRANSIT_COLUMN, row_number))

    name = _cell(index, row, ZONE_COLUMN, row_number)
    if not name.strip():
        raise RowParseError(f"empty {ZONE_COLUMN} name", row_number)

    return Zone(
        name=name,
        attributes=ZoneAttributes(**values),
        utilities=split_utilities(_cell(index, row, UTILITIES_COLUMN, row_number)),
    )
