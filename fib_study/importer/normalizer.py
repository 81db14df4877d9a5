"""
Row normalization utilities for question import.
"""

from typing import Dict, Mapping, Optional


def normalize_row(row: Mapping[Optional[str], str]) -> Dict[str, str]:
    """
    Lower-case the column names of one raw CSV row.

    Lets headers like "Title", "TITLE" and "title" resolve to the same field.
    Values are returned unchanged. Cells without a header (csv.DictReader
    files them under a None key) are dropped.

    Args:
        row: Mapping of column name to cell value

    Returns:
        New mapping with lower-case keys

    Examples:
        >>> normalize_row({"Title": "Q1", "TYPE": "RFIB"})
        {'title': 'Q1', 'type': 'RFIB'}
    """
    return {key.lower(): value for key, value in row.items() if key is not None}
