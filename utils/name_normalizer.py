"""
Salesperson Name Normalizer
Makes the same person recognizable across the attendance and sales exports.
"""
import re

import pandas as pd

from config import NON_PERSON_LABELS, NON_PERSON_PREFIXES

# "12-3 " employee/route code in front of the name (possibly repeated)
CODE_PREFIX_PATTERN = re.compile(r'^(?:\d+-\d+\s+)+')

# "(FUNCIONARIO)" role suffix, possibly several
ROLE_SUFFIX_PATTERN = re.compile(r'(?:\s*\([^)]*\))+$')


def _strip_once(name):
    name = name.strip()
    name = CODE_PREFIX_PATTERN.sub('', name)
    name = ROLE_SUFFIX_PATTERN.sub('', name)
    return name.strip()


def normalize_name(name):
    """
    Normalize a raw salesperson label.

    Removes the leading code prefix and the trailing parenthetical role,
    then trims. Repeats until nothing changes so the result is stable
    under a second call.

    Args:
        name: Raw label from the first column of a CSV row

    Returns:
        Normalized name, or "" for empty/null input
    """
    if name is None or (not isinstance(name, str) and pd.isna(name)):
        return ""

    name = str(name)
    while True:
        stripped = _strip_once(name)
        if stripped == name:
            return stripped
        name = stripped


def is_non_person_label(label):
    """True for totals, repeated headers and other rows that are not a person."""
    lowered = (label or "").strip().lower()
    if not lowered:
        return True
    if lowered in NON_PERSON_LABELS:
        return True
    return lowered.startswith(NON_PERSON_PREFIXES)


def salesperson_key(label):
    """Normalized name for a data row, or "" when the row must be skipped."""
    if is_non_person_label(label):
        return ""
    return normalize_name(label)
