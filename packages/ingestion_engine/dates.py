"""
Statement date normalization.

Bank exports disagree on date layout. Formats are tried in a fixed order:
US-style slashes, ISO, then a generic text parse. Nothing here raises;
callers treat ``None`` as a bad row.
"""

import re
import logging
from datetime import date
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def is_ambiguous_date(text: Optional[str]) -> bool:
    """True when a slash date reads validly as both MM/DD and DD/MM."""
    if not text:
        return False
    match = SLASH_DATE.match(text.strip())
    if not match:
        return False
    first, second = int(match.group(1)), int(match.group(2))
    return first != second and 1 <= first <= 12 and 1 <= second <= 12


def parse_date(text: Optional[str]) -> Optional[date]:
    """
    Parse a statement date token into a calendar date.

    Order:
        1. MM/DD/YYYY, or DD/MM/YYYY when the first number cannot be a month
        2. YYYY-MM-DD
        3. pandas' generic parser, for tokens that contain a digit
    """
    if text is None:
        return None

    token = str(text).strip()
    if not token:
        return None

    match = SLASH_DATE.match(token)
    if match:
        first, second, year = (int(g) for g in match.groups())
        parsed = _safe_date(year, first, second)
        if parsed is None and first > 12:
            parsed = _safe_date(year, second, first)
        if parsed is not None:
            if is_ambiguous_date(token):
                logger.debug(f"Ambiguous date {token!r} read as MM/DD/YYYY")
            return parsed

    match = ISO_DATE.match(token)
    if match:
        parsed = _safe_date(*(int(g) for g in match.groups()))
        if parsed is not None:
            return parsed

    # pandas resolves "now"/"today" relative to the clock; a statement date needs digits
    if not any(ch.isdigit() for ch in token):
        return None

    try:
        stamp = pd.to_datetime(token, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None

    if stamp is None or pd.isna(stamp):
        return None
    return stamp.date()
