"""Utility functions for handling exchange ticker symbols.

CSE identifiers carry a share-class suffix after a dot (``JKH.N0000``);
tracked instruments are stored by the bare uppercase prefix (``JKH``).
"""

from typing import Iterable, Optional


def split_symbol(raw_symbol) -> str:
    """Return the uppercase prefix of a raw identifier before the first ``.``.

    Non-string input yields an empty string.
    """
    if not isinstance(raw_symbol, str):
        return ""
    return raw_symbol.strip().split(".", 1)[0].upper()


def match_tracked_symbol(raw_symbol, tracked: Iterable[str]) -> Optional[str]:
    """Map a raw upstream identifier to one of the tracked instrument codes.

    Matching is exact on the prefix before the first dot and
    case-insensitive; ``COMBX`` never matches ``COMB``.

    Args:
        raw_symbol: Identifier from the upstream record (e.g. "jkh.n0000").
        tracked: Tracked instrument codes.

    Returns:
        The tracked code, or None if the instrument is not tracked.
    """
    code = split_symbol(raw_symbol)
    if not code:
        return None
    return code if code in {t.upper() for t in tracked} else None
