"""
Read views over normalized records.

Pure functions; no storage access. `timestamp` and `level` are stored as
strings and parsed here with `parse_lenient_int`, so junk data sorts as 0
instead of raising. Sorting relies on Python's stable sort: ties keep
input order.
"""

import re
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from models import LeaderboardEntry, LogicalRecord

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_lenient_int(value: Any) -> int:
    """Leading base-10 integer of `value`, or 0 when there is none."""

    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return 0
    m = _LEADING_INT.match(value)
    return int(m.group(1)) if m else 0


def latest_for_user(records: Sequence[LogicalRecord], user_id: str) -> Optional[LogicalRecord]:
    """Most recent record for `user_id` by numeric timestamp, or None."""

    mine = [r for r in records if r.user_id == user_id]
    if not mine:
        return None
    mine.sort(key=lambda r: parse_lenient_int(r.timestamp), reverse=True)
    return mine[0]


def leaderboard(records: Sequence[LogicalRecord]) -> List[LeaderboardEntry]:
    """Max level per user, highest first."""

    best: Dict[str, int] = {}
    for r in records:
        level = parse_lenient_int(r.level)
        if r.user_id not in best or level > best[r.user_id]:
            best[r.user_id] = level

    entries = [LeaderboardEntry(user_id=u, level=lvl) for u, lvl in best.items()]
    entries.sort(key=lambda e: e.level, reverse=True)
    return entries


def count_by_user(records: Sequence[LogicalRecord]) -> Dict[str, int]:
    return dict(Counter(r.user_id for r in records))
