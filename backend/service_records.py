"""
Service / facade layer.

This module implements business rules and validation before any storage
interaction. It is free of backend calls of its own: it asks
`RecordRepo` for raw data, runs it through `reconcile.normalize` and
hands the result to `views`. All HTTP routes go through this service.

Key responsibilities:
- protect the system (max batch sizes)
- validate progress updates (required fields, stringified values)
- confirm writes by reading the collection back
- tell "collection is empty" (`NoRecords`) apart from "user not found" (None)
"""

from typing import Dict, List, Optional

from errors import NoRecords
from models import LeaderboardEntry, LogicalRecord, ProgressIn
from reconcile import normalize
from repo_records import RecordRepo
from settings import settings
import views


REQUIRED_FIELDS = ("fitbitid", "dateofupdate", "level")


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


class ProgressService:
    """Business rules + validation + read views.

    Example usage:
        repo = RecordRepo()
        svc = ProgressService(repo)
        await svc.add_progress([ProgressIn(fitbitid="u1", dateofupdate=1, level=3)])
    """

    def __init__(self, repo: RecordRepo):
        self.repo = repo

    def validate(self, item: ProgressIn) -> LogicalRecord:
        """Turn client input into a `LogicalRecord`. Raises `ValueError`."""

        if any(_is_blank(getattr(item, f)) for f in REQUIRED_FIELDS):
            raise ValueError(
                "Missing required field(s). Provide fitbitid, dateofupdate, and level."
            )
        return LogicalRecord(
            user_id=item.fitbitid,
            timestamp=str(item.dateofupdate),
            level=str(item.level),
        )

    async def add_progress(self, items: List[ProgressIn]) -> Dict[str, list]:
        """Validate and append a batch, then read the collection back.

        Returns `createdRecordIds` and `allData`, the first `len(items)`
        records the nodes return after the write.
        """

        # 1) protect the system
        if len(items) == 0:
            raise ValueError("No progress records provided")
        if len(items) > settings.max_batch_size:
            raise ValueError(
                f"Too many records in one request: {len(items)} (max {settings.max_batch_size})"
            )

        # 2) validate everything before writing anything
        records = [self.validate(i) for i in items]

        # 3) write, then confirm with a read-back
        ids = await self.repo.append(records)
        stored = normalize(await self.repo.fetch_all())
        return {
            "createdRecordIds": ids,
            "allData": [r.to_public(include_id=True) for r in stored[: len(records)]],
        }

    async def _all_records(self) -> List[LogicalRecord]:
        raw = await self.repo.fetch_all()
        if not raw:
            raise NoRecords("No NFT records found.")
        return normalize(raw)

    async def latest(self, user_id: str) -> Optional[LogicalRecord]:
        """Latest record for `user_id`; None if the user has none."""

        return views.latest_for_user(await self._all_records(), user_id)

    async def leaderboard(self) -> List[LeaderboardEntry]:
        return views.leaderboard(await self._all_records())

    async def count_by_user(self) -> Dict[str, int]:
        return views.count_by_user(normalize(await self.repo.fetch_all()))

    async def health_check(self) -> None:
        """Perform a lightweight node ping via the repository."""

        await self.repo.ping()
