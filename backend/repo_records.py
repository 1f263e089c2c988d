"""
Repository: secretvaults operations for progress records.

This file contains only storage interaction code. It maps
`LogicalRecord`s to wire dicts through `codec` and returns what the
nodes hand back without interpreting it. Keep business rules out of this
module.

Important notes:
- Each call opens its own client via `vault.open_collection`.
- Writes succeed when at least one node acknowledges; ids created on
  any node are merged and deduplicated.
- Backend exceptions are wrapped, never retried.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from codec import encode
from errors import StorageReadFailed, StorageWriteFailed
from models import LogicalRecord
from vault import CollectionFactory, open_collection

logger = logging.getLogger(__name__)


def collect_created_ids(acks: Optional[Sequence[Any]]) -> List[str]:
    """Union of created ids across node acknowledgments, first-seen order.

    Raises `StorageWriteFailed` when no node acknowledged the write.
    """

    ids: Dict[str, None] = {}
    acknowledged = 0
    errors = []
    for ack in acks or []:
        result = ack.get("result") if isinstance(ack, dict) else None
        if not result:
            errors.append(ack.get("error", ack) if isinstance(ack, dict) else ack)
            continue
        acknowledged += 1
        created = (result.get("data") or {}).get("created") or []
        for record_id in created:
            ids.setdefault(str(record_id), None)

    if errors:
        logger.warning("%d node(s) did not acknowledge the write: %s", len(errors), errors)
    if acknowledged == 0:
        raise StorageWriteFailed(f"No node acknowledged the write: {errors}", node_errors=errors)
    return list(ids)


class RecordRepo:
    """Storage access only. No business logic here.

    Responsibilities:
    - Encode `LogicalRecord` -> wire dicts
    - Run init-then-write / init-then-read against the nodes
    - Surface backend failures as `StorageWriteFailed` / `StorageReadFailed`
    """

    def __init__(self, factory: Optional[CollectionFactory] = None):
        self.factory = factory

    async def append(self, records: Sequence[LogicalRecord]) -> List[str]:
        """Write records to the nodes and return the assigned record ids."""

        data = [encode(r) for r in records]
        try:
            async with open_collection(self.factory) as collection:
                acks = await collection.write_to_nodes(data)
        except Exception as e:
            raise StorageWriteFailed(str(e), cause=e) from e

        logger.info("Data written to nodes: %s", acks)
        ids = collect_created_ids(acks)
        logger.info("Uploaded record IDs: %s", ids)
        return ids

    async def fetch_all(self, filter: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Read every record matching `filter` (all records when empty)."""

        try:
            async with open_collection(self.factory) as collection:
                raw = await collection.read_from_nodes(filter or {})
        except Exception as e:
            raise StorageReadFailed(str(e), cause=e) from e
        return list(raw or [])

    async def ping(self) -> None:
        """Open and release a client. Raises on error.

        Used by the top-level `/health` endpoint to validate node reachability.
        """

        async with open_collection(self.factory):
            pass
