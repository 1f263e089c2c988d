"""
Pydantic models used across the backend.

Two families live here:
- input shapes validated at the FastAPI route boundary (`ProgressIn`)
- `LogicalRecord`, the canonical progress record the codec, views and
  service pass around.

Guidelines:
- Keep models minimal and stable. Storage wire shapes are plain dicts
  produced by `codec`; they do not get a model.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional, Union


class ProgressIn(BaseModel):
        """Input shape for a progress update sent by clients.

        Fields are optional so the service, not pydantic, reports which
        ones are missing (400 instead of 422).

        Fields:
        - `fitbitid`: user identifier, stored in plaintext.
        - `dateofupdate`: update marker (date or counter). Secret-shared.
        - `level`: numeric level. Secret-shared.
        """

        fitbitid: Optional[str] = None
        dateofupdate: Optional[Union[int, str]] = None
        level: Optional[Union[int, str]] = None


class LogicalRecord(BaseModel):
        """One progress event. Immutable; updates are new records."""

        model_config = ConfigDict(frozen=True)

        user_id: str
        timestamp: str
        level: str
        record_id: Optional[str] = None

        def to_public(self, include_id: bool = False) -> dict:
                """Shape returned to API callers, using the schema field names.

                `include_id` adds the stored `_id`, as the write read-back does.
                """

                out = {
                        "fitbitid": self.user_id,
                        "dateofupdate": self.timestamp,
                        "level": self.level,
                }
                if include_id:
                        out["_id"] = self.record_id
                return out


class LeaderboardEntry(BaseModel):
        user_id: str
        level: int
