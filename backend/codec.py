"""
Record codec: `LogicalRecord` <-> storage wire dicts.

On write, `timestamp` and `level` are wrapped in an `%allot` marker so
the storage client secret-shares them across nodes; `fitbitid` stays in
plaintext so it can be filtered on. On read, a field arrives either as a
plain scalar (the client unified the node shares), as a `{"%share": value}`
container when shares were read without unifying, or not at all when
nodes failed. `resolve_field` turns that
into an explicit `FieldValue` before anything else looks at it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from errors import MalformedRecord
from models import LogicalRecord

USER_FIELD = "fitbitid"
TIMESTAMP_FIELD = "dateofupdate"
LEVEL_FIELD = "level"
ID_FIELD = "_id"

ALLOT_KEY = "%allot"
SHARE_KEY = "%share"

MISSING = "Missing"


class FieldKind(Enum):
    PLAIN = "plain"
    SHARED = "shared"
    MISSING = "missing"


@dataclass(frozen=True)
class FieldValue:
    kind: FieldKind
    value: Optional[str] = None

    def or_missing(self) -> str:
        return MISSING if self.kind is FieldKind.MISSING else self.value


def _scalar(value: Any) -> Optional[str]:
    # Empty strings fall through to Missing, same as a null field.
    if value is None or isinstance(value, (dict, list)):
        return None
    text = value if isinstance(value, str) else str(value)
    return text or None


def resolve_field(raw: Any) -> FieldValue:
    """Classify one raw field value as shared, plain or missing."""

    if isinstance(raw, dict) and SHARE_KEY in raw:
        inner = _scalar(raw[SHARE_KEY])
        if inner is not None:
            return FieldValue(FieldKind.SHARED, inner)
        return FieldValue(FieldKind.MISSING)
    text = _scalar(raw)
    if text is None:
        return FieldValue(FieldKind.MISSING)
    return FieldValue(FieldKind.PLAIN, text)


def encode(record: LogicalRecord) -> Dict[str, Any]:
    return {
        USER_FIELD: record.user_id,
        TIMESTAMP_FIELD: {ALLOT_KEY: record.timestamp},
        LEVEL_FIELD: {ALLOT_KEY: record.level},
    }


def decode(raw: Any) -> LogicalRecord:
    """Decode one raw storage record.

    Raises `MalformedRecord` when the record is not a mapping or has no
    usable `fitbitid`.
    """

    if not isinstance(raw, dict):
        raise MalformedRecord(f"Record is not an object: {raw!r}", raw)
    user_id = raw.get(USER_FIELD)
    if not isinstance(user_id, str) or not user_id:
        raise MalformedRecord(f"Record has no {USER_FIELD}", raw)

    record_id = raw.get(ID_FIELD)
    return LogicalRecord(
        user_id=user_id,
        timestamp=resolve_field(raw.get(TIMESTAMP_FIELD)).or_missing(),
        level=resolve_field(raw.get(LEVEL_FIELD)).or_missing(),
        record_id=str(record_id) if record_id is not None else None,
    )
