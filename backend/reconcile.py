import logging
from typing import Any, Iterable, List

from codec import decode
from errors import MalformedRecord
from models import LogicalRecord

logger = logging.getLogger(__name__)


def normalize(raw_records: Iterable[Any]) -> List[LogicalRecord]:
    """Decode raw storage records, dropping the ones that can't be decoded.

    Input order is kept; nothing is sorted here.
    """

    out: List[LogicalRecord] = []
    for raw in raw_records:
        try:
            out.append(decode(raw))
        except MalformedRecord as e:
            logger.warning("Dropping malformed record: %s", e)
    return out
