"""
Storage backend connection helper.

This module centralizes how secretvaults clients are created. Every
call builds a fresh `SecretVaultWrapper` and runs `init()` on it; no
client is shared between requests.

The client holds no connection between calls: each node request opens
and closes its own `aiohttp` session, so there is nothing to tear down
when `open_collection` exits. The client is simply dropped.

Usage:
    from vault import open_collection
    async with open_collection() as collection:
        records = await collection.read_from_nodes({})

Tests pass their own `factory` so no network is touched.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

from secretvaults import OperationType, SecretVaultWrapper

from settings import settings

logger = logging.getLogger(__name__)

CollectionFactory = Callable[[], Any]


def make_collection() -> SecretVaultWrapper:
    """Return a new, uninitialized secretvaults client for the schema."""

    org = settings.org_config()
    return SecretVaultWrapper(
        org["nodes"],
        org["org_credentials"],
        settings.schema_id,
        operation=OperationType.STORE,
    )


@asynccontextmanager
async def open_collection(factory: Optional[CollectionFactory] = None) -> AsyncIterator[Any]:
    """Yield an initialized client for the duration of one operation."""

    collection = (factory or make_collection)()
    await collection.init()
    logger.debug("Opened storage client %s", type(collection).__name__)
    yield collection
