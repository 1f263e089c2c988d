import asyncio
import itertools

import pytest

from repo_records import RecordRepo


class FakeNodes:
    """In-memory stand-in for the secretvaults nodes.

    Every client built by `factory()` shares this store, the way fresh
    clients share the real nodes. Like `SecretVaultWrapper`, only `%allot`
    fields are secret-shared, and reads hand them back unified to plain
    values. Any other dict is stored untouched.
    """

    def __init__(self, node_count=2):
        self.node_count = node_count
        self.records = []
        self.inits = 0
        self.fail_init = None
        self.fail_write = None
        self.fail_read = None
        self.failed_nodes = 0
        self._ids = itertools.count(1)

    def factory(self):
        return FakeCollection(self)


class FakeCollection:
    def __init__(self, nodes: FakeNodes):
        self.nodes = nodes

    async def init(self):
        if self.nodes.fail_init:
            raise self.nodes.fail_init
        self.nodes.inits += 1

    async def write_to_nodes(self, data):
        if self.nodes.fail_write:
            raise self.nodes.fail_write
        await asyncio.sleep(0)
        created = []
        for item in data:
            record_id = f"rec-{next(self.nodes._ids)}"
            stored = {"_id": record_id}
            for key, value in item.items():
                if isinstance(value, dict) and "%allot" in value:
                    stored[key] = value["%allot"]
                else:
                    stored[key] = value
            self.nodes.records.append(stored)
            created.append(record_id)
        acks = []
        for n in range(self.nodes.node_count):
            if n < self.nodes.failed_nodes:
                acks.append({"node": f"node-{n}", "error": "node unavailable"})
            else:
                acks.append({"node": f"node-{n}", "result": {"data": {"created": list(created)}}})
        return acks

    async def read_from_nodes(self, filter_dict):
        if self.nodes.fail_read:
            raise self.nodes.fail_read
        await asyncio.sleep(0)
        return [
            dict(r) for r in self.nodes.records
            if all(r.get(k) == v for k, v in filter_dict.items())
        ]


@pytest.fixture
def nodes():
    return FakeNodes()


@pytest.fixture
def repo(nodes):
    return RecordRepo(factory=nodes.factory)
