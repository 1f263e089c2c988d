import asyncio

import pytest

from codec import FieldKind, MISSING, decode, encode, resolve_field
from errors import MalformedRecord
from models import LogicalRecord


class TestResolveField:

    def test_shared_container(self):
        v = resolve_field({"%share": "42"})
        assert v.kind is FieldKind.SHARED
        assert v.value == "42"

    def test_plain_scalar(self):
        v = resolve_field("7")
        assert v.kind is FieldKind.PLAIN
        assert v.value == "7"

    def test_numeric_scalar_is_stringified(self):
        assert resolve_field(12).value == "12"

    @pytest.mark.parametrize("raw", [None, "", {"%share": None}, {"%share": ""}, {"other": 1}, {"$allot": "7"}])
    def test_missing(self, raw):
        v = resolve_field(raw)
        assert v.kind is FieldKind.MISSING
        assert v.or_missing() == MISSING


class TestEncode:

    def test_allots_secret_fields_only(self):
        wire = encode(LogicalRecord(user_id="u1", timestamp="20250101", level="3"))
        assert wire == {
            "fitbitid": "u1",
            "dateofupdate": {"%allot": "20250101"},
            "level": {"%allot": "3"},
        }


class TestDecode:

    def test_plain_round_trip(self):
        r = LogicalRecord(user_id="u1", timestamp="100", level="2")
        raw = {"fitbitid": r.user_id, "dateofupdate": r.timestamp, "level": r.level}
        assert decode(raw) == r

    def test_shared_fields_and_id(self):
        raw = {
            "_id": "abc",
            "fitbitid": "u1",
            "dateofupdate": {"%share": "100"},
            "level": {"%share": "5"},
        }
        r = decode(raw)
        assert (r.user_id, r.timestamp, r.level, r.record_id) == ("u1", "100", "5", "abc")

    def test_missing_fields_get_sentinel(self):
        r = decode({"fitbitid": "u1", "level": None})
        assert r.timestamp == "Missing"
        assert r.level == "Missing"

    @pytest.mark.parametrize("raw", [
        {"dateofupdate": "1", "level": "1"},
        {"fitbitid": None, "level": "1"},
        {"fitbitid": 12, "level": "1"},
        {"fitbitid": "", "level": "1"},
        "not a record",
        None,
    ])
    def test_malformed(self, raw):
        with pytest.raises(MalformedRecord):
            decode(raw)


class TestClientContract:
    """Encoded records go through the real secretvaults share split."""

    def test_allotted_fields_split_per_node_and_unify_back(self):
        secretvaults = pytest.importorskip("secretvaults")
        wrapper = secretvaults.NilQLWrapper({"nodes": [{}, {}, {}]})
        record = LogicalRecord(user_id="u1", timestamp="100", level="7", record_id="x")
        wire = {**encode(record), "_id": "x"}

        shares = asyncio.run(wrapper.prepare_and_allot(wire))
        assert len(shares) == 3
        for share in shares:
            assert share["fitbitid"] == "u1"
            assert share["level"] != {"%allot": "7"}
            assert share["dateofupdate"] != {"%allot": "100"}

        unified = asyncio.run(wrapper.unify(shares))
        assert decode(unified) == record
