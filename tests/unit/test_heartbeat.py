"""Unit tests for heartbeat reply decoding."""

import datetime

import pytest

from mongocore.description import Heartbeat
from mongocore.exc import MalformedHeartbeatError


class TestHeartbeatFromDocument:
    def test_full_document(self):
        written = datetime.datetime(2024, 5, 1, 12, 0)
        hb = Heartbeat.from_document({
            'ok': 1.0,
            'me': 'db1:27017',
            'ismaster': False,
            'secondary': True,
            'setName': 'rs0',
            'setVersion': 4,
            'hosts': ['db1:27017', 'db2:27017'],
            'passives': ['db3:27017'],
            'arbiters': ['db4:27017'],
            'tags': {'dc': 'ny'},
            'compression': ['zstd'],
            'electionId': 'abc',
            'lastWrite': {'lastWriteDate': written},
            'maxBsonObjectSize': 16777216,
            'maxMessageSizeBytes': 48000000,
            'maxWriteBatchSize': 100000,
            'minWireVersion': 0,
            'maxWireVersion': 8,
        })
        assert hb.is_ok
        assert hb.me == 'db1:27017'
        assert hb.secondary and not hb.is_master
        assert hb.set_name == 'rs0'
        assert hb.set_version == 4
        assert hb.hosts == ('db1:27017', 'db2:27017')
        assert hb.passives == ('db3:27017',)
        assert hb.arbiters == ('db4:27017',)
        assert hb.tags == {'dc': 'ny'}
        assert hb.compression == ('zstd',)
        assert hb.election_id == 'abc'
        assert hb.last_write_timestamp == written
        assert hb.max_bson_object_size == 16777216
        assert hb.max_message_size_bytes == 48000000
        assert hb.max_write_batch_size == 100000
        assert (hb.min_wire_version, hb.max_wire_version) == (0, 8)

    def test_empty_document_zero_values(self):
        hb = Heartbeat.from_document({})
        assert hb == Heartbeat()
        assert not hb.is_ok

    def test_null_fields_are_zero(self):
        hb = Heartbeat.from_document({'ok': 1, 'setName': None, 'hosts': None})
        assert hb.set_name == ""
        assert hb.hosts == ()

    @pytest.mark.parametrize("ok, expected", [(1, True), (1.0, True), (0, False), (0.0, False)])
    def test_ok_values(self, ok, expected):
        assert Heartbeat.from_document({'ok': ok}).is_ok is expected

    @pytest.mark.parametrize("doc", [
        {'setName': 5},
        {'hosts': 'db1'},
        {'hosts': ['db1', 2]},
        {'ismaster': 1},
        {'maxWireVersion': True},
        {'maxWireVersion': '8'},
        {'tags': {'dc': 1}},
        {'lastWrite': {'lastWriteDate': 'yesterday'}},
        {'ok': 'yes'},
    ])
    def test_wrong_types_raise(self, doc):
        with pytest.raises(MalformedHeartbeatError):
            Heartbeat.from_document(doc)
