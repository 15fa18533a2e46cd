"""Unit tests for address canonicalization and tag sets."""

import pytest

from mongocore.address import canonicalize
from mongocore.tag import Tag, TagSet


class TestCanonicalize:
    @pytest.mark.parametrize("addr, expected", [
        ("localhost", "localhost:27017"),
        ("LocalHost:27018", "localhost:27018"),
        ("DB1.Example.COM", "db1.example.com:27017"),
        ("[::1]", "[::1]:27017"),
        ("[::1]:27018", "[::1]:27018"),
        ("::1", "::1"),
        ("/tmp/MongoDB-27017.sock", "/tmp/mongodb-27017.sock"),
        ("", ""),
    ])
    def test_canonicalize(self, addr, expected):
        assert canonicalize(addr) == expected

    def test_idempotent(self):
        once = canonicalize("Host")
        assert canonicalize(once) == once


class TestTagSet:
    def test_from_mapping(self):
        tags = TagSet.from_mapping({'dc': 'ny', 'rack': '1'})
        assert len(tags) == 2
        assert list(tags) == [Tag('dc', 'ny'), Tag('rack', '1')]
        assert tags.contains('dc', 'ny')
        assert not tags.contains('dc', 'sf')

    def test_empty(self):
        assert len(TagSet.from_mapping(None)) == 0
        assert TagSet.from_mapping({}) == TagSet()

    def test_contains_all(self):
        tags = TagSet.from_mapping({'dc': 'ny', 'rack': '1'})
        assert tags.contains_all(TagSet.from_mapping({'dc': 'ny'}))
        assert not tags.contains_all(TagSet.from_mapping({'dc': 'ny', 'ssd': 'yes'}))
        assert tags.contains_all(TagSet())

    def test_hashable(self):
        a = TagSet.from_mapping({'dc': 'ny'})
        b = TagSet.from_mapping({'dc': 'ny'})
        assert hash(a) == hash(b)
        assert a == b
