"""
Tests for nested-mapping path access.
"""

import pytest

from sglacier.receipts.paths import MISSING, seek, set_or_create


def test_seek_returns_nested_value():
    root = {"a": {"b": {"c": 42}}}
    assert seek(root, "a", "b", "c") == 42
    assert seek(root, "a", "b") == {"c": 42}


def test_seek_missing_path_returns_sentinel():
    root = {"a": {"b": {}}}
    assert seek(root, "x") is MISSING
    assert seek(root, "a", "b", "c") is MISSING
    assert seek(root, "a", "b", "c", "d") is MISSING
    assert not MISSING


def test_seek_through_non_mapping_returns_sentinel():
    root = {"a": [1, 2, 3], "b": "text"}
    assert seek(root, "a", 0) is MISSING
    assert seek(root, "b", "c") is MISSING


def test_seek_distinguishes_none_from_missing():
    root = {"a": None}
    assert seek(root, "a") is None
    assert seek(root, "a", "b") is MISSING


def test_set_or_create_builds_intermediate_mappings():
    root = {}
    value = set_or_create(root, [], "vaults", "V", "collections", "C")
    assert value == []
    assert root == {"vaults": {"V": {"collections": {"C": []}}}}
    # the returned object is the stored one
    value.append("x")
    assert root["vaults"]["V"]["collections"]["C"] == ["x"]


def test_set_or_create_keeps_existing_siblings_and_order():
    root = {"vaults": {"V": {"collections": {"first": []}}}}
    set_or_create(root, [], "vaults", "V", "collections", "second")
    set_or_create(root, [], "vaults", "V", "collections", "third")
    assert list(root["vaults"]["V"]["collections"]) == ["first", "second", "third"]


def test_set_or_create_overwrites_last_key():
    root = {"a": {"b": 1}}
    set_or_create(root, 2, "a", "b")
    assert root == {"a": {"b": 2}}


def test_set_or_create_needs_a_key():
    with pytest.raises(ValueError):
        set_or_create({}, 1)
