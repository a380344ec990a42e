"""Tests for UUID helpers."""

from diligence_cli.utils.uuid_utils import generate_uuid, is_full_uuid, shorten_uuid


def test_generate_uuid_is_full():
    value = generate_uuid()
    assert is_full_uuid(value)
    assert generate_uuid() != value


def test_is_full_uuid_rejects_prefix():
    assert not is_full_uuid("0123abcd")
    assert not is_full_uuid(None)


def test_shorten():
    assert shorten_uuid("0123456789abcdef") == "01234567"
    assert shorten_uuid("0123456789abcdef", length=4) == "0123"
