"""Tests for :mod:`services.record_codec`."""

from __future__ import annotations

import json
import logging

import pytest

from models import (
    MediaItem,
    ProfileRecord,
    SectionVisibility,
    SocialLink,
    SpotlightItem,
    StickerRecord,
    media_from_list,
    spotlight_from_list,
)
from services import record_codec
from services.errors import StorageWriteError


def test_decode_none_returns_fallback() -> None:
    fallback = ProfileRecord(display_name="fallback")
    assert record_codec.decode(None, fallback, ProfileRecord.from_dict) is fallback


def test_profile_round_trip() -> None:
    profile = ProfileRecord(
        display_name="Jane",
        title="DJ",
        bio="Hello",
        image_ref="/images/jane.png",
        social_links=(SocialLink("twitter", "https://twitter.com/jane"),),
        section_visibility=SectionVisibility(shop=False),
        wallet_address="SP123",
        show_wallet_address=True,
        has_been_edited=True,
    )
    raw = record_codec.encode(profile)
    assert record_codec.decode(raw, ProfileRecord(), ProfileRecord.from_dict) == profile


def test_collection_round_trip() -> None:
    spotlight = (SpotlightItem(id="a", title="One"), SpotlightItem(id="b", link="https://example.com"))
    media = (MediaItem(id="m", source_url="https://youtu.be/x", media_type="youtube"),)
    assert record_codec.decode(record_codec.encode(spotlight), (), spotlight_from_list) == spotlight
    assert record_codec.decode(record_codec.encode(media), (), media_from_list) == media


def test_encode_is_canonical_and_versioned() -> None:
    raw = record_codec.encode({"b": 1, "a": 2})
    assert raw == '{"data":{"a":2,"b":1},"v":1}'
    assert json.loads(raw)["v"] == record_codec.SCHEMA_VERSION


def test_unversioned_records_are_read_as_bare_payloads() -> None:
    raw = json.dumps({"name": "Jane", "hasEditedProfile": True, "sectionVisibility": {"projects": False}})
    profile = record_codec.decode(raw, ProfileRecord(), ProfileRecord.from_dict)
    assert profile.display_name == "Jane"
    assert profile.has_been_edited is True
    assert profile.section_visibility.spotlight is False


def test_corrupt_record_falls_back_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    fallback = StickerRecord()
    with caplog.at_level(logging.WARNING, logger="services.record_codec"):
        result = record_codec.decode("{not json", fallback, StickerRecord.from_dict, key="mixmi_sticker_data")
    assert result is fallback
    assert "mixmi_sticker_data" in caplog.text


def test_wrong_shape_falls_back() -> None:
    fallback = ProfileRecord()
    assert record_codec.decode("[1, 2, 3]", fallback, ProfileRecord.from_dict) is fallback
    assert record_codec.decode('{"v": 1, "data": {"id": "x"}}', (), spotlight_from_list) == ()


def test_newer_schema_version_falls_back() -> None:
    fallback = ProfileRecord()
    raw = json.dumps({"v": record_codec.SCHEMA_VERSION + 1, "data": {"name": "Future"}})
    assert record_codec.decode(raw, fallback, ProfileRecord.from_dict) is fallback


def test_encode_failure_raises_write_error() -> None:
    with pytest.raises(StorageWriteError) as excinfo:
        record_codec.encode({"image": object()}, key="mixmi_profile_data")
    assert excinfo.value.reason == "serialization"
    assert excinfo.value.retryable is False
    assert excinfo.value.key == "mixmi_profile_data"


def test_encode_rejects_nan() -> None:
    with pytest.raises(StorageWriteError):
        record_codec.encode({"price": float("nan")})
