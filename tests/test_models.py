"""Tests for :mod:`models`."""

from __future__ import annotations

import pytest

from models import (
    MediaItem,
    NamedIdentity,
    ProfileRecord,
    ProfileRecords,
    ShopItem,
    StickerRecord,
    new_item_id,
    shop_from_list,
)


def test_profile_from_dict_reads_legacy_names_and_defaults() -> None:
    profile = ProfileRecord.from_dict(
        {
            "name": "Jane",
            "image": "/images/jane.png",
            "socialLinks": [{"platform": "twitter", "url": "https://x.com/jane"}, "junk"],
            "hasEditedProfile": True,
        }
    )
    assert profile.display_name == "Jane"
    assert profile.image_ref == "/images/jane.png"
    assert len(profile.social_links) == 1
    assert profile.section_visibility.shop is True
    assert profile.has_been_edited is True


def test_profile_from_dict_rejects_non_mapping() -> None:
    with pytest.raises(TypeError):
        ProfileRecord.from_dict(["not", "a", "profile"])


def test_mark_edited_is_one_way() -> None:
    edited = ProfileRecord().mark_edited()
    assert edited.has_been_edited is True
    assert edited.mark_edited() is edited


def test_shop_items_read_store_url_alias() -> None:
    (item,) = shop_from_list([{"id": "1", "title": "Tee", "storeUrl": "https://shop.example", "price": 25}])
    assert item == ShopItem(id="1", title="Tee", link="https://shop.example", price="25")


def test_media_item_wire_names() -> None:
    item = MediaItem(id="m", source_url="https://youtu.be/x", media_type="youtube", embed_url="e")
    assert item.asdict() == {"id": "m", "title": "", "rawUrl": "https://youtu.be/x", "type": "youtube", "embedUrl": "e"}
    assert MediaItem(id="blank").is_blank


def test_records_replace_record_validates_name() -> None:
    records = ProfileRecords().replace_record("sticker", StickerRecord(visible=False))
    assert records.sticker.visible is False
    with pytest.raises(KeyError):
        records.replace_record("avatar", None)


def test_identity_and_ids() -> None:
    with pytest.raises(ValueError):
        NamedIdentity("")
    assert new_item_id() != new_item_id()
