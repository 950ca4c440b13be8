"""Route profile edits to the repository as whole-record writes."""

from __future__ import annotations

import enum
import logging
from dataclasses import fields, replace
from typing import Any, Callable, Iterable, Mapping

from example_content import BLANK_MEDIA_ID
from models import (
    RECORD_MEDIA,
    RECORD_PROFILE,
    RECORD_SHOP,
    RECORD_SPOTLIGHT,
    RECORD_STICKER,
    MediaItem,
    ProfileRecord,
    ProfileRecords,
    SectionVisibility,
    ShopItem,
    SocialLink,
    SpotlightItem,
    StickerRecord,
    new_item_id,
)
from services import media_urls
from services.errors import ClassificationError
from services.profile_repository import ProfileRepository, SaveResult
from services.storage_keys import StorageKeySet

logger = logging.getLogger(__name__)


class UpdateTarget(str, enum.Enum):
    PROFILE_FIELDS = "profile_fields"
    SOCIAL_LINKS = "social_links"
    SECTION_VISIBILITY = "section_visibility"
    SPOTLIGHT_ITEMS = "spotlight_items"
    MEDIA_ITEMS = "media_items"
    SHOP_ITEMS = "shop_items"
    STICKER = "sticker"


TARGET_RECORDS: dict[UpdateTarget, str] = {
    UpdateTarget.PROFILE_FIELDS: RECORD_PROFILE,
    UpdateTarget.SOCIAL_LINKS: RECORD_PROFILE,
    UpdateTarget.SECTION_VISIBILITY: RECORD_PROFILE,
    UpdateTarget.SPOTLIGHT_ITEMS: RECORD_SPOTLIGHT,
    UpdateTarget.MEDIA_ITEMS: RECORD_MEDIA,
    UpdateTarget.SHOP_ITEMS: RECORD_SHOP,
    UpdateTarget.STICKER: RECORD_STICKER,
}

PROFILE_TARGETS = frozenset(
    {UpdateTarget.PROFILE_FIELDS, UpdateTarget.SOCIAL_LINKS, UpdateTarget.SECTION_VISIBILITY}
)

PROFILE_FIELD_NAMES: tuple[str, ...] = (
    "display_name",
    "title",
    "bio",
    "image_ref",
    "wallet_address",
    "show_wallet_address",
    "btc_address",
    "show_btc_address",
)

_ITEM_TYPES = {
    UpdateTarget.SPOTLIGHT_ITEMS: SpotlightItem,
    UpdateTarget.MEDIA_ITEMS: MediaItem,
    UpdateTarget.SHOP_ITEMS: ShopItem,
}

MediaResolver = Callable[[str], "tuple[str, str]"]


def _with_id(item: Any) -> Any:
    if item.id:
        return item
    return replace(item, id=new_item_id())


def _coerce_items(target: UpdateTarget, patch: Iterable[Any]) -> tuple[Any, ...]:
    item_type = _ITEM_TYPES[target]
    if isinstance(patch, (str, bytes, Mapping)):
        raise TypeError(f"{target.value} expects a list of items")
    items = []
    for entry in patch:
        if isinstance(entry, Mapping):
            # Editor rows use field names; stored rows use the wire names.
            known = {f.name for f in fields(item_type)}
            if set(entry) <= known:
                entry = item_type(**{"id": "", **entry})
            else:
                entry = item_type.from_dict(entry)
        if not isinstance(entry, item_type):
            raise TypeError(f"{target.value} items must be {item_type.__name__}")
        items.append(_with_id(entry))
    return tuple(items)


def _coerce_profile_fields(patch: Any) -> dict[str, Any]:
    if isinstance(patch, ProfileRecord):
        return {name: getattr(patch, name) for name in PROFILE_FIELD_NAMES}
    if not isinstance(patch, Mapping):
        raise TypeError("profile fields patch must be a mapping")
    unknown = set(patch) - set(PROFILE_FIELD_NAMES)
    if unknown:
        raise ValueError(f"unknown profile fields: {', '.join(sorted(unknown))}")
    return dict(patch)


def _coerce_social_links(patch: Iterable[Any]) -> tuple[SocialLink, ...]:
    links = []
    for entry in patch:
        if isinstance(entry, Mapping):
            entry = SocialLink.from_dict(entry)
        if not isinstance(entry, SocialLink):
            raise TypeError("social links must be SocialLink entries")
        links.append(entry)
    return tuple(links)


def _coerce_visibility(current: SectionVisibility, patch: Any) -> SectionVisibility:
    if isinstance(patch, SectionVisibility):
        return patch
    if not isinstance(patch, Mapping):
        raise TypeError("section visibility patch must be a mapping")
    return replace(current, **{name: bool(value) for name, value in patch.items()})


def _coerce_sticker(current: StickerRecord, patch: Any) -> StickerRecord:
    if isinstance(patch, StickerRecord):
        return patch
    if not isinstance(patch, Mapping):
        raise TypeError("sticker patch must be a mapping")
    return replace(current, **patch)


def merge_profile(profile: ProfileRecord, target: UpdateTarget, patch: Any) -> ProfileRecord:
    """Apply a profile-family patch to ``profile`` (does not mark it edited)."""

    if target is UpdateTarget.PROFILE_FIELDS:
        return replace(profile, **_coerce_profile_fields(patch))
    if target is UpdateTarget.SOCIAL_LINKS:
        return replace(profile, social_links=_coerce_social_links(patch))
    if target is UpdateTarget.SECTION_VISIBILITY:
        return replace(profile, section_visibility=_coerce_visibility(profile.section_visibility, patch))
    raise ValueError(f"{target} is not a profile target")


def target_value(records: ProfileRecords, target: UpdateTarget) -> Any:
    """The part of ``records`` that ``target`` edits, used for dirty checks."""

    target = UpdateTarget(target)
    if target is UpdateTarget.PROFILE_FIELDS:
        return tuple(getattr(records.profile, name) for name in PROFILE_FIELD_NAMES)
    if target is UpdateTarget.SOCIAL_LINKS:
        return records.profile.social_links
    if target is UpdateTarget.SECTION_VISIBILITY:
        return records.profile.section_visibility
    return records.record(TARGET_RECORDS[target])


def target_patch(records: ProfileRecords, target: UpdateTarget) -> Any:
    """Build the patch that writes ``target``'s part of ``records``."""

    target = UpdateTarget(target)
    if target is UpdateTarget.PROFILE_FIELDS:
        return {name: getattr(records.profile, name) for name in PROFILE_FIELD_NAMES}
    return target_value(records, target)


def stage_patch(records: ProfileRecords, target: UpdateTarget, patch: Any) -> ProfileRecords:
    """Return ``records`` with ``patch`` applied in memory."""

    target = UpdateTarget(target)
    if target in PROFILE_TARGETS:
        return replace(records, profile=merge_profile(records.profile, target, patch))
    if target is UpdateTarget.STICKER:
        return replace(records, sticker=_coerce_sticker(records.sticker, patch))
    items = _coerce_items(target, patch)
    if target is UpdateTarget.MEDIA_ITEMS:
        items = _keep_classification(records.media, items)
    return records.replace_record(TARGET_RECORDS[target], items)


def _keep_classification(previous: Iterable[MediaItem], items: tuple[MediaItem, ...]) -> tuple[MediaItem, ...]:
    # Rows whose link did not change keep the type and player URL found at save time.
    known = {(item.id, item.source_url): item for item in previous}
    kept = []
    for item in items:
        match = known.get((item.id, item.source_url))
        if match is not None and not item.media_type and not item.embed_url:
            item = replace(item, media_type=match.media_type, embed_url=match.embed_url)
        kept.append(item)
    return tuple(kept)


class UpdateDispatcher:
    """Apply one edit target at a time against the bound identity's keys."""

    def __init__(
        self,
        repository: ProfileRepository,
        keys: StorageKeySet,
        *,
        media_resolver: MediaResolver | None = None,
    ) -> None:
        self._repository = repository
        self._keys = keys
        self._media_resolver = media_resolver or media_urls.resolve_media

    @property
    def keys(self) -> StorageKeySet:
        return self._keys

    def rebind(self, keys: StorageKeySet) -> None:
        self._keys = keys

    def apply(self, target: UpdateTarget, patch: Any) -> SaveResult:
        """Persist ``patch`` for ``target``; the result carries any write error."""

        target = UpdateTarget(target)
        if target in PROFILE_TARGETS:
            current = self._repository.read(self._keys, RECORD_PROFILE)
            updated = merge_profile(current, target, patch).mark_edited()
            return self._repository.save(self._keys, RECORD_PROFILE, updated)

        if target is UpdateTarget.STICKER:
            current = self._repository.read(self._keys, RECORD_STICKER)
            result = self._repository.save(self._keys, RECORD_STICKER, _coerce_sticker(current, patch))
            return self._mark_profile_edited(result)

        items = _coerce_items(target, patch)
        validation: dict[str, str] = {}
        if target is UpdateTarget.MEDIA_ITEMS:
            items, validation = self._classify_media(items)
        result = self._repository.save(self._keys, TARGET_RECORDS[target], items)
        result.validation.update(validation)
        return self._mark_profile_edited(result)

    def _classify_media(self, items: tuple[MediaItem, ...]) -> tuple[tuple[MediaItem, ...], dict[str, str]]:
        classified = []
        validation: dict[str, str] = {}
        for item in items:
            if item.is_blank:
                continue
            if item.id == BLANK_MEDIA_ID:
                # A filled-in placeholder row becomes a real item.
                item = replace(item, id=new_item_id())
            media_type, embed_url = self._media_resolver(item.source_url)
            if media_type == media_urls.UNKNOWN:
                error = ClassificationError(item.source_url)
                validation[item.id] = error.message
                logger.info("Unclassified media link %s", item.source_url)
            classified.append(replace(item, media_type=media_type, embed_url=embed_url))
        return tuple(classified), validation

    def _mark_profile_edited(self, result: SaveResult) -> SaveResult:
        if not result.ok:
            return result
        profile = self._repository.read(self._keys, RECORD_PROFILE)
        if profile.has_been_edited:
            return result
        marked = self._repository.save(self._keys, RECORD_PROFILE, profile.mark_edited())
        if not marked.ok:
            result.error = marked.error
        return result


__all__ = [
    "PROFILE_FIELD_NAMES",
    "PROFILE_TARGETS",
    "TARGET_RECORDS",
    "UpdateDispatcher",
    "UpdateTarget",
    "merge_profile",
    "stage_patch",
    "target_patch",
    "target_value",
]
