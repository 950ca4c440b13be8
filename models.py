"""Profile record dataclasses shared by the store, services and Streamlit tabs."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Sequence

SENTINEL_HANDLE = "default"

RECORD_PROFILE = "profile"
RECORD_SPOTLIGHT = "spotlight"
RECORD_MEDIA = "media"
RECORD_SHOP = "shop"
RECORD_STICKER = "sticker"
RECORD_NAMES: tuple[str, ...] = (
    RECORD_PROFILE,
    RECORD_SPOTLIGHT,
    RECORD_MEDIA,
    RECORD_SHOP,
    RECORD_STICKER,
)

DEFAULT_STICKER_IMAGE = "/images/stickers/daisy-blue.png"


@dataclass(frozen=True)
class SentinelIdentity:
    """Stand-in identity used while no wallet is connected."""

    handle: str = SENTINEL_HANDLE

    @property
    def is_sentinel(self) -> bool:
        return True


@dataclass(frozen=True)
class NamedIdentity:
    """A connected wallet account, kept verbatim."""

    handle: str

    def __post_init__(self) -> None:
        if not isinstance(self.handle, str) or not self.handle:
            raise ValueError("identity handle must be a non-empty string")

    @property
    def is_sentinel(self) -> bool:
        return False


Identity = SentinelIdentity | NamedIdentity
SENTINEL = SentinelIdentity()


def parse_identity(handle: str | None) -> Identity:
    """Map an auth handle onto the identity variant that namespaces storage."""

    if handle is None or handle == "" or handle == SENTINEL_HANDLE:
        return SENTINEL
    return NamedIdentity(handle)


def new_item_id() -> str:
    """Return a fresh, never reused item id."""

    return uuid.uuid4().hex


def _text(payload: Mapping[str, Any], *names: str, default: str = "") -> str:
    for name in names:
        value = payload.get(name)
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
    return default


def _flag(payload: Mapping[str, Any], *names: str, default: bool = False) -> bool:
    for name in names:
        value = payload.get(name)
        if isinstance(value, bool):
            return value
    return default


def _require_mapping(payload: object, label: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise TypeError(f"{label} must be an object, got {type(payload).__name__}")
    return payload


def _require_list(payload: object, label: str) -> Sequence[Any]:
    if not isinstance(payload, list):
        raise TypeError(f"{label} must be a list, got {type(payload).__name__}")
    return payload


@dataclass(frozen=True)
class SocialLink:
    platform: str
    url: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SocialLink":
        payload = _require_mapping(payload, "social link")
        return cls(platform=_text(payload, "platform"), url=_text(payload, "url"))

    def asdict(self) -> dict[str, Any]:
        return {"platform": self.platform, "url": self.url}


@dataclass(frozen=True)
class SectionVisibility:
    spotlight: bool = True
    media: bool = True
    shop: bool = True
    sticker: bool = True

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "SectionVisibility":
        if payload is None:
            return cls()
        payload = _require_mapping(payload, "section visibility")
        return cls(
            # Older records called the spotlight section "projects".
            spotlight=_flag(payload, "spotlight", "projects", default=True),
            media=_flag(payload, "media", default=True),
            shop=_flag(payload, "shop", default=True),
            sticker=_flag(payload, "sticker", default=True),
        )

    def asdict(self) -> dict[str, Any]:
        return {
            "spotlight": self.spotlight,
            "media": self.media,
            "shop": self.shop,
            "sticker": self.sticker,
        }


@dataclass(frozen=True)
class ProfileRecord:
    """Profile text, links and visibility flags for one identity."""

    display_name: str = ""
    title: str = ""
    bio: str = ""
    image_ref: str = ""
    social_links: tuple[SocialLink, ...] = field(default_factory=tuple)
    section_visibility: SectionVisibility = field(default_factory=SectionVisibility)
    wallet_address: str = ""
    show_wallet_address: bool = False
    btc_address: str = ""
    show_btc_address: bool = False
    has_been_edited: bool = False

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ProfileRecord":
        payload = _require_mapping(payload, "profile")
        links_field = payload.get("socialLinks", payload.get("social_links", []))
        links = _require_list(links_field if links_field is not None else [], "socialLinks")
        visibility_field = payload.get("sectionVisibility", payload.get("section_visibility"))
        return cls(
            display_name=_text(payload, "name", "displayName", "display_name"),
            title=_text(payload, "title"),
            bio=_text(payload, "bio"),
            image_ref=_text(payload, "image", "imageRef", "image_ref"),
            social_links=tuple(SocialLink.from_dict(entry) for entry in links if isinstance(entry, Mapping)),
            section_visibility=SectionVisibility.from_dict(visibility_field),
            wallet_address=_text(payload, "walletAddress", "wallet_address"),
            show_wallet_address=_flag(payload, "showWalletAddress", "show_wallet_address"),
            btc_address=_text(payload, "btcAddress", "btc_address"),
            show_btc_address=_flag(payload, "showBtcAddress", "show_btc_address"),
            has_been_edited=_flag(payload, "hasEditedProfile", "hasBeenEdited", "has_been_edited"),
        )

    def asdict(self) -> dict[str, Any]:
        return {
            "name": self.display_name,
            "title": self.title,
            "bio": self.bio,
            "image": self.image_ref,
            "socialLinks": [link.asdict() for link in self.social_links],
            "sectionVisibility": self.section_visibility.asdict(),
            "walletAddress": self.wallet_address,
            "showWalletAddress": self.show_wallet_address,
            "btcAddress": self.btc_address,
            "showBtcAddress": self.show_btc_address,
            "hasEditedProfile": self.has_been_edited,
        }

    def mark_edited(self) -> "ProfileRecord":
        if self.has_been_edited:
            return self
        return replace(self, has_been_edited=True)


@dataclass(frozen=True)
class SpotlightItem:
    id: str
    title: str = ""
    description: str = ""
    image: str = ""
    link: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SpotlightItem":
        payload = _require_mapping(payload, "spotlight item")
        return cls(
            id=_text(payload, "id"),
            title=_text(payload, "title"),
            description=_text(payload, "description"),
            image=_text(payload, "image"),
            link=_text(payload, "link"),
        )

    def asdict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "link": self.link,
        }


@dataclass(frozen=True)
class ShopItem:
    id: str
    title: str = ""
    description: str = ""
    image: str = ""
    link: str = ""
    price: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ShopItem":
        payload = _require_mapping(payload, "shop item")
        return cls(
            id=_text(payload, "id"),
            title=_text(payload, "title"),
            description=_text(payload, "description"),
            image=_text(payload, "image"),
            link=_text(payload, "link", "storeUrl"),
            price=_text(payload, "price"),
        )

    def asdict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "link": self.link,
            "price": self.price,
        }


@dataclass(frozen=True)
class MediaItem:
    id: str
    title: str = ""
    source_url: str = ""
    media_type: str = ""
    embed_url: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MediaItem":
        payload = _require_mapping(payload, "media item")
        return cls(
            id=_text(payload, "id"),
            title=_text(payload, "title"),
            source_url=_text(payload, "rawUrl", "sourceUrl", "source_url"),
            media_type=_text(payload, "type", "mediaType", "media_type"),
            embed_url=_text(payload, "embedUrl", "embed_url"),
        )

    def asdict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "rawUrl": self.source_url,
            "type": self.media_type,
            "embedUrl": self.embed_url,
        }

    @property
    def is_blank(self) -> bool:
        return not self.source_url.strip()


@dataclass(frozen=True)
class StickerRecord:
    visible: bool = True
    image_ref: str = DEFAULT_STICKER_IMAGE

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "StickerRecord":
        payload = _require_mapping(payload, "sticker")
        return cls(
            visible=_flag(payload, "visible", default=True),
            image_ref=_text(payload, "image", "imageRef", "image_ref", default=DEFAULT_STICKER_IMAGE),
        )

    def asdict(self) -> dict[str, Any]:
        return {"visible": self.visible, "image": self.image_ref}


def spotlight_from_list(payload: object) -> tuple[SpotlightItem, ...]:
    return tuple(SpotlightItem.from_dict(entry) for entry in _require_list(payload, "spotlight"))


def media_from_list(payload: object) -> tuple[MediaItem, ...]:
    return tuple(MediaItem.from_dict(entry) for entry in _require_list(payload, "media"))


def shop_from_list(payload: object) -> tuple[ShopItem, ...]:
    return tuple(ShopItem.from_dict(entry) for entry in _require_list(payload, "shop"))


def collection_asdict(items: Sequence[SpotlightItem | MediaItem | ShopItem]) -> list[dict[str, Any]]:
    return [item.asdict() for item in items]


@dataclass(frozen=True)
class ProfileRecords:
    """The five records that make up one identity's page."""

    profile: ProfileRecord = field(default_factory=ProfileRecord)
    spotlight: tuple[SpotlightItem, ...] = field(default_factory=tuple)
    media: tuple[MediaItem, ...] = field(default_factory=tuple)
    shop: tuple[ShopItem, ...] = field(default_factory=tuple)
    sticker: StickerRecord = field(default_factory=StickerRecord)

    def record(self, name: str) -> Any:
        if name not in RECORD_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def replace_record(self, name: str, value: Any) -> "ProfileRecords":
        if name not in RECORD_NAMES:
            raise KeyError(name)
        return replace(self, **{name: value})

    def asdict(self) -> dict[str, Any]:
        return {
            RECORD_PROFILE: self.profile.asdict(),
            RECORD_SPOTLIGHT: collection_asdict(self.spotlight),
            RECORD_MEDIA: collection_asdict(self.media),
            RECORD_SHOP: collection_asdict(self.shop),
            RECORD_STICKER: self.sticker.asdict(),
        }


__all__ = [
    "DEFAULT_STICKER_IMAGE",
    "Identity",
    "MediaItem",
    "NamedIdentity",
    "ProfileRecord",
    "ProfileRecords",
    "RECORD_MEDIA",
    "RECORD_NAMES",
    "RECORD_PROFILE",
    "RECORD_SHOP",
    "RECORD_SPOTLIGHT",
    "RECORD_STICKER",
    "SENTINEL",
    "SENTINEL_HANDLE",
    "SectionVisibility",
    "SentinelIdentity",
    "ShopItem",
    "SocialLink",
    "SpotlightItem",
    "StickerRecord",
    "collection_asdict",
    "media_from_list",
    "new_item_id",
    "parse_identity",
    "shop_from_list",
    "spotlight_from_list",
]
