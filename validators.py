"""Field validation for the profile editor."""

from __future__ import annotations

from typing import Mapping
from urllib.parse import urlparse

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
TITLE_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500
ITEM_TITLE_MAX_LENGTH = 80
ITEM_DESCRIPTION_MAX_LENGTH = 180

SOCIAL_PLATFORM_HOSTS: dict[str, tuple[str, ...]] = {
    "youtube": ("youtube.com", "youtu.be"),
    "spotify": ("spotify.com",),
    "soundcloud": ("soundcloud.com",),
    "twitter": ("twitter.com", "x.com"),
    "instagram": ("instagram.com",),
    "linkedin": ("linkedin.com",),
    "tiktok": ("tiktok.com",),
}

_PLATFORM_LABELS = {
    "youtube": "YouTube",
    "spotify": "Spotify",
    "soundcloud": "SoundCloud",
    "twitter": "Twitter/X",
    "instagram": "Instagram",
    "linkedin": "LinkedIn",
    "tiktok": "TikTok",
}

OK = (True, "")


def is_valid_url(value: str) -> bool:
    parsed = urlparse((value or "").strip())
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_name(name: str) -> tuple[bool, str]:
    if not name:
        return False, "Name is required"
    if len(name) < NAME_MIN_LENGTH:
        return False, f"Name must be at least {NAME_MIN_LENGTH} characters long"
    if len(name) > NAME_MAX_LENGTH:
        return False, f"Name must be no more than {NAME_MAX_LENGTH} characters long"
    return OK


def validate_title(title: str) -> tuple[bool, str]:
    if not title:
        return False, "Title is required"
    if len(title) > TITLE_MAX_LENGTH:
        return False, f"Title must be no more than {TITLE_MAX_LENGTH} characters long"
    return OK


def validate_bio(bio: str) -> tuple[bool, str]:
    if not bio:
        return False, "Bio is required"
    if len(bio) > BIO_MAX_LENGTH:
        return False, f"Bio must be no more than {BIO_MAX_LENGTH} characters long"
    return OK


def validate_profile_fields(values: Mapping[str, str]) -> dict[str, str]:
    """Return ``{field: message}`` for every invalid name/title/bio value."""

    checks = {
        "display_name": validate_name,
        "title": validate_title,
        "bio": validate_bio,
    }
    errors: dict[str, str] = {}
    for field, check in checks.items():
        ok, message = check(values.get(field, "") or "")
        if not ok:
            errors[field] = message
    return errors


def validate_social_url(platform: str, url: str) -> tuple[bool, str]:
    """Check ``url`` is well formed and points at ``platform``'s site."""

    if not (url or "").strip():
        return False, "URL is required"
    if not is_valid_url(url):
        return False, "Please enter a valid URL"
    hosts = SOCIAL_PLATFORM_HOSTS.get(platform)
    if hosts and not any(host in url for host in hosts):
        return False, f"Please enter a valid {_PLATFORM_LABELS[platform]} URL"
    return OK


def _validate_link(value: str) -> tuple[bool, str]:
    if not (value or "").strip():
        return OK
    if is_valid_url(value):
        return OK
    if not value.lower().startswith(("http://", "https://")) and is_valid_url(f"https://{value.strip()}"):
        # Accepted, but nudge towards a full URL.
        return True, "Consider adding https:// for proper URL format"
    return False, "Please enter a valid URL (e.g., https://example.com)"


def validate_spotlight_item(field: str, value: str) -> tuple[bool, str]:
    value = value or ""
    if field == "title":
        if not value.strip():
            return False, "Title is required"
        if len(value) > ITEM_TITLE_MAX_LENGTH:
            return False, f"Title must be less than {ITEM_TITLE_MAX_LENGTH} characters"
    elif field == "description":
        if not value.strip():
            return False, "Description is required"
        if len(value) > ITEM_DESCRIPTION_MAX_LENGTH:
            return False, f"Description must be less than {ITEM_DESCRIPTION_MAX_LENGTH} characters"
    elif field == "link":
        if value.strip() and not is_valid_url(value):
            return False, "Please enter a valid URL"
    return OK


def validate_shop_item(field: str, value: str) -> tuple[bool, str]:
    value = value or ""
    if field == "title" and len(value) > ITEM_TITLE_MAX_LENGTH:
        return False, f"Title must be less than {ITEM_TITLE_MAX_LENGTH} characters"
    if field == "description" and len(value) > ITEM_DESCRIPTION_MAX_LENGTH:
        return False, f"Description must be less than {ITEM_DESCRIPTION_MAX_LENGTH} characters"
    if field == "link":
        return _validate_link(value)
    return OK


def item_errors(kind: str, item: Mapping[str, str]) -> dict[str, str]:
    """Collect blocking messages for a spotlight or shop item row."""

    check = validate_spotlight_item if kind == "spotlight" else validate_shop_item
    errors: dict[str, str] = {}
    for field in ("title", "description", "link"):
        ok, message = check(field, item.get(field, "") or "")
        if not ok:
            errors[field] = message
    return errors


__all__ = [
    "BIO_MAX_LENGTH",
    "ITEM_DESCRIPTION_MAX_LENGTH",
    "ITEM_TITLE_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "NAME_MIN_LENGTH",
    "SOCIAL_PLATFORM_HOSTS",
    "TITLE_MAX_LENGTH",
    "is_valid_url",
    "item_errors",
    "validate_bio",
    "validate_name",
    "validate_profile_fields",
    "validate_shop_item",
    "validate_social_url",
    "validate_spotlight_item",
    "validate_title",
]
