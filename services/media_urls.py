"""Classify media links and turn them into embeddable player URLs."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

MEDIA_TYPES = (
    "youtube",
    "soundcloud",
    "soundcloud-playlist",
    "spotify",
    "spotify-playlist",
    "apple-music-album",
    "apple-music-playlist",
    "apple-music-station",
    "mixcloud",
    "instagram-reel",
    "tiktok",
)

SHARE_LINK_HOSTS = ("spotify.link", "on.soundcloud.com")
_DEFAULT_TIMEOUT = 3.0

_SCHEME_TYPO = re.compile(r"^h+ttps://")
_IFRAME_SRC = re.compile(r'src="([^"]+)"')
_YOUTU_BE = re.compile(r"youtu\.be/([^?]+)")
_YOUTUBE_ID = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)
_SOUNDCLOUD_PATH = re.compile(r"soundcloud\.com/([^/]+/[^/]+(?:/[^/]+)?)")
_SPOTIFY_PATH = re.compile(r"open\.spotify\.com/(?:embed/)?(track|playlist|album|artist|episode|show)/([A-Za-z0-9]+)")
_APPLE_STATION = re.compile(r"music\.apple\.com/([^/]+)/station/([^/]+)/([^?\s]+)")
_APPLE_COLLECTION = re.compile(r"music\.apple\.com/([^/]+)/(album|playlist)/([^/]+)/([^/?]+)")
_INSTAGRAM_POST = re.compile(r"instagram\.com/(reel|p)/([A-Za-z0-9_-]+)")
_TIKTOK_VIDEO = re.compile(r"tiktok\.com/@([^/]+)/video/(\d+)")

_DISPLAY_NAMES = (
    (("youtube.com", "youtu.be"), "YouTube"),
    (("spotify.com",), "Spotify"),
    (("soundcloud.com",), "SoundCloud"),
    (("apple.com",), "Apple Music"),
    (("mixcloud.com",), "Mixcloud"),
    (("tidal.com",), "Tidal"),
    (("bandcamp.com",), "Bandcamp"),
)


def _clean(url: str) -> str:
    return _SCHEME_TYPO.sub("https://", url.strip().lstrip("@").strip())


def classify_media_url(url: str | None) -> str:
    """Return the media type for ``url`` or ``"unknown"``."""

    if not url or not url.strip():
        return UNKNOWN
    lowered = url.strip().lower()
    if "instagram.com" in lowered and ("/reel/" in lowered or "/p/" in lowered):
        return "instagram-reel"
    if "mixcloud.com" in lowered:
        return "mixcloud"
    if "youtube.com" in lowered or "youtu.be" in lowered:
        return "youtube"
    if "soundcloud.com" in lowered:
        return "soundcloud-playlist" if "/sets/" in lowered else "soundcloud"
    if "spotify.com" in lowered:
        return "spotify-playlist" if "/playlist/" in lowered else "spotify"
    if "music.apple.com" in lowered:
        if "/album/" in lowered:
            return "apple-music-album"
        if "/playlist/" in lowered:
            return "apple-music-playlist"
        return "apple-music-station"
    if "tiktok.com" in lowered:
        return "tiktok"
    return UNKNOWN


def _youtube_embed(url: str) -> str:
    match = _YOUTU_BE.search(url) or _YOUTUBE_ID.search(url)
    if match:
        return f"https://www.youtube.com/embed/{match.group(1)}"
    return url


def _soundcloud_embed(url: str) -> str:
    if "w.soundcloud.com/player" in url:
        return url
    if "<iframe" in url:
        match = _IFRAME_SRC.search(url)
        return match.group(1) if match else url
    match = _SOUNDCLOUD_PATH.search(url.split("?")[0])
    if not match:
        return url
    return (
        f"https://w.soundcloud.com/player/?url=https://soundcloud.com/{match.group(1)}"
        "&color=%23ff5500&auto_play=false&hide_related=false&show_comments=true"
        "&show_user=true&show_reposts=false&show_teaser=true&visual=true"
    )


def _spotify_embed(url: str) -> str:
    match = _SPOTIFY_PATH.search(url)
    if match:
        return f"https://open.spotify.com/embed/{match.group(1)}/{match.group(2)}"
    return url


def _apple_music_embed(url: str) -> str:
    if "/station/" in url:
        match = _APPLE_STATION.search(url)
        if match:
            country, _name, station_id = match.groups()
            return f"https://embed.music.apple.com/{country}/station/{station_id}?app=music"
    match = _APPLE_COLLECTION.search(url)
    if match:
        country, kind, _name, item_id = match.groups()
        return f"https://embed.music.apple.com/{country}/{kind}/{item_id}?app=music"
    return url


def _mixcloud_embed(url: str) -> str:
    if "<iframe" in url or "player-widget.mixcloud.com" in url:
        match = _IFRAME_SRC.search(url)
        return match.group(1) if match else url
    return url


def _instagram_embed(url: str) -> str:
    if "/embed" in url:
        return url
    match = _INSTAGRAM_POST.search(url)
    if match:
        return f"https://www.instagram.com/p/{match.group(2)}/embed"
    return url


def _tiktok_embed(url: str) -> str:
    match = _TIKTOK_VIDEO.search(url)
    if match:
        username, video_id = match.groups()
        return f"https://www.tiktok.com/@{username}/video/{video_id}"
    return url


_EMBEDDERS = {
    "youtube": _youtube_embed,
    "soundcloud": _soundcloud_embed,
    "soundcloud-playlist": _soundcloud_embed,
    "spotify": _spotify_embed,
    "spotify-playlist": _spotify_embed,
    "apple-music-album": _apple_music_embed,
    "apple-music-playlist": _apple_music_embed,
    "apple-music-station": _apple_music_embed,
    "mixcloud": _mixcloud_embed,
    "instagram-reel": _instagram_embed,
    "tiktok": _tiktok_embed,
}


def to_embed_url(url: str, media_type: str | None = None) -> str:
    """Return the player URL for ``url``; unknown links are returned cleaned but unchanged."""

    cleaned = _clean(url or "")
    kind = media_type or classify_media_url(cleaned)
    embedder = _EMBEDDERS.get(kind)
    if embedder is None:
        return cleaned
    return embedder(cleaned)


def media_display_name(url: str) -> str:
    host = urlparse(_clean(url or "")).hostname
    if not host:
        return "Link"
    for needles, label in _DISPLAY_NAMES:
        if any(needle in host for needle in needles):
            return label
    return host.removeprefix("www.").split(".")[0]


def is_share_link(url: str) -> bool:
    host = urlparse(_clean(url or "")).hostname or ""
    return host in SHARE_LINK_HOSTS


def expand_share_link(url: str, *, requester: Any = requests, timeout: float = _DEFAULT_TIMEOUT) -> str:
    """Follow app share links (``spotify.link``, ``on.soundcloud.com``) to their target.

    Other URLs are returned untouched. Network failures return the original
    URL, which then classifies as ``"unknown"``.
    """

    cleaned = _clean(url or "")
    if not is_share_link(cleaned):
        return cleaned
    try:
        response = requester.head(cleaned, allow_redirects=True, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("Could not expand share link %s: %s", cleaned, exc)
        return cleaned
    resolved = getattr(response, "url", None)
    if isinstance(resolved, str) and resolved:
        return resolved
    return cleaned


def resolve_media(url: str, *, requester: Any = requests, timeout: float = _DEFAULT_TIMEOUT) -> tuple[str, str]:
    """Return ``(media_type, embed_url)`` for a user-entered link."""

    target = expand_share_link(url, requester=requester, timeout=timeout)
    if is_share_link(target):
        # Short links that could not be followed have no playable target.
        return UNKNOWN, ""
    media_type = classify_media_url(target)
    if media_type == UNKNOWN:
        return UNKNOWN, ""
    return media_type, to_embed_url(target, media_type)


__all__ = [
    "MEDIA_TYPES",
    "UNKNOWN",
    "classify_media_url",
    "expand_share_link",
    "is_share_link",
    "media_display_name",
    "resolve_media",
    "to_embed_url",
]
