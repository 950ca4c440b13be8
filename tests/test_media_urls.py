"""Tests for :mod:`services.media_urls`."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
import requests

from services import media_urls


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://youtu.be/coh2TB6B2EA", "youtube"),
        ("https://www.youtube.com/watch?v=coh2TB6B2EA", "youtube"),
        ("https://soundcloud.com/artist/track", "soundcloud"),
        ("https://soundcloud.com/artist/sets/live", "soundcloud-playlist"),
        ("https://open.spotify.com/track/123", "spotify"),
        ("https://open.spotify.com/playlist/37i9dQZEVXbMDoHDwVN2tF", "spotify-playlist"),
        ("https://music.apple.com/us/album/name/1", "apple-music-album"),
        ("https://music.apple.com/us/playlist/name/pl.1", "apple-music-playlist"),
        ("https://music.apple.com/us/station/name/ra.1", "apple-music-station"),
        ("https://www.mixcloud.com/dj/set/", "mixcloud"),
        ("https://www.instagram.com/reel/ABC123/", "instagram-reel"),
        ("https://www.tiktok.com/@dj/video/123", "tiktok"),
        ("https://example.com/song.mp3", "unknown"),
        ("", "unknown"),
    ],
)
def test_classify_media_url(url: str, expected: str) -> None:
    assert media_urls.classify_media_url(url) == expected


def test_youtube_links_become_embed_urls() -> None:
    assert media_urls.to_embed_url("https://youtu.be/coh2TB6B2EA") == "https://www.youtube.com/embed/coh2TB6B2EA"
    assert (
        media_urls.to_embed_url("https://www.youtube.com/watch?v=coh2TB6B2EA&t=30")
        == "https://www.youtube.com/embed/coh2TB6B2EA"
    )


def test_spotify_playlist_embed() -> None:
    url = "https://open.spotify.com/playlist/37i9dQZEVXbMDoHDwVN2tF?si=3Puyx2VJSxSoKu6tNk5KkA"
    assert media_urls.to_embed_url(url) == "https://open.spotify.com/embed/playlist/37i9dQZEVXbMDoHDwVN2tF"


def test_soundcloud_embed_uses_player() -> None:
    embed = media_urls.to_embed_url("https://soundcloud.com/artist/track-name?utm=1")
    assert embed.startswith("https://w.soundcloud.com/player/?url=https://soundcloud.com/artist/track-name&")


def test_apple_music_and_instagram_embeds() -> None:
    assert (
        media_urls.to_embed_url("https://music.apple.com/us/album/some-album/123456")
        == "https://embed.music.apple.com/us/album/123456?app=music"
    )
    assert (
        media_urls.to_embed_url("https://www.instagram.com/reel/ABC123/")
        == "https://www.instagram.com/p/ABC123/embed"
    )


def test_scheme_typos_are_cleaned() -> None:
    assert media_urls.to_embed_url("hhttps://youtu.be/coh2TB6B2EA") == "https://www.youtube.com/embed/coh2TB6B2EA"


def test_media_display_name() -> None:
    assert media_urls.media_display_name("https://www.youtube.com/watch?v=x") == "YouTube"
    assert media_urls.media_display_name("https://open.spotify.com/track/1") == "Spotify"
    assert media_urls.media_display_name("https://www.example.org/x") == "example"
    assert media_urls.media_display_name("not a url") == "Link"


def test_share_links_are_expanded_with_requester() -> None:
    class DummyRequester:
        def __init__(self) -> None:
            self.calls: list[tuple[str, bool, float]] = []

        def head(self, url: str, *, allow_redirects: bool, timeout: float):
            self.calls.append((url, allow_redirects, timeout))
            return SimpleNamespace(url="https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC")

    requester = DummyRequester()
    media_type, embed = media_urls.resolve_media("https://spotify.link/abc", requester=requester, timeout=1.5)

    assert requester.calls == [("https://spotify.link/abc", True, 1.5)]
    assert media_type == "spotify"
    assert embed == "https://open.spotify.com/embed/track/4uLU6hMCjMI75M1A2tKUQC"


def test_network_failure_yields_unknown() -> None:
    class DummyRequester:
        def head(self, url: str, *, allow_redirects: bool, timeout: float):
            raise requests.ConnectionError("offline")

    assert media_urls.resolve_media("https://on.soundcloud.com/xyz", requester=DummyRequester()) == ("unknown", "")


def test_regular_links_skip_the_network() -> None:
    class DummyRequester:
        def head(self, *args, **kwargs):  # pragma: no cover - must not be called
            raise AssertionError("unexpected request")

    url = "https://youtu.be/coh2TB6B2EA"
    assert media_urls.expand_share_link(url, requester=DummyRequester()) == url
