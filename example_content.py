"""Example content shown to first-time visitors."""

from __future__ import annotations

from dataclasses import replace

from models import (
    DEFAULT_STICKER_IMAGE,
    Identity,
    MediaItem,
    NamedIdentity,
    ProfileRecord,
    ProfileRecords,
    SectionVisibility,
    ShopItem,
    SocialLink,
    SpotlightItem,
    StickerRecord,
)

PLACEHOLDER_IMAGE = "/images/placeholder.png"

PLACEHOLDER_PROFILE = ProfileRecord(
    display_name="Your Name",
    title="Artist / Producer / DJ",
    bio=(
        "Tell your story here! Share what makes you unique as an artist. This is where fans "
        "can learn more about your journey, inspirations, and creative process."
    ),
    image_ref=PLACEHOLDER_IMAGE,
    social_links=(
        SocialLink("twitter", "https://twitter.com/example"),
        SocialLink("instagram", "https://instagram.com/example"),
    ),
    section_visibility=SectionVisibility(),
    has_been_edited=False,
)

EXAMPLE_SPOTLIGHT: tuple[SpotlightItem, ...] = (
    SpotlightItem(
        id="1",
        title="Latest Release",
        description="Check out my new track available on all platforms",
        image="/images/featured-artist-placeholder.jpg",
        link="https://example.com/latest-release",
    ),
    SpotlightItem(
        id="2",
        title="Upcoming Shows",
        description="See where I'm performing next and get tickets",
        image="/images/next-event-placeholder.jpg",
        link="https://example.com/tour-dates",
    ),
    SpotlightItem(
        id="3",
        title="New Collaboration",
        description="A special project with amazing artists",
        image="/images/latest-project-placeholder.jpg",
        link="https://example.com/collaboration",
    ),
)

EXAMPLE_MEDIA: tuple[MediaItem, ...] = (
    MediaItem(
        id="1",
        media_type="youtube",
        source_url="https://youtu.be/coh2TB6B2EA",
        embed_url="https://www.youtube.com/embed/coh2TB6B2EA",
    ),
    MediaItem(
        id="2",
        media_type="spotify-playlist",
        source_url="https://open.spotify.com/playlist/37i9dQZEVXbMDoHDwVN2tF?si=3Puyx2VJSxSoKu6tNk5KkA",
        embed_url="https://open.spotify.com/embed/playlist/37i9dQZEVXbMDoHDwVN2tF",
    ),
)

EXAMPLE_SHOP: tuple[ShopItem, ...] = (
    ShopItem(
        id="1",
        title="Limited Edition Merch",
        description="Exclusive merchandise from the latest tour",
        image="/images/shop-placeholder.jpg",
        price="$25.00",
        link="https://example.com/merch/limited-edition",
    ),
    ShopItem(
        id="2",
        title="Digital Album",
        description="Download my latest album in high quality",
        image="/images/digital-album-placeholder.jpg",
        price="$9.99",
        link="https://example.com/album/digital",
    ),
)

DEFAULT_STICKER = StickerRecord(visible=True, image_ref=DEFAULT_STICKER_IMAGE)

# Returning visitors with no media get one empty row to fill in.
BLANK_MEDIA_ID = "media-placeholder"
BLANK_MEDIA_ITEM = MediaItem(id=BLANK_MEDIA_ID)


def placeholder_profile(identity: Identity) -> ProfileRecord:
    """Placeholder profile for ``identity``; named wallets show their address."""

    if isinstance(identity, NamedIdentity):
        return replace(PLACEHOLDER_PROFILE, wallet_address=identity.handle)
    return PLACEHOLDER_PROFILE


def example_records(identity: Identity) -> ProfileRecords:
    return ProfileRecords(
        profile=placeholder_profile(identity),
        spotlight=EXAMPLE_SPOTLIGHT,
        media=EXAMPLE_MEDIA,
        shop=EXAMPLE_SHOP,
        sticker=DEFAULT_STICKER,
    )


__all__ = [
    "BLANK_MEDIA_ID",
    "BLANK_MEDIA_ITEM",
    "DEFAULT_STICKER",
    "EXAMPLE_MEDIA",
    "EXAMPLE_SHOP",
    "EXAMPLE_SPOTLIGHT",
    "PLACEHOLDER_PROFILE",
    "example_records",
    "placeholder_profile",
]
