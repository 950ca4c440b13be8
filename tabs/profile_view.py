"""Read-only profile page (View and Preview modes)."""

from __future__ import annotations

import streamlit as st

from models import ProfileRecords
from services.media_urls import media_display_name
from ui_components import SECTION_LABELS, profile_addresses, visible_sections


def _render_header(records: ProfileRecords) -> None:
    profile = records.profile
    col_image, col_text = st.columns([1, 3])
    with col_image:
        if profile.image_ref.startswith(("http://", "https://")):
            st.image(profile.image_ref, use_container_width=True)
        else:
            st.caption(profile.image_ref or "No image")
    with col_text:
        st.markdown(f"## {profile.display_name or 'Unnamed'}")
        if profile.title:
            st.markdown(f"**{profile.title}**")
        if profile.bio:
            st.write(profile.bio)
        links = [f"[{link.platform}]({link.url})" for link in profile.social_links if link.url]
        if links:
            st.markdown(" · ".join(links))
        for label, address in profile_addresses(profile):
            st.caption(f"{label}: {address}")


def _render_spotlight(records: ProfileRecords) -> None:
    if not records.spotlight:
        st.caption("Nothing in the spotlight yet.")
        return
    columns = st.columns(min(len(records.spotlight), 3))
    for index, item in enumerate(records.spotlight):
        with columns[index % len(columns)]:
            st.markdown(f"**{item.title or 'Untitled'}**")
            if item.description:
                st.caption(item.description)
            if item.link:
                st.markdown(f"[Open]({item.link})")


def _render_media(records: ProfileRecords) -> None:
    items = [item for item in records.media if not item.is_blank]
    if not items:
        st.caption("No media added yet.")
        return
    for item in items:
        label = item.title or media_display_name(item.source_url)
        if item.media_type == "youtube" and item.source_url:
            st.video(item.source_url)
        elif item.embed_url:
            st.markdown(f"[{label}]({item.embed_url})")
        else:
            st.markdown(f"[{label}]({item.source_url})")


def _render_shop(records: ProfileRecords) -> None:
    if not records.shop:
        st.caption("The shop is empty.")
        return
    for item in records.shop:
        title = item.title or "Untitled"
        price = f" · {item.price}" if item.price else ""
        st.markdown(f"**{title}**{price}")
        if item.description:
            st.caption(item.description)
        if item.link:
            st.markdown(f"[Buy]({item.link})")


def _render_sticker(records: ProfileRecords) -> None:
    image = records.sticker.image_ref
    if image.startswith(("http://", "https://")):
        st.image(image, width=120)
    else:
        st.caption(f"Sticker: {image}")


_RENDERERS = {
    "spotlight": _render_spotlight,
    "media": _render_media,
    "shop": _render_shop,
    "sticker": _render_sticker,
}


def render_tab(records: ProfileRecords, *, preview: bool = False) -> None:
    if preview:
        st.info("Preview: this is how visitors will see your unsaved changes.")
    _render_header(records)
    for section in visible_sections(records):
        st.divider()
        st.subheader(SECTION_LABELS[section])
        _RENDERERS[section](records)
