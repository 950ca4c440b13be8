"""Reusable Streamlit UI primitives."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import streamlit as st

from models import ProfileRecord, ProfileRecords
from services.errors import StorageWriteError

SECTION_LABELS = {
    "spotlight": "Spotlight",
    "media": "Media",
    "shop": "Shop",
    "sticker": "Sticker",
}


def visible_sections(records: ProfileRecords) -> list[str]:
    """Return the section names the page should render, in page order."""

    visibility = records.profile.section_visibility
    sections = [name for name in ("spotlight", "media", "shop") if getattr(visibility, name)]
    if visibility.sticker and records.sticker.visible:
        sections.append("sticker")
    return sections


def format_wallet_address(address: str, *, head: int = 6, tail: int = 4) -> str:
    """Shorten long wallet addresses to ``SP1234…abcd``."""

    address = (address or "").strip()
    if len(address) <= head + tail + 1:
        return address
    return f"{address[:head]}…{address[-tail:]}"


def profile_addresses(profile: ProfileRecord) -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = []
    if profile.show_wallet_address and profile.wallet_address:
        rows.append(("STX", format_wallet_address(profile.wallet_address)))
    if profile.show_btc_address and profile.btc_address:
        rows.append(("BTC", format_wallet_address(profile.btc_address)))
    return rows


def show_save_errors(errors: Mapping[Any, StorageWriteError], *, st_module=st) -> None:
    """Render a consistent error block for failed writes."""

    for target, error in errors.items():
        label = getattr(target, "value", str(target)).replace("_", " ")
        if error.reason == "quota":
            st_module.error(f"Could not save {label}: storage is full.")
        elif error.reason == "serialization":
            st_module.error(f"Could not save {label}: the content could not be stored.")
        else:
            st_module.error(f"Could not save {label}: {error}")
        st_module.caption(error.key)


def show_validation_messages(messages: Mapping[str, str], *, st_module=st) -> None:
    for item_id, message in messages.items():
        st_module.warning(f"{message} (item {item_id})")


def render_json_viewer(
    title: str,
    payload: object,
    *,
    expanded: bool = False,
    st_module=st,
) -> None:
    """Render a collapsible JSON viewer with consistent styling."""

    if payload is None:
        payload = {}
    with st_module.expander(title, expanded=expanded):
        st_module.json(payload, expanded=expanded)


def toggle_group(
    label: str,
    options: Sequence[str],
    *,
    key: str,
    default: str | None = None,
    help_text: str | None = None,
    st_module=st,
) -> str:
    """Render a segmented toggle and return the selected option."""

    if default and default in options:
        index = list(options).index(default)
    else:
        index = 0
    return st_module.radio(
        label,
        options,
        index=index,
        help=help_text,
        key=key,
        horizontal=True,
    )


__all__ = [
    "SECTION_LABELS",
    "format_wallet_address",
    "profile_addresses",
    "render_json_viewer",
    "show_save_errors",
    "show_validation_messages",
    "toggle_group",
    "visible_sections",
]
