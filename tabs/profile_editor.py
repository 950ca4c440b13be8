"""Profile editor forms (Edit mode)."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Iterable, Mapping, Sequence

import streamlit as st

from example_content import example_records
from models import SENTINEL, Identity, MediaItem, ShopItem, SocialLink, SpotlightItem
from services.edit_mode import EditModeMachine
from services.update_dispatcher import UpdateTarget
from validators import item_errors, validate_profile_fields, validate_social_url

SPOTLIGHT_FIELDS = ("id", "title", "description", "image", "link")
SHOP_FIELDS = ("id", "title", "description", "image", "link", "price")
MEDIA_FIELDS = ("id", "title", "source_url")
SOCIAL_FIELDS = ("platform", "url")


def clean_rows(rows: Iterable[Mapping[str, Any]] | None, fields: Sequence[str]) -> list[dict[str, str]]:
    """Normalise data-editor rows; blank rows the user added are dropped."""

    cleaned: list[dict[str, str]] = []
    for row in rows or []:
        values = {field: "" if row.get(field) is None else str(row.get(field)).strip() for field in fields}
        content = [value for field, value in values.items() if field != "id"]
        if not any(content) and not values.get("id"):
            continue
        cleaned.append(values)
    return cleaned


def _rows(items: Iterable[Any], fields: Sequence[str]) -> list[dict[str, str]]:
    rows = [{field: asdict(item).get(field, "") for field in fields} for item in items]
    return rows or [{field: "" for field in fields}]


def _render_profile_fields(machine: EditModeMachine) -> None:
    profile = machine.records.profile
    with st.form("profile_fields_form"):
        display_name = st.text_input("Name", value=profile.display_name)
        title = st.text_input("Title", value=profile.title)
        bio = st.text_area("Bio", value=profile.bio)
        image_ref = st.text_input("Profile image URL", value=profile.image_ref)
        col_stx, col_btc = st.columns(2)
        with col_stx:
            wallet_address = st.text_input("STX address", value=profile.wallet_address)
            show_wallet = st.checkbox("Show STX address", value=profile.show_wallet_address)
        with col_btc:
            btc_address = st.text_input("BTC address", value=profile.btc_address)
            show_btc = st.checkbox("Show BTC address", value=profile.show_btc_address)
        if st.form_submit_button("Apply profile details"):
            values = {
                "display_name": display_name.strip(),
                "title": title.strip(),
                "bio": bio.strip(),
                "image_ref": image_ref.strip(),
                "wallet_address": wallet_address.strip(),
                "show_wallet_address": show_wallet,
                "btc_address": btc_address.strip(),
                "show_btc_address": show_btc,
            }
            errors = validate_profile_fields(values)
            for message in errors.values():
                st.error(message)
            if not errors:
                machine.stage(UpdateTarget.PROFILE_FIELDS, values)


def _render_social_links(machine: EditModeMachine) -> None:
    links = machine.records.profile.social_links
    with st.form("social_links_form"):
        edited = st.data_editor(_rows(links, SOCIAL_FIELDS), num_rows="dynamic", key="social_links_editor")
        if st.form_submit_button("Apply social links"):
            rows = clean_rows(edited, SOCIAL_FIELDS)
            problems = []
            for row in rows:
                ok, message = validate_social_url(row["platform"].lower(), row["url"])
                if not ok:
                    problems.append(f"{row['platform'] or 'link'}: {message}")
            for problem in problems:
                st.error(problem)
            if not problems:
                machine.stage(
                    UpdateTarget.SOCIAL_LINKS,
                    [SocialLink(row["platform"].lower(), row["url"]) for row in rows],
                )


def _render_visibility(machine: EditModeMachine) -> None:
    visibility = machine.records.profile.section_visibility
    sticker = machine.records.sticker
    with st.form("visibility_form"):
        cols = st.columns(4)
        spotlight = cols[0].checkbox("Spotlight", value=visibility.spotlight)
        media = cols[1].checkbox("Media", value=visibility.media)
        shop = cols[2].checkbox("Shop", value=visibility.shop)
        show_sticker = cols[3].checkbox("Sticker", value=visibility.sticker)
        sticker_image = st.text_input("Sticker image", value=sticker.image_ref)
        if st.form_submit_button("Apply sections"):
            machine.stage(
                UpdateTarget.SECTION_VISIBILITY,
                {"spotlight": spotlight, "media": media, "shop": shop, "sticker": show_sticker},
            )
            machine.stage(UpdateTarget.STICKER, {"visible": show_sticker, "image_ref": sticker_image.strip()})


def _render_collection(
    machine: EditModeMachine,
    *,
    label: str,
    kind: str,
    target: UpdateTarget,
    items: Iterable[SpotlightItem | ShopItem | MediaItem],
    fields: Sequence[str],
) -> None:
    with st.form(f"{kind}_form"):
        edited = st.data_editor(
            _rows(items, fields),
            num_rows="dynamic",
            column_config={"id": None},
            key=f"{kind}_editor",
        )
        if st.form_submit_button(f"Apply {label.lower()}"):
            rows = clean_rows(edited, fields)
            problems = [] if kind == "media" else [
                f"{row['title'] or 'Item'}: {message}"
                for row in rows
                for message in item_errors(kind, row).values()
            ]
            for problem in problems:
                st.error(problem)
            if not problems:
                machine.stage(target, rows)


def render_tab(machine: EditModeMachine, *, identity: Identity = SENTINEL, dev_controls: bool = False) -> None:
    records = machine.records
    st.markdown("### Edit profile")
    if machine.dirty_targets():
        st.caption("Unsaved changes: " + ", ".join(t.value.replace("_", " ") for t in machine.dirty_targets()))

    _render_profile_fields(machine)
    _render_social_links(machine)
    _render_visibility(machine)
    _render_collection(
        machine,
        label="Spotlight",
        kind="spotlight",
        target=UpdateTarget.SPOTLIGHT_ITEMS,
        items=records.spotlight,
        fields=SPOTLIGHT_FIELDS,
    )
    _render_collection(
        machine,
        label="Media",
        kind="media",
        target=UpdateTarget.MEDIA_ITEMS,
        items=records.media,
        fields=MEDIA_FIELDS,
    )
    _render_collection(
        machine,
        label="Shop",
        kind="shop",
        target=UpdateTarget.SHOP_ITEMS,
        items=records.shop,
        fields=SHOP_FIELDS,
    )

    if dev_controls and st.button("Load example content", key="load_examples_btn"):
        machine.stage_records(example_records(identity))
        st.rerun()
