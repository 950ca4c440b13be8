"""Sidebar wallet controls."""

from __future__ import annotations

import streamlit as st

from models import NamedIdentity
from services.profile_helpers import get_binding, get_settings, get_wallet
from services.wallet_session import DEV_ADDRESS
from ui_components import format_wallet_address


def render_tab(session_state) -> None:
    sidebar = st.sidebar
    sidebar.subheader("Wallet")

    wallet = get_wallet(session_state)
    binding = get_binding(session_state)
    active = wallet.get_active_identity()

    if isinstance(active, NamedIdentity):
        sidebar.success(f"Connected: {format_wallet_address(active.handle)}")
        if sidebar.button("Disconnect", key="wallet_disconnect_btn"):
            wallet.disconnect()
            st.toast("Wallet disconnected", icon="🔌")
            st.rerun()
    else:
        sidebar.info("Not connected. Edits are saved to this browser's default profile.")

    known = [identity.handle for identity in wallet.list_known_identities()]
    current = active.handle if isinstance(active, NamedIdentity) else None
    if known:
        options = known if current in known else ([current] + known if current else known)
        index = options.index(current) if current in options else None
        selection = sidebar.selectbox(
            "Known accounts",
            options,
            index=index,
            placeholder="Switch account...",
            format_func=format_wallet_address,
            key="wallet_known_accounts",
        )
        if selection and selection != current:
            wallet.switch_account(selection)
            st.toast(f"Switched to {format_wallet_address(selection)}", icon="🔀")
            st.rerun()

    with sidebar.form("wallet_connect_form", clear_on_submit=True):
        address = st.text_input("Connect wallet address", placeholder="SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7")
        submitted = st.form_submit_button("Connect")
        if submitted:
            address = address.strip()
            try:
                wallet.connect(address)
            except ValueError as exc:
                st.error(f"Unable to connect: {exc}")
            else:
                st.toast(f"Connected {format_wallet_address(address)}", icon="🔑")
                st.rerun()

    if get_settings(session_state).enable_dev_controls and not isinstance(active, NamedIdentity):
        if sidebar.button("Connect dev wallet", key="wallet_dev_connect_btn"):
            wallet.connect(DEV_ADDRESS)
            st.rerun()

    outcome = binding.last_outcome
    if outcome is not None and outcome.errors:
        sidebar.warning("Example content could not be fully saved; it will be shown but not kept.")
        for error in outcome.errors:
            sidebar.caption(str(error))


__all__ = ["render_tab"]
