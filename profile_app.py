"""Streamlit link-in-bio profile page."""

from __future__ import annotations

import logging
import time

import streamlit as st

from services.edit_mode import EditModeMachine, ProfileMode
from services.profile_helpers import get_binding, get_settings, reset_profiles
from tabs import profile_editor, profile_view, wallet_controls
from ui_components import render_json_viewer, show_save_errors, show_validation_messages, toggle_group

logger = logging.getLogger(__name__)


def _render_mode_actions(machine: EditModeMachine) -> None:
    mode = machine.mode
    if mode is ProfileMode.VIEW:
        if st.button("Edit profile", key="enter_edit_btn"):
            machine.enter_edit()
            st.rerun()
        return
    if mode is ProfileMode.EDIT:
        col_save, col_preview, col_cancel = st.columns(3)
        if col_save.button("Save", type="primary", key="save_btn"):
            if machine.request_save():
                st.toast("Profile saved", icon="💾")
            st.rerun()
        if col_preview.button("Preview", key="preview_btn"):
            machine.toggle_preview()
            st.rerun()
        if col_cancel.button("Discard changes", key="cancel_btn"):
            machine.cancel_edit()
            st.rerun()
        return
    if mode is ProfileMode.PREVIEW:
        col_back, col_cancel = st.columns(2)
        if col_back.button("Back to editor", key="preview_back_btn"):
            machine.toggle_preview()
            st.rerun()
        if col_cancel.button("Discard changes", key="preview_cancel_btn"):
            machine.cancel_edit()
            st.rerun()
        return
    if mode is ProfileMode.SAVING:
        show_save_errors(machine.save_errors)
        col_retry, col_back = st.columns(2)
        if col_retry.button("Retry save", key="retry_save_btn"):
            if machine.retry_save():
                st.toast("Profile saved", icon="💾")
            st.rerun()
        if col_back.button("Back to editor", key="abandon_save_btn"):
            machine.abandon_save()
            st.rerun()


def _wait_for_loading(machine: EditModeMachine, *, st_module=st, sleep=time.sleep) -> None:
    """Rerun once the loading timer is due; no widget event arrives while loading."""

    remaining = machine.loading_remaining()
    if remaining is None:
        return
    sleep(remaining)
    st_module.rerun()


def _render_dev_controls(session_state, machine: EditModeMachine) -> None:
    sidebar = st.sidebar
    sidebar.subheader("Developer")
    with sidebar:
        target = toggle_group(
            "Force mode",
            [mode.value for mode in ProfileMode],
            key="dev_force_mode",
            default=machine.mode.value,
        )
    if sidebar.button("Apply mode", key="dev_apply_mode_btn"):
        if not machine.transition(ProfileMode(target)):
            sidebar.warning(str(machine.last_error))
        else:
            st.rerun()
    if sidebar.button("Reset all profiles", key="dev_reset_btn"):
        removed, error = reset_profiles(session_state)
        if error:
            sidebar.error("Unable to reset the profile store.")
            sidebar.caption(str(error))
        else:
            st.toast(f"Removed {removed} stored records", icon="🧹")
            st.rerun()
    with sidebar:
        render_json_viewer("Working copy", machine.records.asdict())


def main() -> None:
    st.set_page_config(page_title="Profile", layout="wide")
    settings = get_settings(st.session_state)
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    wallet_controls.render_tab(st.session_state)
    binding = get_binding(st.session_state)
    machine = binding.machine
    machine.check_loading_timeout()

    if settings.enable_dev_controls:
        _render_dev_controls(st.session_state, machine)

    if machine.last_error is not None:
        st.caption(f"Ignored action: {machine.last_error}")

    _render_mode_actions(machine)
    show_validation_messages(machine.validation)

    mode = machine.mode
    if mode is ProfileMode.LOADING:
        st.info("Loading profile…")
        _wait_for_loading(machine)
    elif mode is ProfileMode.EDIT:
        profile_editor.render_tab(
            machine,
            identity=binding.current_identity,
            dev_controls=settings.enable_dev_controls,
        )
    else:
        profile_view.render_tab(machine.records, preview=mode is ProfileMode.PREVIEW)


if __name__ == "__main__":  # pragma: no cover
    main()
