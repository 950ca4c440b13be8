"""Tests for the editor row helpers in :mod:`tabs.profile_editor`."""

from __future__ import annotations

from tabs.profile_editor import SPOTLIGHT_FIELDS, clean_rows


def test_clean_rows_drops_new_blank_rows_and_strips_values() -> None:
    rows = [
        {"id": "1", "title": " Tour ", "description": None, "image": "", "link": ""},
        {"id": None, "title": None, "description": "", "image": None, "link": None},
        {"title": "New", "description": "Fresh"},
    ]
    cleaned = clean_rows(rows, SPOTLIGHT_FIELDS)
    assert cleaned == [
        {"id": "1", "title": "Tour", "description": "", "image": "", "link": ""},
        {"id": "", "title": "New", "description": "Fresh", "image": "", "link": ""},
    ]


def test_clean_rows_keeps_existing_blank_rows() -> None:
    cleaned = clean_rows([{"id": "media-placeholder", "title": "", "source_url": ""}], ("id", "title", "source_url"))
    assert cleaned == [{"id": "media-placeholder", "title": "", "source_url": ""}]


def test_clean_rows_handles_none() -> None:
    assert clean_rows(None, SPOTLIGHT_FIELDS) == []
