"""View / Edit / Preview / Loading / Saving state machine for the profile page."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import replace
from typing import Any, Callable

from models import RECORD_PROFILE, ProfileRecords
from services.errors import InvalidTransitionError, StorageWriteError
from services.update_dispatcher import (
    TARGET_RECORDS,
    UpdateDispatcher,
    UpdateTarget,
    stage_patch,
    target_patch,
    target_value,
)

logger = logging.getLogger(__name__)

DEFAULT_LOADING_TIMEOUT = 2.0


class ProfileMode(str, enum.Enum):
    VIEW = "view"
    EDIT = "edit"
    PREVIEW = "preview"
    LOADING = "loading"
    SAVING = "saving"


ALLOWED_TRANSITIONS: dict[ProfileMode, frozenset[ProfileMode]] = {
    ProfileMode.VIEW: frozenset({ProfileMode.EDIT, ProfileMode.LOADING}),
    ProfileMode.EDIT: frozenset({ProfileMode.VIEW, ProfileMode.PREVIEW, ProfileMode.SAVING}),
    ProfileMode.PREVIEW: frozenset({ProfileMode.EDIT, ProfileMode.VIEW}),
    ProfileMode.LOADING: frozenset({ProfileMode.VIEW, ProfileMode.EDIT}),
    ProfileMode.SAVING: frozenset({ProfileMode.EDIT, ProfileMode.VIEW}),
}


def can_transition(current: ProfileMode, target: ProfileMode) -> bool:
    return ProfileMode(target) in ALLOWED_TRANSITIONS[ProfileMode(current)]


class EditModeMachine:
    """Owns the page mode, the persisted snapshot and the editable working copy.

    Rejected transitions never raise: the :class:`InvalidTransitionError` is
    logged, kept on ``last_error`` and the call returns ``False``.
    """

    def __init__(
        self,
        dispatcher: UpdateDispatcher,
        records: ProfileRecords | None = None,
        *,
        loading_timeout_seconds: float = DEFAULT_LOADING_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._dispatcher = dispatcher
        self._mode = ProfileMode.VIEW
        self._persisted = records if records is not None else ProfileRecords()
        self._working = self._persisted
        self._loading_timeout = loading_timeout_seconds
        self._clock = clock
        self._loading_started: float | None = None
        self.last_error: InvalidTransitionError | None = None
        self.save_errors: dict[UpdateTarget, StorageWriteError] = {}
        self.validation: dict[str, str] = {}

    @property
    def mode(self) -> ProfileMode:
        return self._mode

    @property
    def records(self) -> ProfileRecords:
        """The records to render; in Edit and Preview this includes unsaved edits."""

        return self._working

    @property
    def persisted(self) -> ProfileRecords:
        return self._persisted

    @property
    def dispatcher(self) -> UpdateDispatcher:
        return self._dispatcher

    def transition(self, target: ProfileMode) -> bool:
        """Move to ``target`` and run that mode's entry work.

        Entering Loading starts the safety timer, entering Saving flushes the
        dirty targets, and leaving Edit or Preview for View drops unsaved
        edits. Saving only ends in View once nothing is left to persist.
        """

        target = ProfileMode(target)
        if not can_transition(self._mode, target):
            return self._reject(target)
        if self._mode is ProfileMode.SAVING and target is ProfileMode.VIEW:
            if self.save_errors or self.dirty_targets():
                logger.warning("Save has not completed; staying in %s", self._mode.value)
                return self._reject(target)
        previous = self._mode
        logger.debug("Profile mode %s -> %s", previous.value, target.value)
        self._mode = target
        self.last_error = None
        if previous is ProfileMode.LOADING:
            self._loading_started = None
        if previous is ProfileMode.SAVING:
            self.save_errors = {}
        if target is ProfileMode.LOADING:
            self._loading_started = self._clock()
        elif target is ProfileMode.VIEW and previous in (ProfileMode.EDIT, ProfileMode.PREVIEW):
            self._working = self._persisted
            self.validation = {}
        elif target is ProfileMode.SAVING:
            self._flush()
        return True

    def enter_edit(self) -> bool:
        return self.transition(ProfileMode.EDIT)

    def toggle_preview(self) -> bool:
        if self._mode is ProfileMode.PREVIEW:
            return self.transition(ProfileMode.EDIT)
        return self.transition(ProfileMode.PREVIEW)

    def cancel_edit(self) -> bool:
        """Leave Edit or Preview for View, discarding unsaved edits."""

        if self._mode not in (ProfileMode.EDIT, ProfileMode.PREVIEW):
            return self._reject(ProfileMode.VIEW)
        return self.transition(ProfileMode.VIEW)

    def _reject(self, target: ProfileMode) -> bool:
        error = InvalidTransitionError(self._mode.value, target.value)
        logger.warning("Rejected %s", error)
        self.last_error = error
        return False

    # Working copy ------------------------------------------------------
    def stage(self, target: UpdateTarget, value: Any) -> bool:
        """Apply an edit to the working copy; only allowed while editing."""

        if self._mode is not ProfileMode.EDIT:
            logger.warning("Ignored %s edit outside edit mode (%s)", UpdateTarget(target).value, self._mode.value)
            return False
        self._working = stage_patch(self._working, target, value)
        return True

    def stage_records(self, records: ProfileRecords) -> bool:
        """Stage every editable part of ``records`` (used to load example content)."""

        if self._mode is not ProfileMode.EDIT:
            logger.warning("Ignored example content outside edit mode (%s)", self._mode.value)
            return False
        for target in UpdateTarget:
            self._working = stage_patch(self._working, target, target_patch(records, target))
        return True

    def is_dirty(self, target: UpdateTarget) -> bool:
        return target_value(self._working, target) != target_value(self._persisted, target)

    def dirty_targets(self) -> list[UpdateTarget]:
        return [target for target in UpdateTarget if self.is_dirty(target)]

    # Saving ------------------------------------------------------------
    def request_save(self) -> bool:
        """Edit -> Saving, then flush every dirty target.

        Returns ``True`` once everything is persisted and the page is back in
        View. On any write failure the machine stays in Saving with
        ``save_errors`` populated.
        """

        if not self.transition(ProfileMode.SAVING):
            return False
        return self._mode is ProfileMode.VIEW

    def retry_save(self) -> bool:
        if self._mode is not ProfileMode.SAVING:
            logger.warning("Retry requested while %s", self._mode.value)
            return False
        return self._flush()

    def abandon_save(self) -> bool:
        """Saving -> Edit, keeping the unsaved edits."""

        if self._mode is not ProfileMode.SAVING:
            return self._reject(ProfileMode.EDIT)
        return self.transition(ProfileMode.EDIT)

    def _flush(self) -> bool:
        self.save_errors = {}
        self.validation = {}
        for target in self.dirty_targets():
            result = self._dispatcher.apply(target, target_patch(self._working, target))
            self.validation.update(result.validation)
            if result.ok:
                self._absorb(target, result.value)
            else:
                self.save_errors[target] = result.error
        if self.save_errors:
            logger.error(
                "Save incomplete; %d of the edited sections failed: %s",
                len(self.save_errors),
                ", ".join(target.value for target in self.save_errors),
            )
            return False
        return self.transition(ProfileMode.VIEW)

    def _absorb(self, target: UpdateTarget, value: Any) -> None:
        record = TARGET_RECORDS[target]
        if record == RECORD_PROFILE:
            self._persisted = replace(self._persisted, profile=value)
        else:
            self._persisted = self._persisted.replace_record(record, value)
            self._working = self._working.replace_record(record, value)
            self._persisted = replace(self._persisted, profile=self._persisted.profile.mark_edited())
        self._working = replace(self._working, profile=self._working.profile.mark_edited())

    # Loading -----------------------------------------------------------
    def begin_loading(self, now: float | None = None) -> bool:
        if not self.transition(ProfileMode.LOADING):
            return False
        self._loading_started = self._clock() if now is None else now
        return True

    def finish_loading(self, records: ProfileRecords | None = None) -> bool:
        if self._mode is not ProfileMode.LOADING:
            logger.warning("Reload finished while %s; ignoring", self._mode.value)
            return False
        if records is not None:
            self._install(records)
        return self.transition(ProfileMode.VIEW)

    def loading_remaining(self, now: float | None = None) -> float | None:
        """Seconds left before the loading timer fires, or ``None`` outside Loading."""

        if self._mode is not ProfileMode.LOADING or self._loading_started is None:
            return None
        now = self._clock() if now is None else now
        return max(0.0, self._loading_timeout - (now - self._loading_started))

    def check_loading_timeout(self, now: float | None = None) -> bool:
        """Force Loading -> View once the loading timeout has elapsed."""

        if self._mode is not ProfileMode.LOADING or self._loading_started is None:
            return False
        now = self._clock() if now is None else now
        if now - self._loading_started < self._loading_timeout:
            return False
        logger.warning("Profile reload exceeded %.1fs; showing current records", self._loading_timeout)
        return self.transition(ProfileMode.VIEW)

    def replace_records(self, records: ProfileRecords) -> None:
        """Install freshly loaded records, dropping any unsaved edits."""

        if self._mode is ProfileMode.SAVING:
            self.transition(ProfileMode.EDIT)
        if self._mode in (ProfileMode.EDIT, ProfileMode.PREVIEW):
            self.transition(ProfileMode.VIEW)
        if self._mode is ProfileMode.VIEW:
            self.begin_loading()
        self.finish_loading(records)

    def _install(self, records: ProfileRecords) -> None:
        self._persisted = records
        self._working = records
        self.save_errors = {}
        self.validation = {}


__all__ = [
    "ALLOWED_TRANSITIONS",
    "DEFAULT_LOADING_TIMEOUT",
    "EditModeMachine",
    "ProfileMode",
    "can_transition",
]
