"""Decide between seeding example content and loading a returning visitor's records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from example_content import BLANK_MEDIA_ITEM, example_records
from models import RECORD_MEDIA, RECORD_PROFILE, Identity, ProfileRecords
from services.errors import StorageWriteError
from services.profile_repository import ProfileRepository
from services.storage_keys import StorageKeySet

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SeedOutcome:
    records: ProfileRecords
    seeded: bool
    errors: list[StorageWriteError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class SeedingPolicy:
    """First visits get example content; returning visitors keep their edits."""

    def __init__(self, repository: ProfileRepository) -> None:
        self._repository = repository

    def is_first_visit(self, keys: StorageKeySet) -> bool:
        if not self._repository.has_record(keys, RECORD_PROFILE):
            return True
        return not self._repository.read(keys, RECORD_PROFILE).has_been_edited

    def resolve(self, keys: StorageKeySet, identity: Identity) -> SeedOutcome:
        """Return the records to show for ``identity``, seeding storage when needed.

        Seeding overwrites all five records. The outcome always carries the
        example content even when some writes fail; failures are listed in
        ``errors``.
        """

        if self.is_first_visit(keys):
            records = example_records(identity)
            results = self._repository.save_all(keys, records)
            errors = [result.error for result in results if result.error is not None]
            if errors:
                logger.error("Seeding %s left %d records unsaved", identity.handle, len(errors))
            else:
                logger.info("Seeded example content for %s", identity.handle)
            return SeedOutcome(records=records, seeded=True, errors=errors)

        records = self._repository.load(keys)
        if not records.media:
            records = records.replace_record(RECORD_MEDIA, (BLANK_MEDIA_ITEM,))
        logger.info("Loaded saved profile for %s", identity.handle)
        return SeedOutcome(records=records, seeded=False)


__all__ = ["SeedOutcome", "SeedingPolicy"]
