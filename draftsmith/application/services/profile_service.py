"""
Profile service orchestrator.

Every profile write (manual edit, refresh after upload or deletion) goes
through the merge functions while holding the user's lock, and commits
before releasing it, so whole merges never interleave.

Dependencies: draftsmith.core.profile, draftsmith.boundary.db
System role: Profile read/update/refresh orchestration
"""

import asyncio
import logging
from collections import Counter
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from draftsmith.boundary.db.CRUD.profile_crud import ProfileCRUD, profile_crud
from draftsmith.core.exceptions import ProfileExtractionError
from draftsmith.core.profile import Profile, merge, merge_extracted
from draftsmith.core.profile.extractor import ProfileExtractor

logger = logging.getLogger(__name__)


class UserLocks:
    """
    Per-user asyncio locks that exist only while someone holds or awaits them.

    Usage: `async with locks(user_id): ...`. Holders and waiters are counted
    so a lock is dropped once the last of them leaves, which keeps the map
    bounded by the number of users with a write in flight.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: Counter[str] = Counter()

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def __call__(self, user_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._users[user_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[user_id] -= 1
            if self._users[user_id] == 0:
                del self._users[user_id]
                self._locks.pop(user_id, None)

    def clear(self) -> None:
        self._locks.clear()
        self._users.clear()


class ProfileService:
    """Read, merge-update and re-extract a user's profile."""

    def __init__(
        self,
        db: AsyncSession,
        extractor: ProfileExtractor,
        locks: UserLocks,
        crud: ProfileCRUD | None = None,
    ) -> None:
        """
        Initialize profile service.

        Args:
            db: AsyncSession for profile persistence
            extractor: LLM-backed profile extractor
            locks: Process-wide per-user write locks
            crud: Profile CRUD (defaults to the module singleton)
        """
        self.db = db
        self.extractor = extractor
        self._locks = locks
        self._crud = crud or profile_crud

    async def get_profile(self, user_id: str) -> Profile | None:
        row = await self._crud.get_by_user(self.db, user_id)
        if row is None:
            return None
        return Profile.from_storage(row.data)

    async def update_profile(self, user_id: str, incoming: Profile) -> Profile:
        """
        Apply a partial update with the merge contract.

        Args:
            user_id: Owning user
            incoming: Partial profile; only fields present in the payload change

        Returns:
            Profile: Stored merged profile
        """
        async with self._locks(user_id):
            existing = await self.get_profile(user_id)
            merged = merge(existing, incoming)
            await self._crud.upsert(self.db, user_id, merged.to_storage())
            await self.db.commit()

        logger.info(
            f"{__name__}:update_profile - Profile updated",
            extra={"user_id": user_id, "fields": sorted(incoming.model_fields_set)},
        )
        return merged

    async def refresh_profile(self, user_id: str) -> Profile | None:
        """
        Re-extract the profile from all documents and merge it in.

        The stored raw_text always follows the current documents, so text
        of deleted documents stops reaching prompts. When there is too
        little text or extraction fails, the structured fields are kept.

        Returns:
            Profile | None: Stored profile after the refresh (None if the user has none)
        """
        async with self._locks(user_id):
            existing = await self.get_profile(user_id)
            corpus = await self.extractor.gather_corpus(self.db, user_id)
            try:
                extracted = await self.extractor.extract_from_corpus(user_id, corpus)
            except ProfileExtractionError as e:
                logger.warning(
                    f"{__name__}:refresh_profile - Extraction failed, keeping stored fields",
                    extra={"user_id": user_id, "error_msg": e.message[:300]},
                )
                extracted = None

            if extracted is None:
                return await self._sync_raw_text(user_id, existing, corpus)

            merged = merge_extracted(existing, extracted, corpus)
            await self._crud.upsert(self.db, user_id, merged.to_storage())
            await self.db.commit()

        logger.info(
            f"{__name__}:refresh_profile - Profile refreshed",
            extra={"user_id": user_id, "has_name": bool(merged.full_name)},
        )
        return merged

    async def _sync_raw_text(
        self, user_id: str, existing: Profile | None, corpus: str
    ) -> Profile | None:
        # Caller holds the user's lock
        if existing is None or existing.raw_text == corpus:
            return existing
        synced = existing.model_copy(update={"raw_text": corpus})
        await self._crud.upsert(self.db, user_id, synced.to_storage())
        await self.db.commit()
        logger.info(
            f"{__name__}:_sync_raw_text - Stored document text replaced",
            extra={"user_id": user_id, "corpus_len": len(corpus)},
        )
        return synced

    async def get_or_extract(self, user_id: str) -> Profile | None:
        """Return the stored profile, extracting one first if none is stored."""
        profile = await self.get_profile(user_id)
        if profile is not None:
            return profile
        return await self.refresh_profile(user_id)
