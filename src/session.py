"""Editing session: the current bind model and its load/save boundary."""

from __future__ import annotations

import asyncio
import logging

from codec import decode, encode
from model import BindGroups, BindModel
from store import BindConfigFile

log = logging.getLogger(__name__)


class KeymapSession:
    """Owns the bind model being edited and moves it to and from storage.

    Loads and saves are the only suspension points. Both are serialised
    through one lock, and neither touches the current model unless the whole
    operation succeeds.
    """

    def __init__(self, store: BindConfigFile):
        self.store = store
        self.model = BindModel()
        self.groups = BindGroups(self.model)
        self.dirty = False
        self._io_lock = asyncio.Lock()

    async def load(self) -> None:
        """Replace the model with the stored records.

        Raises:
            LoadFailure: the store could not be read.
            BindError: the records do not decode. The current model is kept.
        """
        async with self._io_lock:
            records = await asyncio.to_thread(self.store.load_records)
            model, groups = decode(records)
            self.model = model
            self.groups = groups
            self.dirty = False
        log.info(f"Session loaded {len(self.model)} binds")

    async def save(self) -> int:
        """Encode the model and write it to the store.

        Returns:
            Number of records written.

        Raises:
            UnresolvableBind: some bind cannot be encoded; nothing is written.
            SaveFailure: the store could not be written.
        """
        async with self._io_lock:
            records = encode(self.model)
            await asyncio.to_thread(self.store.save_records, records)
            self.dirty = False
        log.info(f"Session saved {len(records)} records")
        return len(records)

    def mark_dirty(self) -> None:
        self.dirty = True
