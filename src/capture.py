"""Key capture: wait for the next key press and resolve it to a key name."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from keycodes import KEY_CODES, KeyCodeTable, resolve_key_event
from model import Side

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptureResult:
    """A key press resolved for a bind side."""

    bind_id: int
    side: Side
    key_name: str


class KeyCapture:
    """Listening state for a pending key capture.

    Nothing here mutates a bind. feed() hands back a CaptureResult and the
    caller applies it, so cancelling at any point has no side effects.
    """

    def __init__(self, table: KeyCodeTable = KEY_CODES):
        self.table = table
        self._target: tuple[int, Side] | None = None

    @property
    def listening(self) -> bool:
        return self._target is not None

    @property
    def target(self) -> tuple[int, Side] | None:
        return self._target

    def begin(self, bind_id: int, side: Side) -> None:
        log.debug(f"Listening for {side.value} key of bind {bind_id}")
        self._target = (bind_id, side)

    def cancel(self) -> None:
        if self._target is not None:
            log.debug(f"Cancelled key capture for bind {self._target[0]}")
        self._target = None

    def feed(self, key: str) -> CaptureResult | None:
        """Offer a key event name.

        Returns:
            The result if the key resolves to a table entry (capture then
            ends), or None if the key is unknown or nothing is listening.
        """
        if self._target is None:
            return None
        name = resolve_key_event(key, self.table)
        if name is None:
            log.debug(f"Ignoring unmapped key {key!r}")
            return None
        bind_id, side = self._target
        self._target = None
        log.debug(f"Captured {name} for bind {bind_id} {side.value}")
        return CaptureResult(bind_id=bind_id, side=side, key_name=name)
