"""Bind model: the session's collection of binds."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from model.errors import GroupedBindRemoval, GroupedKindChange, UnknownBindId

log = logging.getLogger(__name__)


class BindKind(Enum):
    """What a bind produces when its input key is pressed.

    Values are the result_type tags written for non-controller binds.
    Controller binds are written with the controller table's own tags.
    """

    KEYBOARD = "keyboard"
    CONTROLLER = "controller"
    SOCD = "socd"
    MASH_TRIGGER = "mash_trigger"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    @property
    def is_grouped(self) -> bool:
        """Grouped kinds are only created and removed as a whole group."""
        return self in (BindKind.SOCD, BindKind.MASH_TRIGGER)

    @property
    def output_is_key(self) -> bool:
        """Whether output resolves through the key table (vs. the controller table)."""
        return self is not BindKind.CONTROLLER

    @classmethod
    def from_tag(cls, tag: str) -> BindKind | None:
        """Kind for a persisted result_type tag, or None if it is not a bind kind tag."""
        for kind in cls:
            if kind.value == tag and kind is not BindKind.CONTROLLER:
                return kind
        return None


_KIND_LABELS = {
    BindKind.KEYBOARD: "Keyboard",
    BindKind.CONTROLLER: "Controller",
    BindKind.SOCD: "SOCD",
    BindKind.MASH_TRIGGER: "Mash Trigger",
}


class Side(Enum):
    """One end of a bind."""

    INPUT = "input"
    OUTPUT = "output"

    @property
    def opposite(self) -> Side:
        return Side.OUTPUT if self is Side.INPUT else Side.INPUT


@dataclass
class Bind:
    """One mapping from a physical key to an output.

    An empty input or output is the unresolved placeholder. kind is None only
    for a freshly created bind whose kind has not been picked yet.
    """

    id: int
    kind: BindKind | None = None
    input: str = ""
    output: str = ""

    def get_side(self, side: Side) -> str:
        return self.input if side is Side.INPUT else self.output

    def set_side(self, side: Side, value: str) -> None:
        if side is Side.INPUT:
            self.input = value
        else:
            self.output = value

    def __str__(self) -> str:
        kind = self.kind.label if self.kind else "?"
        return f"[{self.id}] {kind}: {self.input or '-'} -> {self.output or '-'}"


EDITABLE_FIELDS = ("kind", "input", "output")


def _is_grouped(*kinds: BindKind | None) -> bool:
    return any(kind is not None and kind.is_grouped for kind in kinds)


class BindModel:
    """Ordered collection of binds keyed by id.

    Iteration and list() follow creation order, which is also the order
    records are encoded in.
    """

    def __init__(self) -> None:
        self._binds: dict[int, Bind] = {}

    def create(self, kind: BindKind | None = None) -> Bind:
        """Create an empty bind with the next id after the highest in use."""
        bind_id = max(self._binds, default=-1) + 1
        bind = Bind(id=bind_id, kind=kind)
        self._binds[bind_id] = bind
        log.debug(f"Created bind {bind}")
        return bind

    def get(self, bind_id: int) -> Bind:
        try:
            return self._binds[bind_id]
        except KeyError:
            raise UnknownBindId(bind_id) from None

    def update(self, bind_id: int, field: str, value: str | BindKind | None) -> Bind:
        """Replace exactly one field of a bind.

        Raises:
            GroupedKindChange: the kind would change into or out of SOCD or
                mash trigger. Those binds only exist as whole groups.
        """
        bind = self.get(bind_id)
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Cannot update bind field '{field}'")
        if field == "kind" and value is not None and not isinstance(value, BindKind):
            value = BindKind(value)
        if field == "kind" and value is not bind.kind and _is_grouped(bind.kind, value):
            raise GroupedKindChange(bind, value)
        setattr(bind, field, value)
        log.debug(f"Updated bind {bind_id}: {field}={value!r}")
        return bind

    def remove(self, bind_id: int) -> Bind:
        """Remove a single ungrouped bind.

        SOCD and mash-trigger binds must be removed through BindGroups, which
        removes the whole group.
        """
        bind = self.get(bind_id)
        if bind.kind is not None and bind.kind.is_grouped:
            raise GroupedBindRemoval(bind)
        return self._discard(bind_id)

    def _discard(self, bind_id: int) -> Bind:
        """Remove a bind without group checks. Only BindGroups calls this."""
        bind = self._binds.pop(bind_id)
        log.debug(f"Removed bind {bind}")
        return bind

    def list(self) -> list[Bind]:
        return list(self._binds.values())

    def of_kind(self, kind: BindKind) -> list[Bind]:
        return [bind for bind in self._binds.values() if bind.kind is kind]

    def __iter__(self) -> Iterator[Bind]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._binds)

    def __contains__(self, bind_id: object) -> bool:
        return bind_id in self._binds
