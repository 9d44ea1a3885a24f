"""Exceptions raised by the bind model, codec and persistence layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from model.binds import Bind, BindKind


class BindError(Exception):
    """Base class for every bind-related failure."""


class UnknownBindId(BindError):
    """Raised when an operation names a bind id that does not exist."""

    def __init__(self, bind_id: int):
        super().__init__(f"No bind with id {bind_id}")
        self.bind_id = bind_id


class GroupedBindRemoval(BindError):
    """Raised when a grouped bind is removed without its group."""

    def __init__(self, bind: Bind):
        super().__init__(
            f"Bind {bind.id} belongs to a {bind.kind.label} group; remove the whole group instead"
        )
        self.bind = bind


class GroupedKindChange(BindError):
    """Raised when a kind change would move a bind into or out of a group."""

    def __init__(self, bind: Bind, kind: BindKind | None):
        old = bind.kind.label if bind.kind else "unset"
        new = kind.label if kind else "unset"
        super().__init__(
            f"Bind {bind.id} cannot change kind from {old} to {new}; "
            "SOCD and mash trigger binds are added and removed as groups"
        )
        self.bind = bind
        self.kind = kind


class DuplicateMashTriggerGroup(BindError):
    """Raised when a second mash-trigger group is added."""

    def __init__(self) -> None:
        super().__init__("A mash trigger group already exists")


class UnresolvedSocdLink(BindError):
    """Raised when an SOCD bind has no partner whose input matches its output."""

    def __init__(self, bind: Bind):
        super().__init__(
            f"SOCD bind {bind.id} ({bind.input or '-'} -> {bind.output or '-'}) has no linked partner"
        )
        self.bind = bind


class InvalidMashTriggerGroup(BindError):
    """Raised when decoded records hold a mash-trigger count other than 0 or 3."""

    def __init__(self, count: int, expected: int):
        super().__init__(f"Found {count} mash trigger binds, expected 0 or {expected}")
        self.count = count


class UnknownBindKind(BindError):
    """Raised when a record's result_type is neither a controller result nor a bind kind."""

    def __init__(self, result_type: str):
        super().__init__(f"Unknown bind kind: '{result_type}'")
        self.result_type = result_type


class UnresolvableBind(BindError):
    """Raised by encode when binds cannot be expressed as records.

    Carries every offending bind so the caller can report them all at once.
    """

    def __init__(self, problems: list[tuple[Bind, str]]):
        details = "; ".join(f"bind {bind.id}: {reason}" for bind, reason in problems)
        super().__init__(f"Cannot encode binds: {details}")
        self.problems = problems

    @property
    def binds(self) -> list[Bind]:
        return [bind for bind, _ in self.problems]


class LoadFailure(BindError):
    """Raised when the bind config cannot be read."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to load bind config: {reason}")
        self.reason = reason


class SaveFailure(BindError):
    """Raised when the bind config cannot be written."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to save bind config: {reason}")
        self.reason = reason
