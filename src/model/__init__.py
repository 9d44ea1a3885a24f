"""Model classes for overbind."""

from model.binds import Bind, BindKind, BindModel, Side
from model.groups import BindGroups
from model.record import PersistedRecord
from model.errors import (
    BindError,
    DuplicateMashTriggerGroup,
    GroupedBindRemoval,
    GroupedKindChange,
    InvalidMashTriggerGroup,
    LoadFailure,
    SaveFailure,
    UnknownBindId,
    UnknownBindKind,
    UnresolvableBind,
    UnresolvedSocdLink,
)

__all__ = [
    "Bind",
    "BindKind",
    "BindModel",
    "Side",
    "BindGroups",
    "PersistedRecord",
    "BindError",
    "DuplicateMashTriggerGroup",
    "GroupedBindRemoval",
    "GroupedKindChange",
    "InvalidMashTriggerGroup",
    "LoadFailure",
    "SaveFailure",
    "UnknownBindId",
    "UnknownBindKind",
    "UnresolvableBind",
    "UnresolvedSocdLink",
]
