"""Group invariants: SOCD pairs and the mash-trigger group.

Groups are not stored on the binds themselves. SOCD links live in an index
keyed by bind id that every mutating call here keeps current; the
mash-trigger group is simply the set of MASH_TRIGGER binds, since at most one
group can exist. Every edit that has to touch more than one bind goes
through BindGroups.
"""

from __future__ import annotations

import logging

from constants import MASH_TRIGGER_GROUP_SIZE
from model.binds import Bind, BindKind, BindModel, Side
from model.errors import (
    DuplicateMashTriggerGroup,
    InvalidMashTriggerGroup,
    UnresolvedSocdLink,
)

log = logging.getLogger(__name__)


class BindGroups:
    """Maintains cross-bind consistency for a BindModel.

    The model owns the binds; this class only holds the SOCD link index and
    rewrites fields on binds it is handed.
    """

    def __init__(self, model: BindModel):
        self.model = model
        self._links: dict[int, int] = {}

    # =========================================================================
    # Queries
    # =========================================================================

    def partner(self, bind: Bind) -> Bind | None:
        """The other member of an SOCD pair, or None if the bind is unlinked."""
        partner_id = self._links.get(bind.id)
        if partner_id is None:
            return None
        return self.model.get(partner_id)

    def is_linked(self, bind: Bind) -> bool:
        return bind.id in self._links

    def socd_pairs(self) -> list[tuple[Bind, Bind]]:
        """Linked pairs, each listed once, in model order of the first member."""
        pairs = []
        for bind in self.model.of_kind(BindKind.SOCD):
            partner_id = self._links.get(bind.id)
            if partner_id is not None and bind.id < partner_id:
                pairs.append((bind, self.model.get(partner_id)))
        return pairs

    def mash_trigger_group(self) -> list[Bind]:
        return self.model.of_kind(BindKind.MASH_TRIGGER)

    @property
    def can_add_mash_trigger_group(self) -> bool:
        return not self.mash_trigger_group()

    # =========================================================================
    # Group creation
    # =========================================================================

    def add_socd_pair(self) -> tuple[Bind, Bind]:
        """Create two empty SOCD binds linked to each other."""
        first = self.model.create(BindKind.SOCD)
        second = self.model.create(BindKind.SOCD)
        self._link(first, second)
        log.info(f"Added SOCD pair {first.id}/{second.id}")
        return first, second

    def add_mash_trigger_group(self) -> tuple[Bind, Bind, Bind]:
        """Create the three mash-trigger binds.

        Raises:
            DuplicateMashTriggerGroup: if a group already exists. No binds
                are created in that case.
        """
        if not self.can_add_mash_trigger_group:
            raise DuplicateMashTriggerGroup()
        group = tuple(self.model.create(BindKind.MASH_TRIGGER) for _ in range(MASH_TRIGGER_GROUP_SIZE))
        log.info(f"Added mash trigger group {[bind.id for bind in group]}")
        return group

    # =========================================================================
    # Linked edits
    # =========================================================================

    def set_socd_side(self, bind: Bind, side: Side, value: str) -> None:
        """Set one side of an SOCD bind and the partner's opposite side.

        Keeps A.output == B.input and B.output == A.input whichever member
        or side is edited.
        """
        partner = self.partner(bind)
        if partner is None:
            raise UnresolvedSocdLink(bind)
        bind.set_side(side, value)
        partner.set_side(side.opposite, value)
        log.debug(f"SOCD pair {bind.id}/{partner.id}: {bind} | {partner}")

    def set_mash_trigger_input(self, bind: Bind, value: str) -> None:
        """Mash-trigger binds never remap: input and output are the same key."""
        bind.input = value
        bind.output = value

    def set_side(self, bind: Bind, side: Side, value: str) -> None:
        """Edit one side of any bind, applying whatever its kind requires."""
        match bind.kind:
            case BindKind.SOCD:
                self.set_socd_side(bind, side, value)
            case BindKind.MASH_TRIGGER:
                self.set_mash_trigger_input(bind, value)
            case BindKind.KEYBOARD | BindKind.CONTROLLER | None:
                bind.set_side(side, value)

    # =========================================================================
    # Removal
    # =========================================================================

    def remove_group_member(self, bind: Bind) -> list[Bind]:
        """Remove a bind together with the rest of its group.

        SOCD removes both members of the pair, mash trigger removes all
        three binds. Ungrouped binds are removed on their own.

        Returns:
            The removed binds, in model order.
        """
        match bind.kind:
            case BindKind.SOCD:
                members = [bind]
                partner = self.partner(bind)
                if partner is not None:
                    members.append(partner)
            case BindKind.MASH_TRIGGER:
                members = self.mash_trigger_group()
            case BindKind.KEYBOARD | BindKind.CONTROLLER | None:
                return [self.model.remove(bind.id)]

        removed = []
        for member in sorted(members, key=lambda b: b.id):
            self._links.pop(member.id, None)
            removed.append(self.model._discard(member.id))
        log.info(f"Removed {bind.kind.label} group {[b.id for b in removed]}")
        return removed

    # =========================================================================
    # Inference (decode time)
    # =========================================================================

    def infer_socd_links(self) -> None:
        """Rebuild SOCD links from bind fields.

        For each unlinked SOCD bind A, the first unlinked bind B (in model
        order) with B.input == A.output becomes its partner.

        Raises:
            UnresolvedSocdLink: for the first SOCD bind left without a partner.
        """
        socd_binds = self.model.of_kind(BindKind.SOCD)
        for bind in socd_binds:
            if self.is_linked(bind):
                continue
            for candidate in socd_binds:
                if candidate is bind or self.is_linked(candidate):
                    continue
                if candidate.input == bind.output:
                    self._link(bind, candidate)
                    break
            else:
                raise UnresolvedSocdLink(bind)

    def validate_mash_trigger_group(self) -> None:
        count = len(self.mash_trigger_group())
        if count not in (0, MASH_TRIGGER_GROUP_SIZE):
            raise InvalidMashTriggerGroup(count, MASH_TRIGGER_GROUP_SIZE)

    def _link(self, first: Bind, second: Bind) -> None:
        self._links[first.id] = second.id
        self._links[second.id] = first.id
