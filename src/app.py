"""Main TUI application for overbind."""

import logging
from pathlib import Path

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Button, DataTable, Footer, Label, Static

from capture import CaptureResult, KeyCapture
from keycodes import CONTROLLER_ACTIONS, KEY_CODES
from model import Bind, BindError, BindKind, Side
from session import KeymapSession
from ui import ControllerOutputModal, KeyCaptureModal
from ui.ids import css
import ui.ids as ids

log = logging.getLogger(__name__)

# Load CSS from file
APP_CSS = (Path(__file__).parent / "ui" / "styles.css").read_text()

# Kind cycle for ungrouped binds; SOCD and mash trigger are created as groups
KIND_CYCLE = {
    None: BindKind.KEYBOARD,
    BindKind.KEYBOARD: BindKind.CONTROLLER,
    BindKind.CONTROLLER: BindKind.KEYBOARD,
}

LINK_MARKERS = {
    BindKind.SOCD: "<>",
    BindKind.MASH_TRIGGER: "**",
}


class OverBindTUI(App):
    """TUI for editing keyboard remaps."""

    TITLE = "OverBind"
    ENABLE_COMMAND_PALETTE = False
    CSS = APP_CSS

    BINDINGS = [
        Binding("n", "new_bind", "New", show=True),
        Binding("k", "cycle_kind", "Kind", show=True),
        Binding("i", "capture_input", "Rebind", show=True),
        Binding("o", "set_output", "Output", show=True),
        Binding("x", "unbind", "Unbind", show=True),
        Binding("d", "delete_bind", "Delete", show=True),
        Binding("p", "add_socd_pair", "SOCD Pair", show=True),
        Binding("m", "add_mash_group", "Mash Group", show=True),
        Binding("ctrl+s", "save", "Save", show=True),
        Binding("ctrl+r", "reload", "Reload", show=False),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, session: KeymapSession, version: str = "0.0", load_on_mount: bool = True) -> None:
        super().__init__()
        self.session = session
        self.version = version
        self._load_on_mount = load_on_mount
        self._capture = KeyCapture(KEY_CODES)
        self.last_status = ""

    def compose(self) -> ComposeResult:
        yield Horizontal(
            Label(f"OverBind {self.version} - {self.session.store.path}", id=ids.HEADER_TITLE),
            Button("Reload", id=ids.RELOAD_BTN, variant="default"),
            Button("Save", id=ids.SAVE_BTN, variant="success"),
            id=ids.HEADER_CONTAINER,
        )
        yield DataTable(id=ids.BIND_TABLE, cursor_type="row", zebra_stripes=True)
        yield Horizontal(
            Static("", id=ids.STATUS_BAR),
            id=ids.FOOTER_CONTAINER,
        )
        yield Footer()

    # =========================================================================
    # Status and Table
    # =========================================================================

    def _set_status(self, message: str) -> None:
        """Set status bar message."""
        self.last_status = message
        try:
            status = self.query_one(css(ids.STATUS_BAR), Static)
            status.update(message)
        except NoMatches:
            pass

    def _format_row(self, bind: Bind) -> tuple[str, str, str, str, str]:
        marker = LINK_MARKERS.get(bind.kind, "") if bind.kind else ""
        kind = bind.kind.label if bind.kind else "?"
        code = KEY_CODES.name_to_code(bind.input)
        return (
            marker,
            kind,
            bind.input or "-",
            bind.output or "-",
            format(code, "x") if code is not None else "-",
        )

    def _refresh_table(self, select_id: int | None = None) -> None:
        """Rebuild the bind table from the model, keeping the cursor in place."""
        try:
            table = self.query_one(css(ids.BIND_TABLE), DataTable)
        except NoMatches:
            return
        previous_row = table.cursor_row
        table.clear()
        binds = self.session.model.list()
        for bind in binds:
            table.add_row(*self._format_row(bind), key=str(bind.id))

        if not binds:
            return
        row = previous_row
        if select_id is not None:
            for index, bind in enumerate(binds):
                if bind.id == select_id:
                    row = index
                    break
        table.move_cursor(row=max(0, min(row, len(binds) - 1)))

    def _selected_bind(self) -> Bind | None:
        """The bind under the table cursor (rows mirror model order)."""
        binds = self.session.model.list()
        if not binds:
            return None
        try:
            table = self.query_one(css(ids.BIND_TABLE), DataTable)
        except NoMatches:
            return None
        return binds[max(0, min(table.cursor_row, len(binds) - 1))]

    def _edited(self, select_id: int | None = None) -> None:
        self.session.mark_dirty()
        self._refresh_table(select_id)

    # =========================================================================
    # Bind Actions
    # =========================================================================

    def action_new_bind(self) -> None:
        bind = self.session.model.create()
        self._edited(bind.id)
        self._set_status("New bind added - press k to pick its kind")

    def action_cycle_kind(self) -> None:
        bind = self._selected_bind()
        if bind is None:
            return
        if bind.kind is not None and bind.kind.is_grouped:
            self._set_status(f"{bind.kind.label} binds keep their kind; delete the group instead")
            return
        kind = KIND_CYCLE[bind.kind]
        self.session.model.update(bind.id, "kind", kind)
        # Output names differ between key and controller outputs
        self.session.model.update(bind.id, "output", "")
        self._edited(bind.id)
        self._set_status(f"Bind {bind.id} is now a {kind.label} bind")

    def action_add_socd_pair(self) -> None:
        first, _ = self.session.groups.add_socd_pair()
        self._edited(first.id)
        self._set_status("SOCD pair added - rebind either side to link the keys")

    def action_add_mash_group(self) -> None:
        if not self.session.groups.can_add_mash_trigger_group:
            self._set_status("A mash trigger group already exists")
            return
        group = self.session.groups.add_mash_trigger_group()
        self._edited(group[0].id)
        self._set_status("Mash trigger group added - rebind its three keys")

    def action_delete_bind(self) -> None:
        bind = self._selected_bind()
        if bind is None:
            return
        removed = self.session.groups.remove_group_member(bind)
        self._edited()
        if len(removed) == 1:
            self._set_status(f"Removed bind {removed[0].id}")
        else:
            self._set_status(f"Removed {bind.kind.label} group ({len(removed)} binds)")

    def action_unbind(self) -> None:
        bind = self._selected_bind()
        if bind is None:
            return
        self.session.groups.set_side(bind, Side.INPUT, "")
        self._edited(bind.id)
        self._set_status(f"Unbound bind {bind.id}")

    def action_capture_input(self) -> None:
        bind = self._selected_bind()
        if bind is None:
            return
        self._start_capture(bind, Side.INPUT)

    def action_set_output(self) -> None:
        bind = self._selected_bind()
        if bind is None:
            return
        match bind.kind:
            case None:
                self._set_status("Pick a kind first (k)")
            case BindKind.CONTROLLER:
                self.push_screen(
                    ControllerOutputModal(CONTROLLER_ACTIONS.actions(), bind.output),
                    lambda action: self._apply_controller_output(bind.id, action),
                )
            case BindKind.MASH_TRIGGER:
                self._set_status("Mash trigger keys do not remap; rebind the input (i)")
            case BindKind.KEYBOARD | BindKind.SOCD:
                self._start_capture(bind, Side.OUTPUT)

    def _start_capture(self, bind: Bind, side: Side) -> None:
        self._capture.begin(bind.id, side)
        self._set_status(f"Listening for {side.value} key of bind {bind.id}...")
        self.push_screen(
            KeyCaptureModal(self._capture, f"{side.value.title()} key for {bind}"),
            self._apply_capture,
        )

    def _apply_capture(self, result: CaptureResult | None) -> None:
        if result is None:
            self._set_status("Key capture cancelled")
            return
        bind = self.session.model.get(result.bind_id)
        self.session.groups.set_side(bind, result.side, result.key_name)
        self._edited(bind.id)
        self._set_status(f"Bind {bind.id} {result.side.value} set to {result.key_name}")

    def _apply_controller_output(self, bind_id: int, action: str | None) -> None:
        if action is None:
            return
        self.session.model.update(bind_id, "output", action)
        self._edited(bind_id)
        self._set_status(f"Bind {bind_id} output set to {action}")

    # =========================================================================
    # Load / Save
    # =========================================================================

    async def action_save(self) -> None:
        try:
            count = await self.session.save()
        except BindError as e:
            log.warning(f"Save failed: {e}")
            self._set_status(str(e))
            return
        self._set_status(f"Saved {count} binds to {self.session.store.path}")

    async def action_reload(self) -> None:
        await self._load()

    async def _load(self) -> None:
        try:
            await self.session.load()
        except BindError as e:
            log.warning(f"Load failed: {e}")
            self._set_status(str(e))
            self._refresh_table()
            return
        self._refresh_table()
        self._set_status(f"Loaded {len(self.session.model)} binds")

    @on(Button.Pressed, css(ids.SAVE_BTN))
    async def on_save_pressed(self, event: Button.Pressed) -> None:
        await self.action_save()

    @on(Button.Pressed, css(ids.RELOAD_BTN))
    async def on_reload_pressed(self, event: Button.Pressed) -> None:
        await self.action_reload()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def on_mount(self) -> None:
        """Called when the app is mounted."""
        table = self.query_one(css(ids.BIND_TABLE), DataTable)
        table.add_columns("", "Kind", "Input", "Output", "Code")
        if self._load_on_mount:
            await self._load()
        else:
            self._refresh_table()
        table.focus()
