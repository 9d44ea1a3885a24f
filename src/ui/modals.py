"""Modal dialogs for key capture and controller output selection."""

from __future__ import annotations

from textual import events, on
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, OptionList, Static
from textual.widgets.option_list import Option

from capture import CaptureResult, KeyCapture
from ui.ids import css
import ui.ids as ids


class KeyCaptureModal(ModalScreen[CaptureResult | None]):
    """Waits for one key press and dismisses with what it resolved to.

    The modal has no focusable widgets, so every key lands in on_key. Escape
    cancels; keys missing from the key table are ignored and the modal keeps
    listening.
    """

    def __init__(self, capture: KeyCapture, description: str) -> None:
        super().__init__()
        self.capture = capture
        self.description = description

    def compose(self) -> ComposeResult:
        with Vertical(id=ids.CAPTURE_MODAL):
            yield Label("Press a key", id=ids.MODAL_TITLE)
            yield Static(self.description, id=ids.CAPTURE_PROMPT)
            yield Static("Esc to cancel", id=ids.MODAL_HINT)

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        if event.key == "escape":
            self.capture.cancel()
            self.dismiss(None)
            return
        result = self.capture.feed(event.key)
        if result is not None:
            self.dismiss(result)
        else:
            self.query_one(css(ids.MODAL_HINT), Static).update(
                f"'{event.key}' is not a mappable key. Esc to cancel"
            )


class ControllerOutputModal(ModalScreen[str | None]):
    """Pick a controller action for a controller bind."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, actions: list[str], current: str = "") -> None:
        super().__init__()
        self.actions = actions
        self.current = current

    def compose(self) -> ComposeResult:
        with Vertical(id=ids.OUTPUT_MODAL):
            yield Label("Controller Output", id=ids.MODAL_TITLE)
            yield OptionList(*[Option(action, id=action) for action in self.actions], id=ids.OUTPUT_LIST)
            yield Static("Enter to select, Esc to cancel", id=ids.MODAL_HINT)

    def on_mount(self) -> None:
        option_list = self.query_one(css(ids.OUTPUT_LIST), OptionList)
        if self.current in self.actions:
            option_list.highlighted = self.actions.index(self.current)
        option_list.focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(OptionList.OptionSelected, css(ids.OUTPUT_LIST))
    def on_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(event.option.id)
