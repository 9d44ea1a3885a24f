"""Widget ID constants for the TUI.

Using constants prevents typos and makes refactoring easier.
"""


def css(widget_id: str) -> str:
    """Return a CSS selector for a widget ID.

    Usage:
        from ui.ids import css, STATUS_BAR
        self.query_one(css(STATUS_BAR), Static)
    """
    return f"#{widget_id}"

# Container IDs
HEADER_CONTAINER = "header-container"
HEADER_TITLE = "header-title"
FOOTER_CONTAINER = "footer-container"
STATUS_BAR = "status-bar"

# Header buttons
SAVE_BTN = "save-btn"
RELOAD_BTN = "reload-btn"

# Bind table
BIND_TABLE = "bind-table"

# Key capture modal
CAPTURE_MODAL = "capture-modal"
CAPTURE_PROMPT = "capture-prompt"

# Controller output modal
OUTPUT_MODAL = "output-modal"
OUTPUT_LIST = "output-list"

# Shared modal parts
MODAL_TITLE = "modal-title"
MODAL_HINT = "modal-hint"
