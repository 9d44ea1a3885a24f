"""UI module containing modals and widget ids."""

from ui.modals import ControllerOutputModal, KeyCaptureModal
from ui import ids

__all__ = [
    "ControllerOutputModal",
    "KeyCaptureModal",
    "ids",
]
