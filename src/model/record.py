"""Persisted record: the on-disk shape of one bind."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PersistedRecord:
    """One entry of the record list the native engine reads.

    keycode is the input key code as lowercase hex without a prefix. The
    meaning of result_value depends on result_type: a key code for
    keyboard/socd/mash_trigger, a controller value for controller tags.
    Records carry no group information.
    """

    keycode: str
    result_type: str
    result_value: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "keycode": self.keycode,
            "result_type": self.result_type,
            "result_value": self.result_value,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "PersistedRecord":
        """Build a record from parsed JSON, rejecting malformed entries."""
        if not isinstance(data, dict):
            raise ValueError(f"Record must be an object, got {type(data).__name__}")
        missing = [key for key in ("keycode", "result_type", "result_value") if key not in data]
        if missing:
            raise ValueError(f"Record missing field(s): {', '.join(missing)}")

        keycode = data["keycode"]
        result_type = data["result_type"]
        result_value = data["result_value"]
        if not isinstance(keycode, str):
            raise ValueError(f"keycode must be a string, got {keycode!r}")
        if not isinstance(result_type, str):
            raise ValueError(f"result_type must be a string, got {result_type!r}")
        # bool is an int subclass; reject it explicitly
        if not isinstance(result_value, int) or isinstance(result_value, bool):
            raise ValueError(f"result_value must be an integer, got {result_value!r}")
        return cls(keycode=keycode, result_type=result_type, result_value=result_value)
