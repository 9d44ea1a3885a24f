"""Translation between the bind model and persisted records."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from keycodes import CONTROLLER_ACTIONS, KEY_CODES, ControllerOutputTable, KeyCodeTable
from model import (
    Bind,
    BindGroups,
    BindKind,
    BindModel,
    PersistedRecord,
    UnknownBindKind,
    UnresolvableBind,
)

log = logging.getLogger(__name__)

# Bare hex digits only, as the engine parses them: no prefix, sign, spaces or "_"
HEX_KEYCODE = re.compile(r"[0-9a-fA-F]+")


def decode(
    records: Iterable[PersistedRecord],
    key_codes: KeyCodeTable = KEY_CODES,
    controller: ControllerOutputTable = CONTROLLER_ACTIONS,
) -> tuple[BindModel, BindGroups]:
    """Build a bind model from records and infer its groups.

    Keys missing from the tables decode to the empty placeholder rather than
    failing; only structural problems abort the decode.

    Raises:
        UnknownBindKind: a result_type that is neither a controller result
            nor a bind kind tag.
        UnresolvedSocdLink: an SOCD bind without a partner.
        InvalidMashTriggerGroup: mash-trigger bind count other than 0 or 3.
    """
    model = BindModel()
    for record in records:
        bind = model.create()
        kind, input_name, output_name = _decode_record(record, key_codes, controller)
        bind.kind = kind
        bind.input = input_name
        bind.output = output_name

    groups = BindGroups(model)
    groups.infer_socd_links()
    groups.validate_mash_trigger_group()
    log.info(f"Decoded {len(model)} binds ({len(groups.socd_pairs())} SOCD pairs)")
    return model, groups


def _decode_record(
    record: PersistedRecord,
    key_codes: KeyCodeTable,
    controller: ControllerOutputTable,
) -> tuple[BindKind, str, str]:
    input_name = ""
    if HEX_KEYCODE.fullmatch(record.keycode):
        input_name = key_codes.code_to_name(int(record.keycode, 16)) or ""
    else:
        log.warning(f"Record keycode is not hex: {record.keycode!r}")
    if not input_name:
        log.debug(f"Unresolved input keycode {record.keycode!r}")

    action = controller.result_to_action(record.result_type, record.result_value)
    if action is not None:
        return BindKind.CONTROLLER, input_name, action

    kind = BindKind.from_tag(record.result_type)
    if kind is None:
        raise UnknownBindKind(record.result_type)
    output_name = key_codes.code_to_name(record.result_value) or ""
    if not output_name:
        log.debug(f"Unresolved output code {record.result_value:#x} for {kind.label} bind")
    return kind, input_name, output_name


def encode(
    model: BindModel,
    key_codes: KeyCodeTable = KEY_CODES,
    controller: ControllerOutputTable = CONTROLLER_ACTIONS,
) -> list[PersistedRecord]:
    """Encode binds as records, in model order.

    Every bind is checked before any record is built, so the result is
    either the complete record list or an exception.

    Raises:
        UnresolvableBind: listing every bind whose kind, input or output
            does not resolve through the tables.
    """
    binds = model.list()
    problems = [
        (bind, reason)
        for bind in binds
        if (reason := unresolvable_reason(bind, key_codes, controller)) is not None
    ]
    if problems:
        raise UnresolvableBind(problems)
    return [_encode_bind(bind, key_codes, controller) for bind in binds]


def unresolvable_reason(
    bind: Bind,
    key_codes: KeyCodeTable = KEY_CODES,
    controller: ControllerOutputTable = CONTROLLER_ACTIONS,
) -> str | None:
    """Why a bind cannot be encoded, or None if it can."""
    if bind.kind is None:
        return "kind not set"
    if key_codes.name_to_code(bind.input) is None:
        return f"input key '{bind.input or '-'}' not found"
    if bind.kind.output_is_key:
        if key_codes.name_to_code(bind.output) is None:
            return f"output key '{bind.output or '-'}' not found"
    elif controller.action_to_result(bind.output) is None:
        return f"controller output '{bind.output or '-'}' not found"
    return None


def _encode_bind(
    bind: Bind,
    key_codes: KeyCodeTable,
    controller: ControllerOutputTable,
) -> PersistedRecord:
    keycode = format(key_codes.name_to_code(bind.input), "x")
    match bind.kind:
        case BindKind.CONTROLLER:
            result_type, result_value = controller.action_to_result(bind.output)
        case BindKind.KEYBOARD | BindKind.SOCD | BindKind.MASH_TRIGGER:
            result_type = bind.kind.value
            result_value = key_codes.name_to_code(bind.output)
    return PersistedRecord(keycode=keycode, result_type=result_type, result_value=result_value)
