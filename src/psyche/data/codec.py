"""Polymorphic codec between storylet records and their serialized form.

Every prerequisite and effect node is stored as ``{"type": ..., "properties":
{...}}`` where ``type`` is the discriminator naming the variant. Decoding is
the only place untyped payloads are touched; everything past this module works
with the typed dataclasses.

Decode policy:

* keys of every mapping are matched case-insensitively;
* an unknown discriminator or a missing/mistyped required property raises
  :class:`StoryletDecodeError` and the whole record is rejected;
* absent ``minValue``/``maxValue`` decode to ``None`` (unconstrained);
* compound ``logic`` is ``OR`` only for the string "or" in any casing, every
  other value (including absence) falls back to ``AND``.

Encode policy: absent bounds are omitted instead of being written as the
historic sentinels (0/100 for attributes, 32-bit int extremes for qualities).
Files carrying those sentinels still decode to explicit bounds with the same
meaning.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Mapping

from psyche.core.types import CompoundLogic
from psyche.data import jsonc
from psyche.data.errors import StoryletDecodeError
from psyche.domain.defs import DEFAULT_PRIORITY, Storylet, StoryletOption
from psyche.domain.effects import (
    AttributeEffect,
    CompoundEffect,
    Effect,
    QualityEffect,
    UnlockStoryletEffect,
)
from psyche.domain.entities import ATTRIBUTE_MAX, ATTRIBUTE_MIN, ATTRIBUTE_NAMES
from psyche.domain.prerequisites import (
    AttributeRequirement,
    CompoundPrerequisite,
    Prerequisite,
    QualityRequirement,
    StoryletPlayedRequirement,
)

logger = logging.getLogger(__name__)

SerializedNode = Dict[str, Any]
SerializedRecord = Dict[str, Any]

# Values older files use in place of an absent bound.
LEGACY_ATTRIBUTE_MIN_SENTINEL = ATTRIBUTE_MIN
LEGACY_ATTRIBUTE_MAX_SENTINEL = ATTRIBUTE_MAX
LEGACY_QUALITY_MIN_SENTINEL = -(2**31)
LEGACY_QUALITY_MAX_SENTINEL = 2**31 - 1

NESTING_TOO_DEEP = "nesting too deep"

PREREQUISITE_TYPES = (
    "AttributeRequirement",
    "QualityRequirement",
    "StoryletPlayedRequirement",
    "CompoundPrerequisite",
)
EFFECT_TYPES = (
    "AttributeEffect",
    "QualityEffect",
    "UnlockStoryletEffect",
    "CompoundEffect",
)

_MISSING = object()


class _Fields:
    """Case-insensitive, path-aware view over one decoded mapping."""

    def __init__(self, value: object, path: str) -> None:
        if not isinstance(value, Mapping):
            raise StoryletDecodeError(path, "must be an object")
        self._path = path
        self._values: Dict[str, object] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise StoryletDecodeError(path, f"has non-string key {key!r}")
            self._values[key.lower()] = item

    def child_path(self, key: str) -> str:
        return f"{self._path}.{key}" if self._path else key

    def raw(self, key: str) -> object:
        return self._values.get(key.lower(), _MISSING)

    def require(self, key: str) -> object:
        value = self.raw(key)
        if value is _MISSING:
            raise StoryletDecodeError(self._path, f"missing required property '{key}'")
        return value

    def require_str(self, key: str) -> str:
        return _expect_str(self.require(key), self.child_path(key))

    def optional_str(self, key: str, default: str = "") -> str:
        value = self.raw(key)
        if value is _MISSING or value is None:
            return default
        return _expect_str(value, self.child_path(key))

    def require_int(self, key: str) -> int:
        return _expect_int(self.require(key), self.child_path(key))

    def optional_int(self, key: str, default: int | None = None) -> int | None:
        value = self.raw(key)
        if value is _MISSING or value is None:
            return default
        return _expect_int(value, self.child_path(key))

    def require_bool(self, key: str) -> bool:
        value = self.require(key)
        if not isinstance(value, bool):
            raise StoryletDecodeError(self.child_path(key), "must be a boolean")
        return value

    def optional_list(self, key: str) -> List[object]:
        value = self.raw(key)
        if value is _MISSING or value is None:
            return []
        if not isinstance(value, list):
            raise StoryletDecodeError(self.child_path(key), "must be a list")
        return value

    def optional_str_list(self, key: str) -> tuple[str, ...]:
        path = self.child_path(key)
        return tuple(
            _expect_str(entry, f"{path}[{index}]")
            for index, entry in enumerate(self.optional_list(key))
        )


def _expect_str(value: object, path: str) -> str:
    if not isinstance(value, str):
        raise StoryletDecodeError(path, "must be a string")
    return value


def _expect_int(value: object, path: str) -> int:
    # bool is an int subclass; true/false is never a valid number here.
    if isinstance(value, bool) or not isinstance(value, int):
        raise StoryletDecodeError(path, "must be an integer")
    return value


def _node_parts(node: object, path: str) -> tuple[str, _Fields]:
    fields = _Fields(node, path)
    node_type = fields.require_str("type")
    properties = fields.raw("properties")
    if properties is _MISSING or properties is None:
        properties = {}
    return node_type, _Fields(properties, fields.child_path("properties"))


# ---------------------------------------------------------------------------
# Prerequisites
# ---------------------------------------------------------------------------


def _decode_attribute_name(props: _Fields) -> str:
    name = props.require_str("attributeName")
    if name not in ATTRIBUTE_NAMES:
        raise StoryletDecodeError(
            props.child_path("attributeName"),
            f"unknown attribute '{name}' (expected one of {', '.join(ATTRIBUTE_NAMES)})",
        )
    return name


def _decode_attribute_requirement(props: _Fields, path: str) -> AttributeRequirement:
    return AttributeRequirement(
        attribute_name=_decode_attribute_name(props),
        min_value=props.optional_int("minValue"),
        max_value=props.optional_int("maxValue"),
    )


def _decode_quality_requirement(props: _Fields, path: str) -> QualityRequirement:
    return QualityRequirement(
        quality_id=props.require_str("qualityId"),
        min_value=props.optional_int("minValue"),
        max_value=props.optional_int("maxValue"),
    )


def _decode_storylet_played_requirement(props: _Fields, path: str) -> StoryletPlayedRequirement:
    return StoryletPlayedRequirement(
        storylet_id=props.require_str("storyletId"),
        must_have_played=props.require_bool("mustHavePlayed"),
    )


def decode_logic(value: object) -> CompoundLogic:
    """Map a serialized logic value onto AND/OR.

    Only "or" (any casing) selects OR; everything else, including a missing or
    misspelled value, selects AND.
    """
    if isinstance(value, str) and value.lower() == "or":
        return "OR"
    return "AND"


def _decode_compound_prerequisite(props: _Fields, path: str) -> CompoundPrerequisite:
    raw_logic = props.raw("logic")
    logic = decode_logic(raw_logic)
    if raw_logic is not _MISSING and not (
        isinstance(raw_logic, str) and raw_logic.lower() in ("and", "or")
    ):
        logger.debug("Unrecognized compound logic %r at %s; using AND", raw_logic, path)
    children_path = props.child_path("prerequisites")
    children = tuple(
        _decode_prerequisite_node(child, f"{children_path}[{index}]")
        for index, child in enumerate(props.optional_list("prerequisites"))
    )
    return CompoundPrerequisite(logic=logic, prerequisites=children)


_PREREQUISITE_DECODERS: Dict[str, Callable[[_Fields, str], Prerequisite]] = {
    "AttributeRequirement": _decode_attribute_requirement,
    "QualityRequirement": _decode_quality_requirement,
    "StoryletPlayedRequirement": _decode_storylet_played_requirement,
    "CompoundPrerequisite": _decode_compound_prerequisite,
}


def decode_prerequisite(node: object, path: str = "prerequisite") -> Prerequisite:
    """Rebuild a prerequisite tree from its serialized node."""
    try:
        return _decode_prerequisite_node(node, path)
    except RecursionError as exc:
        raise StoryletDecodeError(path, NESTING_TOO_DEEP) from exc


def _decode_prerequisite_node(node: object, path: str) -> Prerequisite:
    node_type, props = _node_parts(node, path)
    decoder = _PREREQUISITE_DECODERS.get(node_type)
    if decoder is None:
        raise StoryletDecodeError(f"{path}.type", f"unknown prerequisite type '{node_type}'")
    return decoder(props, path)


def encode_prerequisite(prerequisite: Prerequisite) -> SerializedNode:
    properties: Dict[str, Any]
    if isinstance(prerequisite, AttributeRequirement):
        properties = {"attributeName": prerequisite.attribute_name}
        _encode_bounds(properties, prerequisite.min_value, prerequisite.max_value)
        return {"type": "AttributeRequirement", "properties": properties}
    if isinstance(prerequisite, QualityRequirement):
        properties = {"qualityId": prerequisite.quality_id}
        _encode_bounds(properties, prerequisite.min_value, prerequisite.max_value)
        return {"type": "QualityRequirement", "properties": properties}
    if isinstance(prerequisite, StoryletPlayedRequirement):
        return {
            "type": "StoryletPlayedRequirement",
            "properties": {
                "storyletId": prerequisite.storylet_id,
                "mustHavePlayed": prerequisite.must_have_played,
            },
        }
    if isinstance(prerequisite, CompoundPrerequisite):
        return {
            "type": "CompoundPrerequisite",
            "properties": {
                "logic": "Or" if prerequisite.logic == "OR" else "And",
                "prerequisites": [encode_prerequisite(child) for child in prerequisite.prerequisites],
            },
        }
    raise TypeError(f"Unknown prerequisite type: {type(prerequisite).__name__}")


def _encode_bounds(properties: Dict[str, Any], min_value: int | None, max_value: int | None) -> None:
    if min_value is not None:
        properties["minValue"] = min_value
    if max_value is not None:
        properties["maxValue"] = max_value


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------


def _decode_attribute_effect(props: _Fields, path: str) -> AttributeEffect:
    return AttributeEffect(
        attribute_name=_decode_attribute_name(props),
        delta=props.require_int("delta"),
    )


def _decode_quality_effect(props: _Fields, path: str) -> QualityEffect:
    return QualityEffect(quality_id=props.require_str("qualityId"), delta=props.require_int("delta"))


def _decode_unlock_storylet_effect(props: _Fields, path: str) -> UnlockStoryletEffect:
    return UnlockStoryletEffect(storylet_id=props.require_str("storyletId"))


def _decode_compound_effect(props: _Fields, path: str) -> CompoundEffect:
    children_path = props.child_path("effects")
    children = tuple(
        _decode_effect_node(child, f"{children_path}[{index}]")
        for index, child in enumerate(props.optional_list("effects"))
    )
    return CompoundEffect(effects=children)


_EFFECT_DECODERS: Dict[str, Callable[[_Fields, str], Effect]] = {
    "AttributeEffect": _decode_attribute_effect,
    "QualityEffect": _decode_quality_effect,
    "UnlockStoryletEffect": _decode_unlock_storylet_effect,
    "CompoundEffect": _decode_compound_effect,
}


def decode_effect(node: object, path: str = "effect") -> Effect:
    """Rebuild an effect tree from its serialized node."""
    try:
        return _decode_effect_node(node, path)
    except RecursionError as exc:
        raise StoryletDecodeError(path, NESTING_TOO_DEEP) from exc


def _decode_effect_node(node: object, path: str) -> Effect:
    node_type, props = _node_parts(node, path)
    decoder = _EFFECT_DECODERS.get(node_type)
    if decoder is None:
        raise StoryletDecodeError(f"{path}.type", f"unknown effect type '{node_type}'")
    return decoder(props, path)


def encode_effect(effect: Effect) -> SerializedNode:
    if isinstance(effect, AttributeEffect):
        return {
            "type": "AttributeEffect",
            "properties": {"attributeName": effect.attribute_name, "delta": effect.delta},
        }
    if isinstance(effect, QualityEffect):
        return {
            "type": "QualityEffect",
            "properties": {"qualityId": effect.quality_id, "delta": effect.delta},
        }
    if isinstance(effect, UnlockStoryletEffect):
        return {"type": "UnlockStoryletEffect", "properties": {"storyletId": effect.storylet_id}}
    if isinstance(effect, CompoundEffect):
        return {
            "type": "CompoundEffect",
            "properties": {"effects": [encode_effect(child) for child in effect.effects]},
        }
    raise TypeError(f"Unknown effect type: {type(effect).__name__}")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def _decode_prerequisite_list(fields: _Fields) -> tuple[Prerequisite, ...]:
    path = fields.child_path("prerequisites")
    return tuple(
        _decode_prerequisite_node(node, f"{path}[{index}]")
        for index, node in enumerate(fields.optional_list("prerequisites"))
    )


def _decode_effect_list(fields: _Fields) -> tuple[Effect, ...]:
    path = fields.child_path("effects")
    return tuple(
        _decode_effect_node(node, f"{path}[{index}]")
        for index, node in enumerate(fields.optional_list("effects"))
    )


def decode_option(payload: object, path: str = "option") -> StoryletOption:
    try:
        return _decode_option(payload, path)
    except RecursionError as exc:
        raise StoryletDecodeError(path, NESTING_TOO_DEEP) from exc


def _decode_option(payload: object, path: str) -> StoryletOption:
    fields = _Fields(payload, path)
    return StoryletOption(
        id=fields.optional_str("id"),
        text=fields.optional_str("text"),
        description=fields.optional_str("description"),
        result_text=fields.optional_str("resultText"),
        prerequisites=_decode_prerequisite_list(fields),
        effects=_decode_effect_list(fields),
        priority=fields.optional_int("priority", DEFAULT_PRIORITY),
        tags=fields.optional_str_list("tags"),
    )


def decode_storylet(payload: object) -> Storylet:
    """Decode a whole storylet record.

    Missing scalar fields fall back to their defaults so the validator can
    report empty ids or titles; structural problems raise StoryletDecodeError.
    """
    try:
        return _decode_storylet(payload)
    except RecursionError as exc:
        raise StoryletDecodeError("", NESTING_TOO_DEEP) from exc


def _decode_storylet(payload: object) -> Storylet:
    fields = _Fields(payload, "")
    options_path = fields.child_path("options")
    options = tuple(
        _decode_option(entry, f"{options_path}[{index}]")
        for index, entry in enumerate(fields.optional_list("options"))
    )
    return Storylet(
        id=fields.optional_str("id"),
        title=fields.optional_str("title"),
        description=fields.optional_str("description"),
        content=fields.optional_str("content"),
        prerequisites=_decode_prerequisite_list(fields),
        effects=_decode_effect_list(fields),
        options=options,
        priority=fields.optional_int("priority", DEFAULT_PRIORITY),
        category=fields.optional_str("category"),
        tags=fields.optional_str_list("tags"),
    )


def encode_option(option: StoryletOption) -> SerializedRecord:
    return {
        "id": option.id,
        "text": option.text,
        "description": option.description,
        "resultText": option.result_text,
        "prerequisites": [encode_prerequisite(item) for item in option.prerequisites],
        "effects": [encode_effect(item) for item in option.effects],
        "priority": option.priority,
        "tags": list(option.tags),
    }


def encode_storylet(storylet: Storylet) -> SerializedRecord:
    return {
        "id": storylet.id,
        "title": storylet.title,
        "description": storylet.description,
        "content": storylet.content,
        "prerequisites": [encode_prerequisite(item) for item in storylet.prerequisites],
        "effects": [encode_effect(item) for item in storylet.effects],
        "options": [encode_option(option) for option in storylet.options],
        "priority": storylet.priority,
        "category": storylet.category,
        "tags": list(storylet.tags),
    }


def loads_storylet(text: str) -> Storylet:
    """Decode a storylet from JSONC text."""
    try:
        payload = jsonc.loads(text)
    except json.JSONDecodeError as exc:
        raise StoryletDecodeError("", f"invalid JSONC: {exc}") from exc
    except RecursionError as exc:
        raise StoryletDecodeError("", NESTING_TOO_DEEP) from exc
    return decode_storylet(payload)


def dumps_storylet(storylet: Storylet) -> str:
    return jsonc.dumps(encode_storylet(storylet))
