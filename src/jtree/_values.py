"""Tree-shaped value model produced by the parser."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from typing import TypeAlias


@dataclass(frozen=True)
class Null:
    """The null literal."""


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class String:
    """Verbatim string payload; escape sequences are not decoded."""

    value: str


@dataclass(frozen=True)
class Array:
    items: tuple[JsonValue, ...] = ()


@dataclass(frozen=True)
class Object:
    """
    Ordered key/value pairs.

    Duplicate keys are kept and insertion order is preserved; this is a
    sequence of pairs, not a lookup map.
    """

    pairs: tuple[tuple[str, JsonValue], ...] = ()


JsonValue: TypeAlias = Null | Bool | Number | String | Array | Object

ObjectHook = Callable[[dict[str, Any]], Any] | None
ObjectPairsHook = Callable[[list[tuple[str, Any]]], Any] | None


def to_python(
    value: JsonValue,
    *,
    object_hook: ObjectHook = None,
    object_pairs_hook: ObjectPairsHook = None,
) -> Any:
    """
    Converts a value tree into native Python objects.

    Objects become dicts (later duplicate keys win) unless object_pairs_hook
    is given; it receives the ordered pairs and takes priority over
    object_hook, which receives the built dict.
    """
    if isinstance(value, Null):
        return None
    elif isinstance(value, Bool | Number | String):
        return value.value
    elif isinstance(value, Array):
        return [
            to_python(
                item,
                object_hook=object_hook,
                object_pairs_hook=object_pairs_hook,
            )
            for item in value.items
        ]
    elif isinstance(value, Object):
        pairs = [
            (
                key,
                to_python(
                    item,
                    object_hook=object_hook,
                    object_pairs_hook=object_pairs_hook,
                ),
            )
            for key, item in value.pairs
        ]
        if object_pairs_hook:
            return object_pairs_hook(pairs)
        obj = dict(pairs)
        if object_hook:
            return object_hook(obj)
        return obj
    else:
        msg = f"Object of type {type(value).__name__} is not a jtree value"
        raise TypeError(msg)
