"""
Benchmark documents restricted to the jtree lexical grammar.

Every document is produced by json.dumps from values that serialize without
signs, exponents or escape sequences, so all compared libraries and jtree
read the same data.
"""

import json
import random
import string
from collections.abc import Callable
from typing import Any

# Printable ASCII minus quote, backslash and control whitespace, none of
# which json.dumps would emit verbatim
_PLAIN_CHARS = "".join(
    c for c in string.printable if c not in '"\\\t\n\r\x0b\x0c'
)

DATA_TYPES = [
    "small_object",
    "large_object",
    "mixed_array",
    "nested_structure",
    "string_heavy",
]


def generate_test_data(data_type: str) -> str:
    """Returns the benchmark document for one of DATA_TYPES."""
    generators: dict[str, Callable[[], Any]] = {
        "small_object": _small_object,
        "large_object": _large_object,
        "mixed_array": _mixed_array,
        "nested_structure": lambda: _nested(depth=8),
        "string_heavy": _string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return json.dumps(generators[data_type]())


def _word(length: int) -> str:
    return "".join(random.choices(string.ascii_lowercase, k=length))


def _text(length: int) -> str:
    return "".join(random.choices(_PLAIN_CHARS, k=length))


def _price() -> float:
    # two decimals and at least 1.0 keep repr free of exponents
    return round(random.uniform(1.0, 500.0), 2)


def _small_object() -> dict[str, Any]:
    """A single catalog entry, well under 1KB."""
    return {
        "sku": "A-1042",
        "title": "Brass desk lamp",
        "price": 39.5,
        "stock": 12,
        "discontinued": False,
        "supplier": None,
        "dimensions": {"height": 41.0, "base": 15.5},
    }


def _large_object() -> dict[str, Any]:
    """A warehouse snapshot with a few hundred records, above 10KB."""
    return {
        "warehouse": _word(8),
        "capacity": random.randint(1000, 50000),
        "items": [
            {
                "sku": f"{_word(2).upper()}-{n:05d}",
                "title": f"{_word(6)} {_word(9)}",
                "price": _price(),
                "stock": random.randint(0, 900),
                "tags": [_word(5) for _ in range(random.randint(0, 4))],
                "discontinued": random.random() < 0.1,
            }
            for n in range(120)
        ],
        "shipments": [
            {
                "carrier": random.choice(["ups", "dhl", "post"]),
                "parcels": random.randint(1, 40),
                "weight": _price(),
                "signed": random.choice([True, False, None]),
            }
            for _ in range(60)
        ],
    }


def _mixed_array() -> list[Any]:
    """A flat array cycling through every value kind."""
    makers: list[Callable[[], Any]] = [
        lambda: random.randint(0, 100000),
        _price,
        lambda: _word(random.randint(3, 20)),
        lambda: random.choice([True, False]),
        lambda: None,
        lambda: [random.randint(0, 9) for _ in range(3)],
        lambda: {"id": random.randint(0, 999), "label": _word(6)},
    ]
    return [random.choice(makers)() for _ in range(300)]


def _nested(depth: int) -> dict[str, Any]:
    """A tree of objects branching three ways per level."""
    if depth <= 0:
        return {"leaf": _word(10)}
    return {
        "depth": depth,
        "children": [_nested(depth - 1) for _ in range(3)],
    }


def _string_heavy() -> dict[str, Any]:
    """Long plain strings that still contain structural characters."""
    return {
        "lines": [_text(80) for _ in range(150)],
        "notes": {f"note_{i}": _text(200) for i in range(25)},
    }
