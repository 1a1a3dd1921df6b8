"""
Pytest configuration and shared fixtures for jtree tests.

Provides immutable test data fixtures and a textual renderer used to check
that rendered trees parse back to the same shape.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

import jtree


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for document test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    expected_error: type[jtree.JsonTreeError] | None = None


def _render(value: jtree.JsonValue) -> str:
    """Renders a value tree as compact text the tokenizer accepts."""
    if isinstance(value, jtree.Null):
        return "null"
    elif isinstance(value, jtree.Bool):
        return "true" if value.value else "false"
    elif isinstance(value, jtree.Number):
        return repr(value.value)
    elif isinstance(value, jtree.String):
        return f'"{value.value}"'
    elif isinstance(value, jtree.Array):
        return "[" + ",".join(_render(item) for item in value.items) + "]"
    else:
        members = (f'"{key}":{_render(item)}' for key, item in value.pairs)
        return "{" + ",".join(members) + "}"


@pytest.fixture
def render() -> Callable[[jtree.JsonValue], str]:
    """Provides the compact textual renderer for value trees."""
    return _render


@pytest.fixture
def basic_values() -> list[JsonTestCase]:
    """
    Provides scalar and container literals with their expected trees.

    Covers every value variant the grammar can produce.
    """
    return [
        JsonTestCase("null value", "null", False, jtree.Null()),
        JsonTestCase("true boolean", "true", False, jtree.Bool(True)),
        JsonTestCase("false boolean", "false", False, jtree.Bool(False)),
        JsonTestCase("integer", "42", False, jtree.Number(42.0)),
        JsonTestCase("decimal", "3.25", False, jtree.Number(3.25)),
        JsonTestCase("empty string", '""', False, jtree.String("")),
        JsonTestCase("simple string", '"hello"', False, jtree.String("hello")),
        JsonTestCase("empty array", "[]", False, jtree.Array()),
        JsonTestCase("empty object", "{}", False, jtree.Object()),
        JsonTestCase(
            "simple array",
            "[1, 2, 3]",
            False,
            jtree.Array(
                (jtree.Number(1.0), jtree.Number(2.0), jtree.Number(3.0))
            ),
        ),
        JsonTestCase(
            "simple object",
            '{"key": "value"}',
            False,
            jtree.Object((("key", jtree.String("value")),)),
        ),
    ]


@pytest.fixture
def fail_cases() -> list[JsonTestCase]:
    """
    Provides malformed documents with the error class each must raise.

    Adapted from the json.org JSON_checker failures that remain failures
    under the permissive lexical grammar.
    """
    parse_failures = [
        ('["Unclosed array"', jtree.UnexpectedEnd),
        ('["double extra comma",,]', jtree.UnexpectedToken),
        ('[   , "<-- missing value"]', jtree.UnexpectedToken),
        ('{"Missing colon" null}', jtree.UnexpectedToken),
        ('{"Double colon":: null}', jtree.UnexpectedToken),
        ('{"Comma instead of colon", null}', jtree.UnexpectedToken),
        ('["Colon instead of comma": false]', jtree.UnexpectedToken),
        ('{"Comma instead if closing brace": true,', jtree.UnexpectedEnd),
        ('["mismatch"}', jtree.UnexpectedToken),
        ('{"a" "b"}', jtree.UnexpectedToken),
        ("{1: 2}", jtree.UnexpectedToken),
        ("", jtree.UnexpectedEnd),
    ]
    tokenize_failures = [
        ('{unquoted_key: "keys must be quoted"}', jtree.UnexpectedCharacter),
        ('{"Illegal invocation": alert()}', jtree.UnexpectedCharacter),
        ('["Bad value", truth]', jtree.UnexpectedCharacter),
        ('["unterminated]', jtree.UnexpectedCharacter),
        ("[1.2.3]", jtree.UnexpectedCharacter),
        ("nul", jtree.UnexpectedCharacter),
    ]
    return [
        JsonTestCase(
            description=f"fail{idx + 1}",
            input_data=doc,
            should_fail=True,
            expected_error=error,
        )
        for idx, (doc, error) in enumerate(parse_failures + tokenize_failures)
    ]
