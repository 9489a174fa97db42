"""Render JSON Schema fragments into example request bodies."""

import json

from swagger2postman.errors import SchemaRecursionError

MAX_DEPTH = 64

DEFAULT_VALUES = {
    "integer": 0,
    "number": 0.0,
    "boolean": True,
    "string": "",
}


def render_template(schema: dict) -> object:
    """Build a representative value for a schema fragment.

    Explicit examples win; objects keep declaration order and drop
    read-only properties; arrays hold a single rendered item.
    """
    return _render(schema, ancestors=[])


def render_body(schema: dict) -> str:
    """Render a schema fragment as an indented JSON document."""
    return json.dumps(render_template(schema), indent=4)


def _render(schema: dict, ancestors: list[int]) -> object:
    if "example" in schema:
        return schema["example"]

    if id(schema) in ancestors:
        raise SchemaRecursionError("schema refers back to itself; cannot render an example body")
    if len(ancestors) >= MAX_DEPTH:
        raise SchemaRecursionError(f"schema nests deeper than {MAX_DEPTH} levels")

    ancestors = ancestors + [id(schema)]
    schema_type = schema.get("type")

    if schema_type == "object" or "properties" in schema:
        return {
            name: _render(prop, ancestors)
            for name, prop in (schema.get("properties") or {}).items()
            if isinstance(prop, dict) and not prop.get("readOnly")
        }

    if schema_type == "array":
        items = schema.get("items")
        if not isinstance(items, dict):
            return []
        return [_render(items, ancestors)]

    return DEFAULT_VALUES.get(schema_type)
