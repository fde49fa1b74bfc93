"""Minimal JSON Schema -> Gemini response_schema adapter."""

TYPE_MAP = {
    "object": "OBJECT",
    "string": "STRING",
    "array": "ARRAY",
    "number": "NUMBER",
    "integer": "INTEGER",
    "boolean": "BOOLEAN",
}

# Keywords Gemini accepts verbatim on a schema node.
_PASSTHROUGH = ("description", "required", "enum", "format", "minItems", "maxItems", "nullable")


def to_gemini(schema: dict) -> dict:
    """Convert the listing JSON Schema into Gemini's OpenAPI-style subset.

    Unsupported keywords (``$schema``, ``additionalProperties``...) are dropped.
    """

    def convert(node):
        if not isinstance(node, dict):
            return node
        out = {}
        if "type" in node:
            out["type"] = TYPE_MAP.get(node["type"], node["type"])
        if "properties" in node:
            out["properties"] = {k: convert(v) for k, v in node["properties"].items()}
            # field order follows the schema
            out["propertyOrdering"] = list(node["properties"].keys())
        if "items" in node:
            out["items"] = convert(node["items"])
        for key in _PASSTHROUGH:
            if key in node:
                out[key] = node[key]
        return out

    return convert({k: v for k, v in schema.items() if k != "$schema"})
