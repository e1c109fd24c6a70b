"""
Deterministic cleanup and parsing of model output.

Structured output is fence-stripped, parsed strictly with json.loads and
validated per artifact kind with pydantic. Diagram output is reduced to
printable Mermaid text, with a fixed fallback when nothing usable remains.

Dependencies: pydantic
System role: Model output parsing for generation orchestration
"""

import json
import re
from typing import Any, NamedTuple

from pydantic import BaseModel, TypeAdapter, ValidationError

from paperlens.core.exceptions import ParseFailureError
from paperlens.core.generation.prompt_specs import PromptSpec

FALLBACK_DIAGRAM = (
    "flowchart TD\n"
    "A[Research Paper] --> B[Data Analysis]\n"
    "B --> C[Results]\n"
    "C --> D[Conclusions]"
)

MIN_DIAGRAM_BODY_CHARS = 10

DIAGRAM_KEYWORDS = (
    "flowchart",
    "graph",
    "mindmap",
    "timeline",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "stateDiagram-v2",
    "erDiagram",
    "journey",
    "gantt",
    "pie",
)

_FENCE_OPEN = re.compile(r"```[A-Za-z0-9_-]*[ \t]*\n?")
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n\r\t]")
_INLINE_SEMICOLON = re.compile(r"[ \t]*;[ \t]*(?=\S)")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences (with or without a language tag) and trim."""
    if not text:
        return ""
    return _FENCE_OPEN.sub("", text).replace("```", "").strip()


class ParsedItems(NamedTuple):
    """Validated items of a structured artifact and how many were rejected."""

    items: list[Any]
    dropped: int = 0


def parse_structured(raw: str, spec: PromptSpec) -> ParsedItems:
    """
    Parse a JSON array artifact.

    Accepts either the wrapper object (``{"codeSnippets": [...]}``) or a bare
    array, then validates each item against the spec's item schema. Items
    that fail validation are dropped and counted.

    Args:
        raw: Raw model output
        spec: Spec of the artifact

    Returns:
        ParsedItems: Items as plain JSON-compatible values, plus the drop count

    Raises:
        ParseFailureError: When the output is not valid JSON of the expected
            shape, or when every item fails validation
    """
    cleaned = strip_code_fences(raw)
    try:
        tree = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ParseFailureError(
            f"Invalid JSON: {e.msg}", spec_name=spec.name, raw_output=raw
        ) from e

    if isinstance(tree, dict) and spec.wrapper_key and spec.wrapper_key in tree:
        tree = tree[spec.wrapper_key]
    if not isinstance(tree, list):
        raise ParseFailureError(
            f"Expected a JSON array, got {type(tree).__name__}",
            spec_name=spec.name,
            raw_output=raw,
        )

    if spec.item_schema is None:
        return ParsedItems(tree)

    adapter = TypeAdapter(spec.item_schema)
    items = []
    for element in tree:
        try:
            item = adapter.validate_python(element)
        except ValidationError:
            continue
        items.append(item.model_dump() if isinstance(item, BaseModel) else item)

    dropped = len(tree) - len(items)
    if dropped and not items:
        raise ParseFailureError(
            f"Schema validation failed for all {dropped} items",
            spec_name=spec.name,
            raw_output=raw,
        )
    return ParsedItems(items, dropped)


def _body_without_header(diagram: str) -> str:
    lines = diagram.split("\n")
    first = lines[0].strip().split(" ")[0] if lines else ""
    if first in DIAGRAM_KEYWORDS:
        return "\n".join(lines[1:]).strip()
    return diagram.strip()


def clean_diagram(raw: str) -> str:
    """
    Reduce model output to usable Mermaid text.

    Strips fences, drops non-printable characters, removes semicolons
    (splitting inline statements onto their own lines) and normalises line
    breaks. Leading indentation is kept since mindmaps depend on it.

    Args:
        raw: Raw model output

    Returns:
        str: Cleaned diagram, or FALLBACK_DIAGRAM when the body is degenerate
    """
    text = strip_code_fences(raw or "")
    text = _NON_PRINTABLE.sub("", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _INLINE_SEMICOLON.sub("\n", text).replace(";", "")

    lines = [line.rstrip() for line in text.split("\n")]
    text = "\n".join(line for line in lines if line.strip()).strip("\n")
    # Drop indentation of the header line only
    text = text.lstrip()

    if len(_body_without_header(text)) < MIN_DIAGRAM_BODY_CHARS:
        return FALLBACK_DIAGRAM
    return text
