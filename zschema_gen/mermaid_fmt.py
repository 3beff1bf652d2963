from __future__ import annotations

import html
import re

# Mermaid node IDs must be alphanumeric/underscore and must not start with a
# digit.
MERMAID_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def mermaid_block(code: str) -> str:
    """Wrap Mermaid source in a Markdown Mermaid code fence."""
    return "```mermaid\n" + code.rstrip() + "\n```\n"


def mm_text(text: str) -> str:
    """Escape text for Mermaid labels."""
    normalized = re.sub(r"\s+", " ", html.unescape(str(text))).strip()
    # '#' first: the entity codes below start with it.
    return (
        normalized.replace("#", "#35;")
        .replace("&", "#amp;")
        .replace("<", "#lt;")
        .replace(">", "#gt;")
        .replace('"', "#quot;")
        .replace("|", "#124;")
    )


def assert_mm_id(value: str) -> str:
    if not MERMAID_ID_RE.match(value):
        raise ValueError(f"Not Mermaid-safe id: {value!r}")
    return value


def mm_node(node_id: str, label: str, *, shape: str = "box") -> str:
    assert_mm_id(node_id)
    if shape == "stadium":
        return f'  {node_id}(["{mm_text(label)}"])'
    if shape == "box":
        return f'  {node_id}["{mm_text(label)}"]'
    raise ValueError(f"unsupported node shape: {shape!r}")


def mm_edge(src: str, dst: str, label: str | None = None, arrow: str = "-->") -> str:
    if arrow not in ("-->", "---"):
        raise ValueError(f"unsupported flowchart arrow: {arrow!r}")
    if label:
        return f'  {src} {arrow}|"{mm_text(label)}"| {dst}'
    return f"  {src} {arrow} {dst}"


def mm_class_def(class_name: str, style: str) -> str:
    return f"  classDef {class_name} {style}"


def mm_class_apply(node_ids: list[str] | tuple[str, ...], class_name: str) -> str:
    return f"  class {','.join(node_ids)} {class_name}"
