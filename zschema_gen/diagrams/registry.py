from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..config import RenderConfig
from ..constants import FORMAT_ARCHIMATE, FORMAT_MERMAID
from ..schema_model import ResolvedSchema
from .archimate import gen_archimate
from .flowchart import gen_flowchart

RenderFn = Callable[[ResolvedSchema, str, RenderConfig], str]


@dataclass(frozen=True)
class DiagramSpec:
    diagram_id: str
    suffix: str
    # Markdown outputs are wrapped in a titled Mermaid code fence.
    markdown: bool
    render: RenderFn


def _render_archimate(schema: ResolvedSchema, title: str, cfg: RenderConfig) -> str:
    return gen_archimate(schema, title, cfg)


def _render_flowchart(schema: ResolvedSchema, title: str, _: RenderConfig) -> str:
    return gen_flowchart(schema, title)


DIAGRAMS: list[DiagramSpec] = [
    DiagramSpec(
        diagram_id=FORMAT_ARCHIMATE,
        suffix=".puml",
        markdown=False,
        render=_render_archimate,
    ),
    DiagramSpec(
        diagram_id=FORMAT_MERMAID,
        suffix=".md",
        markdown=True,
        render=_render_flowchart,
    ),
]


def diagram_ids() -> tuple[str, ...]:
    return tuple(spec.diagram_id for spec in DIAGRAMS)


def get_diagram(diagram_id: str) -> DiagramSpec:
    for spec in DIAGRAMS:
        if spec.diagram_id == diagram_id:
            return spec
    raise KeyError(f"unknown diagram format {diagram_id!r} (known: {', '.join(diagram_ids())})")


def generate(
    schema: ResolvedSchema,
    title: str,
    cfg: RenderConfig | None = None,
    *,
    diagram_id: str = FORMAT_ARCHIMATE,
) -> str:
    """Render a resolved schema in the requested format."""
    return get_diagram(diagram_id).render(schema, title, cfg or RenderConfig())
