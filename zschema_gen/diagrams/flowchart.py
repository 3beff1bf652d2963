from __future__ import annotations

from ..constants import WILDCARD_LABEL
from ..mermaid_fmt import mm_class_apply, mm_class_def, mm_edge, mm_node, mm_text
from ..schema_model import Resolved, ResolvedSchema
from ..schema_view import (
    drawn_relations,
    duplicate_definition_text,
    duplicate_object_set_text,
    duplicate_object_text,
    duplicate_relation_text,
    duplicate_wildcard_text,
    missing_definition_text,
    object_set_not_drawn_text,
)

NOT_DRAWN_CLASS = "notDrawn"
NOT_DRAWN_STYLE = "fill:#fdd,stroke:#c00,color:#900"


def gen_flowchart(schema: ResolvedSchema, title: str) -> str:
    """Generate a Mermaid flowchart (LR) of a resolved schema.

    Same element order as the Archimate view. Error placeholders become
    standalone nodes (e1, e2, ...) styled with the notDrawn class.
    """
    lines: list[str] = ["---", f"title: {mm_text(title)}", "---", "flowchart LR"]
    error_ids: list[str] = []

    def error_node(text: str) -> None:
        node_id = f"e{len(error_ids) + 1}"
        error_ids.append(node_id)
        lines.append(mm_node(node_id, text))

    for zdef in schema.definitions:
        if isinstance(zdef.state, Resolved):
            lines.append(mm_node(zdef.state.id, zdef.name))
        else:
            error_node(duplicate_definition_text(zdef))

    for zdef, zrel in drawn_relations(schema):
        if not isinstance(zrel.state, Resolved):
            error_node(duplicate_relation_text(zdef, zrel))
            continue

        assert isinstance(zdef.state, Resolved)
        rel_id = zrel.state.id
        lines.append(mm_node(rel_id, zrel.name, shape="stadium"))
        lines.append(mm_edge(zdef.state.id, rel_id, arrow="---"))

        for obj in zrel.objects:
            if not isinstance(obj.target, Resolved):
                error_node(missing_definition_text(obj.ref.name))
            elif not obj.unique:
                error_node(duplicate_object_text(zdef, zrel, obj))
            else:
                lines.append(mm_edge(rel_id, obj.target.id))

    for zdef, zrel in drawn_relations(schema):
        if not isinstance(zrel.state, Resolved):
            continue
        for obj_set in zrel.object_sets:
            if not isinstance(obj_set.relation, Resolved):
                error_node(object_set_not_drawn_text(zdef, obj_set))
            elif not obj_set.unique:
                error_node(duplicate_object_set_text(zdef, zrel, obj_set))
            else:
                lines.append(
                    mm_edge(obj_set.relation.id, zrel.state.id, label=obj_set.ref.key)
                )

    for zdef, zrel in drawn_relations(schema):
        if not isinstance(zrel.state, Resolved):
            continue
        for wc in zrel.wildcards:
            if not isinstance(wc.target, Resolved):
                error_node(missing_definition_text(wc.ref.name))
            elif not wc.unique:
                error_node(duplicate_wildcard_text(zdef, zrel, wc))
            else:
                lines.append(mm_edge(zrel.state.id, wc.target.id, label=WILDCARD_LABEL))

    if error_ids:
        lines.append(mm_class_def(NOT_DRAWN_CLASS, NOT_DRAWN_STYLE))
        lines.append(mm_class_apply(error_ids, NOT_DRAWN_CLASS))

    return "\n".join(lines) + "\n"
