from __future__ import annotations

from ..config import RenderConfig
from ..constants import WILDCARD_LABEL
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


def _error_box(text: str) -> str:
    return f'rectangle "{text}" #red'


def gen_archimate(schema: ResolvedSchema, title: str, cfg: RenderConfig) -> str:
    """Generate a PlantUML Archimate diagram of a resolved schema.

    Definitions become Business_Object elements, relations become
    <<relation>> objects associated to their definition, and references
    become Rel_Access_w edges. Anything the resolver marked as not drawn
    (or not unique) is rendered as a red rectangle instead.

    Order: all definitions, then every relation with its plain references,
    then all object-set references, then all wildcard references.
    """
    lines: list[str] = [
        f"@startuml {title}",
        "!include <archimate/Archimate>",
        f"scale {cfg.scale}",
        f"skinparam dpi {cfg.dpi}",
    ]

    for zdef in schema.definitions:
        if isinstance(zdef.state, Resolved):
            lines.append(f'Business_Object({zdef.state.id},"{zdef.name}")')
        else:
            lines.append(_error_box(duplicate_definition_text(zdef)))

    for zdef, zrel in drawn_relations(schema):
        if not isinstance(zrel.state, Resolved):
            lines.append(_error_box(duplicate_relation_text(zdef, zrel)))
            continue

        assert isinstance(zdef.state, Resolved)
        rel_id = zrel.state.id
        lines.append(f'Business_Object({rel_id},"{zrel.name}") <<relation>>')
        lines.append(f"Rel_Association({zdef.state.id},{rel_id})")

        for obj in zrel.objects:
            if not isinstance(obj.target, Resolved):
                lines.append(_error_box(missing_definition_text(obj.ref.name)))
            elif not obj.unique:
                lines.append(_error_box(duplicate_object_text(zdef, zrel, obj)))
            else:
                lines.append(f"Rel_Access_w({rel_id},{obj.target.id})")

    for zdef, zrel in drawn_relations(schema):
        if not isinstance(zrel.state, Resolved):
            continue
        for obj_set in zrel.object_sets:
            if not isinstance(obj_set.relation, Resolved):
                lines.append(_error_box(object_set_not_drawn_text(zdef, obj_set)))
            elif not obj_set.unique:
                lines.append(
                    _error_box(duplicate_object_set_text(zdef, zrel, obj_set))
                )
            else:
                lines.append(
                    f'Rel_Access_w({obj_set.relation.id},{zrel.state.id},"{obj_set.ref.key}")'
                )

    for zdef, zrel in drawn_relations(schema):
        if not isinstance(zrel.state, Resolved):
            continue
        for wc in zrel.wildcards:
            if not isinstance(wc.target, Resolved):
                lines.append(_error_box(missing_definition_text(wc.ref.name)))
            elif not wc.unique:
                lines.append(_error_box(duplicate_wildcard_text(zdef, zrel, wc)))
            else:
                lines.append(
                    f'Rel_Access_w({zrel.state.id},{wc.target.id},"{WILDCARD_LABEL}")'
                )

    lines.append("@enduml")
    return "\n".join(lines) + "\n"
