from __future__ import annotations

from typing import Iterator

from .schema_model import (
    Resolved,
    ResolvedDefinition,
    ResolvedObject,
    ResolvedObjectSet,
    ResolvedRelation,
    ResolvedSchema,
    ResolvedWildcard,
)


def drawn_relations(
    schema: ResolvedSchema,
) -> Iterator[tuple[ResolvedDefinition, ResolvedRelation]]:
    """Yield (definition, relation) pairs in declaration order.

    Relations owned by a duplicate definition are skipped: the duplicate's
    own error placeholder stands in for them.
    """
    for zdef in schema.definitions:
        if not zdef.drawn:
            continue
        for zrel in zdef.relations:
            yield zdef, zrel


# Error placeholder texts shared by every renderer.


def duplicate_definition_text(zdef: ResolvedDefinition) -> str:
    return f"definition {zdef.name} is declared more than once"


def duplicate_relation_text(zdef: ResolvedDefinition, zrel: ResolvedRelation) -> str:
    return f"relation {zrel.name} is duplicated in definition {zdef.name}"


def missing_definition_text(name: str) -> str:
    return f"definition {name} does not exist"


def duplicate_object_text(
    zdef: ResolvedDefinition, zrel: ResolvedRelation, obj: ResolvedObject
) -> str:
    return (
        f"{obj.ref.name} is declared more than once in relation {zrel.name} "
        f"of definition {zdef.name}"
    )


def object_set_not_drawn_text(zdef: ResolvedDefinition, obj: ResolvedObjectSet) -> str:
    """Missing definition and missing relation read differently."""
    ref = obj.ref
    if not isinstance(obj.definition, Resolved):
        return missing_definition_text(ref.name)
    return (
        f"{ref.key} in definition {zdef.name} : relation {ref.relation} "
        f"does not exist in {ref.name}"
    )


def duplicate_object_set_text(
    zdef: ResolvedDefinition, zrel: ResolvedRelation, obj: ResolvedObjectSet
) -> str:
    return (
        f"{obj.ref.key} is declared more than once in relation {zrel.name} "
        f"of definition {zdef.name}"
    )


def duplicate_wildcard_text(
    zdef: ResolvedDefinition, zrel: ResolvedRelation, wc: ResolvedWildcard
) -> str:
    return (
        f"wildcard {wc.ref.name}:* is declared more than once in relation "
        f"{zrel.name} of definition {zdef.name}"
    )
