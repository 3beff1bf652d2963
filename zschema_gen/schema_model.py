from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .resolve import Diagnostic

# ---------------------------------------------------------------------------
# Grammar-level AST (produced by the parser, never mutated afterwards).
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ObjectReference:
    """`name`: any object of definition `name`."""

    name: str


@dataclass(frozen=True)
class ObjectSetReference:
    """`name#relation`: the subjects related via `relation` on `name`."""

    name: str
    relation: str

    @property
    def key(self) -> str:
        return f"{self.name}#{self.relation}"


@dataclass(frozen=True)
class WildcardReference:
    """`name:*`: any instance of definition `name`."""

    name: str


@dataclass(frozen=True)
class Relation:
    name: str
    # Index of the owning Definition within Schema.definitions.
    owner: int
    objects: tuple[ObjectReference, ...] = ()
    object_sets: tuple[ObjectSetReference, ...] = ()
    wildcards: tuple[WildcardReference, ...] = ()


@dataclass(frozen=True)
class Definition:
    name: str
    relations: tuple[Relation, ...] = ()
    offset: int = 0


@dataclass(frozen=True)
class Schema:
    definitions: tuple[Definition, ...] = ()


# ---------------------------------------------------------------------------
# Resolution states.
# ---------------------------------------------------------------------------


class NotDrawnReason(Enum):
    DUPLICATE_DEFINITION = "duplicate_definition"
    DUPLICATE_RELATION = "duplicate_relation"
    UNKNOWN_DEFINITION = "unknown_definition"
    UNKNOWN_RELATION = "unknown_relation"


@dataclass(frozen=True)
class Resolved:
    id: str


@dataclass(frozen=True)
class NotDrawn:
    reason: NotDrawnReason


Resolution = Union[Resolved, NotDrawn]


# ---------------------------------------------------------------------------
# Annotated tree (produced by the resolver, consumed by the generators).
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedObject:
    ref: ObjectReference
    target: Resolution
    unique: bool


@dataclass(frozen=True)
class ResolvedObjectSet:
    ref: ObjectSetReference
    definition: Resolution
    # NotDrawn(UNKNOWN_RELATION) when the definition exists but lacks the
    # relation; mirrors `definition` when the definition itself is missing.
    relation: Resolution
    unique: bool


@dataclass(frozen=True)
class ResolvedWildcard:
    ref: WildcardReference
    target: Resolution
    unique: bool


@dataclass(frozen=True)
class ResolvedRelation:
    relation: Relation
    state: Resolution
    objects: tuple[ResolvedObject, ...] = ()
    object_sets: tuple[ResolvedObjectSet, ...] = ()
    wildcards: tuple[ResolvedWildcard, ...] = ()

    @property
    def name(self) -> str:
        return self.relation.name


@dataclass(frozen=True)
class ResolvedDefinition:
    definition: Definition
    state: Resolution
    relations: tuple[ResolvedRelation, ...] = ()

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def drawn(self) -> bool:
        return isinstance(self.state, Resolved)


@dataclass(frozen=True)
class ResolvedSchema:
    definitions: tuple[ResolvedDefinition, ...]
    # Diagnostics in the order the resolver passes produced them.
    issues: tuple[Diagnostic, ...] = ()
