from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from .schema_model import (
    Definition,
    NotDrawn,
    NotDrawnReason,
    Resolution,
    Resolved,
    ResolvedDefinition,
    ResolvedObject,
    ResolvedObjectSet,
    ResolvedRelation,
    ResolvedSchema,
    ResolvedWildcard,
    Schema,
)

Severity = Literal["error", "warning"]

DUPLICATE_DEFINITION = NotDrawn(NotDrawnReason.DUPLICATE_DEFINITION)
DUPLICATE_RELATION = NotDrawn(NotDrawnReason.DUPLICATE_RELATION)
UNKNOWN_DEFINITION = NotDrawn(NotDrawnReason.UNKNOWN_DEFINITION)
UNKNOWN_RELATION = NotDrawn(NotDrawnReason.UNKNOWN_RELATION)


@dataclass(frozen=True)
class Diagnostic:
    """Semantic problem found while resolving a schema.

    Diagnostics never stop resolution; the affected node is marked not drawn
    (or not unique) and the generators render an error placeholder for it.
    """

    severity: Severity
    code: str
    message: str
    path: str = ""


@dataclass(frozen=True)
class ResolveConfig:
    """Diagnostic controls.

    `ignore` drops diagnostics by code; `escalate` turns warnings into errors.
    Neither changes how the tree is annotated.
    """

    ignore: frozenset[str] = field(default_factory=frozenset)
    escalate: frozenset[str] = field(default_factory=frozenset)


class _Resolver:
    def __init__(self, schema: Schema, cfg: ResolveConfig) -> None:
        self.schema = schema
        self.cfg = cfg
        self.issues: list[Diagnostic] = []

        self.definition_ids: list[Resolution] = []
        self.lookup: dict[str, int] = {}
        self.relation_ids: list[list[Resolution]] = []

    def emit(self, code: str, message: str, path: str = "") -> None:
        if code in self.cfg.ignore:
            return
        severity: Severity = "error" if code in self.cfg.escalate else "warning"
        self.issues.append(
            Diagnostic(severity=severity, code=code, message=message, path=path)
        )

    # Pass 1 + 2: definition identifiers and the name lookup table.
    def assign_definition_ids(self) -> None:
        for index, zdef in enumerate(self.schema.definitions):
            if zdef.name in self.lookup:
                self.emit(
                    "W_DUPLICATE_DEFINITION",
                    f"definition {zdef.name} is declared more than once",
                    path=f"/definitions/{index}",
                )
                self.definition_ids.append(DUPLICATE_DEFINITION)
                continue
            self.lookup[zdef.name] = index
            self.definition_ids.append(Resolved(f"b{index + 1}"))

    # Pass 3: relation identifiers, one counter across all definitions.
    def assign_relation_ids(self) -> None:
        counter = 0
        for index, zdef in enumerate(self.schema.definitions):
            seen: set[str] = set()
            ids: list[Resolution] = []
            for rel_index, zrel in enumerate(zdef.relations):
                counter += 1
                if zrel.name in seen:
                    self.emit(
                        "W_DUPLICATE_RELATION",
                        f"relation {zrel.name} is declared more than once in "
                        f"definition {zdef.name}",
                        path=f"/definitions/{index}/relations/{rel_index}",
                    )
                    ids.append(DUPLICATE_RELATION)
                    continue
                seen.add(zrel.name)
                ids.append(Resolved(f"r{counter}"))
            self.relation_ids.append(ids)

    def find_definition(self, name: str) -> Optional[int]:
        return self.lookup.get(name)

    def definition_state(self, name: str) -> Resolution:
        index = self.find_definition(name)
        if index is None:
            return UNKNOWN_DEFINITION
        return self.definition_ids[index]

    def relation_state(self, definition_index: int, relation_name: str) -> Resolution:
        zdef = self.schema.definitions[definition_index]
        # First relation with that name; later duplicates are never drawn.
        for rel_index, zrel in enumerate(zdef.relations):
            if zrel.name == relation_name:
                return self.relation_ids[definition_index][rel_index]
        return UNKNOWN_RELATION

    # Pass 4: plain object references.
    def resolve_objects(self) -> dict[tuple[int, int], list[Resolution]]:
        out: dict[tuple[int, int], list[Resolution]] = {}
        for index, zdef in enumerate(self.schema.definitions):
            for rel_index, zrel in enumerate(zdef.relations):
                states: list[Resolution] = []
                for ref_index, ref in enumerate(zrel.objects):
                    state = self.definition_state(ref.name)
                    if isinstance(state, NotDrawn):
                        self.emit(
                            "W_UNKNOWN_DEFINITION",
                            f"{ref.name} declared in relation {zrel.name} of "
                            f"definition {zdef.name} does not exist",
                            path=f"/definitions/{index}/relations/{rel_index}/objects/{ref_index}",
                        )
                    states.append(state)
                out[(index, rel_index)] = states
        return out

    # Pass 5: object-set references (definition#relation).
    def resolve_object_sets(
        self,
    ) -> dict[tuple[int, int], list[tuple[Resolution, Resolution]]]:
        out: dict[tuple[int, int], list[tuple[Resolution, Resolution]]] = {}
        for index, zdef in enumerate(self.schema.definitions):
            for rel_index, zrel in enumerate(zdef.relations):
                states: list[tuple[Resolution, Resolution]] = []
                for ref_index, ref in enumerate(zrel.object_sets):
                    path = f"/definitions/{index}/relations/{rel_index}/object_sets/{ref_index}"
                    target = self.find_definition(ref.name)
                    if target is None:
                        self.emit(
                            "W_OBJECT_SET_UNKNOWN_DEFINITION",
                            f"{ref.name} declared in {zdef.name} does not exist",
                            path=path,
                        )
                        states.append((UNKNOWN_DEFINITION, UNKNOWN_DEFINITION))
                        continue

                    relation = self.relation_state(target, ref.relation)
                    if relation == UNKNOWN_RELATION:
                        self.emit(
                            "W_OBJECT_SET_UNKNOWN_RELATION",
                            f"relation {ref.relation} declared in {zdef.name} "
                            f"does not exist in {ref.name}",
                            path=path,
                        )
                    states.append((self.definition_ids[target], relation))
                out[(index, rel_index)] = states
        return out

    # Pass 6: wildcard references (definition:*).
    def resolve_wildcards(self) -> dict[tuple[int, int], list[Resolution]]:
        out: dict[tuple[int, int], list[Resolution]] = {}
        for index, zdef in enumerate(self.schema.definitions):
            for rel_index, zrel in enumerate(zdef.relations):
                states: list[Resolution] = []
                for ref_index, ref in enumerate(zrel.wildcards):
                    state = self.definition_state(ref.name)
                    if isinstance(state, NotDrawn):
                        self.emit(
                            "W_WILDCARD_UNKNOWN_DEFINITION",
                            f"{ref.name} declared in relation {zrel.name} of "
                            f"definition {zdef.name} does not exist",
                            path=f"/definitions/{index}/relations/{rel_index}/wildcards/{ref_index}",
                        )
                    states.append(state)
                out[(index, rel_index)] = states
        return out

    # Pass 7: per-relation uniqueness of each reference kind.
    def check_uniqueness(self) -> dict[tuple[int, int], tuple[list[bool], list[bool], list[bool]]]:
        out: dict[tuple[int, int], tuple[list[bool], list[bool], list[bool]]] = {}
        for index, zdef in enumerate(self.schema.definitions):
            for rel_index, zrel in enumerate(zdef.relations):
                base = f"/definitions/{index}/relations/{rel_index}"
                objects = self._unique_flags(
                    [ref.name for ref in zrel.objects],
                    code="W_DUPLICATE_OBJECT_REF",
                    template="{key} is declared more than once in relation {rel} of definition {zdef}",
                    zdef=zdef,
                    rel=zrel.name,
                    path=f"{base}/objects",
                )
                object_sets = self._unique_flags(
                    [ref.key for ref in zrel.object_sets],
                    code="W_DUPLICATE_OBJECT_SET_REF",
                    template="{key} is declared more than once in relation {rel} of definition {zdef}",
                    zdef=zdef,
                    rel=zrel.name,
                    path=f"{base}/object_sets",
                )
                wildcards = self._unique_flags(
                    [ref.name for ref in zrel.wildcards],
                    code="W_DUPLICATE_WILDCARD_REF",
                    template="wildcard {key}:* is declared more than once in relation {rel} of definition {zdef}",
                    zdef=zdef,
                    rel=zrel.name,
                    path=f"{base}/wildcards",
                )
                out[(index, rel_index)] = (objects, object_sets, wildcards)
        return out

    def _unique_flags(
        self,
        keys: list[str],
        *,
        code: str,
        template: str,
        zdef: Definition,
        rel: str,
        path: str,
    ) -> list[bool]:
        seen: set[str] = set()
        flags: list[bool] = []
        for i, key in enumerate(keys):
            if key in seen:
                self.emit(
                    code,
                    template.format(key=key, rel=rel, zdef=zdef.name),
                    path=f"{path}/{i}",
                )
                flags.append(False)
            else:
                seen.add(key)
                flags.append(True)
        return flags

    def run(self) -> ResolvedSchema:
        self.assign_definition_ids()
        self.assign_relation_ids()
        objects = self.resolve_objects()
        object_sets = self.resolve_object_sets()
        wildcards = self.resolve_wildcards()
        uniqueness = self.check_uniqueness()

        definitions: list[ResolvedDefinition] = []
        for index, zdef in enumerate(self.schema.definitions):
            relations: list[ResolvedRelation] = []
            for rel_index, zrel in enumerate(zdef.relations):
                key = (index, rel_index)
                obj_unique, set_unique, wc_unique = uniqueness[key]
                relations.append(
                    ResolvedRelation(
                        relation=zrel,
                        state=self.relation_ids[index][rel_index],
                        objects=tuple(
                            ResolvedObject(ref, target, unique)
                            for ref, target, unique in zip(
                                zrel.objects, objects[key], obj_unique
                            )
                        ),
                        object_sets=tuple(
                            ResolvedObjectSet(ref, def_state, rel_state, unique)
                            for ref, (def_state, rel_state), unique in zip(
                                zrel.object_sets, object_sets[key], set_unique
                            )
                        ),
                        wildcards=tuple(
                            ResolvedWildcard(ref, target, unique)
                            for ref, target, unique in zip(
                                zrel.wildcards, wildcards[key], wc_unique
                            )
                        ),
                    )
                )
            definitions.append(
                ResolvedDefinition(
                    definition=zdef,
                    state=self.definition_ids[index],
                    relations=tuple(relations),
                )
            )

        return ResolvedSchema(definitions=tuple(definitions), issues=tuple(self.issues))


def resolve(schema: Schema, cfg: Optional[ResolveConfig] = None) -> ResolvedSchema:
    """Assign diagram identifiers and cross-check references.

    Runs as ordered passes over the whole schema: definition ids, relation
    ids, plain / object-set / wildcard reference lookups, then per-relation
    uniqueness. Every problem is reported as a Diagnostic and resolution
    always completes; the input schema is left untouched.
    """
    return _Resolver(schema, cfg or ResolveConfig()).run()


def split_issues(issues: tuple[Diagnostic, ...] | list[Diagnostic]) -> tuple[list[str], list[str]]:
    """Return (errors, warnings) as plain message lists."""
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings
