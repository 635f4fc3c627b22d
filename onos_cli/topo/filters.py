"""Compile label and kind queries into topology filters."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

from onos_cli.topo.objects import ObjectType
from onos_cli.utils import InvalidError


@dataclass
class EqualFilter:
    value: str


@dataclass
class InFilter:
    values: list[str]


@dataclass
class NotFilter:
    inner: Filter


@dataclass
class Filter:
    condition: Union[EqualFilter, InFilter, NotFilter]
    key: str = ""


class RelationFilterScope(enum.IntEnum):
    TARGET_ONLY = 0
    ALL = 1
    SOURCE_AND_TARGET = 2

    def __str__(self) -> str:
        return self.name


@dataclass
class RelationFilter:
    src_id: str
    relation_kind: str
    target_kind: str = ""
    scope: RelationFilterScope = RelationFilterScope.TARGET_ONLY


class SortOrder(enum.IntEnum):
    UNORDERED = 0
    ASCENDING = 1
    DESCENDING = 2

    def __str__(self) -> str:
        return self.name


@dataclass
class Filters:
    label_filters: list[Filter] = field(default_factory=list)
    kind_filter: Filter | None = None
    object_types: list[ObjectType] = field(default_factory=list)
    relation_filter: RelationFilter | None = None


def compile_filters(object_type: ObjectType, label_query: str = "", kind_query: str = "") -> Filters:
    """Build the filters for listing or watching objects of ``object_type``."""
    filters = Filters(
        label_filters=compile_label_filters(label_query),
        object_types=[object_type],
    )
    if object_type in (ObjectType.ENTITY, ObjectType.RELATION):
        filters.kind_filter = compile_kind_filter(kind_query)
    return filters


def compile_label_filters(query: str) -> list[Filter]:
    """Compile a ``&&``-joined label query; unrecognised terms are dropped."""
    compiled = (compile_label_filter(term.strip()) for term in query.split(" && "))
    return [f for f in compiled if f is not None]


def _not(condition) -> NotFilter:
    return NotFilter(inner=Filter(condition=condition))


def compile_label_filter(field: str) -> Filter | None:
    """Compile one ``key=v``, ``key!=v``, ``key in (..)`` or ``key !in (..)`` term."""
    if " !in (" in field:
        return Filter(_not(InFilter(extract_values(field))), extract_key(field, " !in ("))
    if " in (" in field:
        return Filter(InFilter(extract_values(field)), extract_key(field, " in ("))
    if "!=" in field:
        return Filter(_not(EqualFilter(extract_value(field))), extract_key(field, "!="))
    if "=" in field:
        return Filter(EqualFilter(extract_value(field)), extract_key(field, "="))
    return None


def extract_key(field: str, sep: str) -> str:
    return field.split(sep)[0].strip()


def extract_value(field: str) -> str:
    parts = field.split("=")
    if len(parts) < 2:
        raise InvalidError(f"missing '=' in {field!r}")
    return parts[1].strip()


def extract_values(field: str) -> list[str]:
    parts = field.split("(")
    if len(parts) < 2:
        raise InvalidError(f"missing value list in {field!r}")
    return [v.strip() for v in parts[1].split(")")[0].split(",")]


def compile_kind_filter(query: str) -> Filter | None:
    """Compile a kind query; a bare ``a, b`` list means ``in (a, b)``."""
    if not query:
        return None
    if "!in (" in query:
        return Filter(_not(InFilter(extract_values(query))))
    if "in (" in query:
        return Filter(InFilter(extract_values(query)))
    if "!=" in query:
        return Filter(_not(EqualFilter(extract_value(query))))
    if "=" in query:
        return Filter(EqualFilter(extract_value(query)))
    if not any(ch in query for ch in "()!"):
        return Filter(InFilter(extract_values(" (" + query + ") ")))
    return None