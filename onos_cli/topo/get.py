"""Retrieve topology objects and print them as tables or verbose listings."""

from __future__ import annotations

from typing import Iterable, Protocol, TextIO

from onos_cli.topo.filters import (
    Filters,
    RelationFilter,
    RelationFilterScope,
    SortOrder,
    compile_filters,
)
from onos_cli.topo.objects import Kind, ObjectType, Relation, TopoClient, TopoObject
from onos_cli.utils import InvalidError, TabWriter, none

_OBJECTS_HEADER = ("Object Type", "Object ID", "Kind ID", "Source ID", "Target ID", "Labels", "Aspects")


class _Writer(Protocol):
    def write(self, text: str) -> int: ...


def parse_sort_order(text: str) -> SortOrder:
    """Map ``ascending``/``descending`` to their order; anything else is unordered."""
    return {
        "ascending": SortOrder.ASCENDING,
        "descending": SortOrder.DESCENDING,
    }.get(text, SortOrder.UNORDERED)


def parse_scope(text: str, allow_all: bool = False) -> RelationFilterScope:
    """Map a scope name to a relation filter scope; the default is target only."""
    if text == "source_and_target":
        return RelationFilterScope.SOURCE_AND_TARGET
    if allow_all and text == "all":
        return RelationFilterScope.ALL
    return RelationFilterScope.TARGET_ONLY


def labels_as_csv(obj: TopoObject) -> str:
    """Render the object's labels as ``key=value`` pairs separated by commas."""
    return ",".join(f"{key}={value}" for key, value in (obj.labels or {}).items())


def print_header(writer: _Writer, object_type: ObjectType, verbose: bool, print_update_type: bool) -> None:
    """Write the table header for objects of ``object_type``."""
    if print_update_type:
        writer.write("Update Type\tObject Type\t")
    if not verbose:
        if object_type == ObjectType.ENTITY:
            writer.write("Entity ID\tKind ID\tLabels")
        elif object_type == ObjectType.RELATION:
            writer.write("Relation ID\tKind ID\tSource ID\tTarget ID\tLabels")
        elif object_type == ObjectType.KIND:
            writer.write("Kind ID\tName\tLabels")
        else:
            writer.write("ID\tKind ID/Name\tLabels")
        writer.write("\tAspects")
    writer.write("\n")


def _join_ids(ids: Iterable[str]) -> str:
    return ", ".join(ids)


def print_object(writer: _Writer, obj: TopoObject, verbose: bool, print_type: bool) -> None:
    """Write one object as a table row or, when verbose, as a listing."""
    labels = none(labels_as_csv(obj))

    if print_type:
        if verbose:
            writer.write(f"Object Type: {obj.type}\n")
        else:
            writer.write(f"{obj.type}\t")

    if obj.type == ObjectType.ENTITY:
        entity = obj.entity
        kind_id = entity.kind_id if entity is not None else ""
        if not verbose:
            writer.write(f"{obj.id}\t{kind_id}\t{labels}")
        else:
            writer.write(f"ID: {obj.id}\nKind ID: {kind_id}\nLabels: {labels}\n")
            if entity is not None:
                writer.write(f"Source Id's: {_join_ids(entity.src_relation_ids)}\n")
                writer.write(f"Target Id's: {_join_ids(entity.tgt_relation_ids)}\n")
        print_aspects(writer, obj, verbose)
    elif obj.type == ObjectType.RELATION:
        rel = obj.relation or Relation()
        if not verbose:
            writer.write(f"{obj.id}\t{rel.kind_id}\t{rel.src_entity_id}\t{rel.tgt_entity_id}\t{labels}")
        else:
            writer.write(
                f"ID:\t{obj.id}\nKind ID:\t{rel.kind_id}\nSource Entity ID:\t{rel.src_entity_id}\n"
                f"Target Entity ID:\t{rel.tgt_entity_id}\nLabels:\t{labels}\n"
            )
        print_aspects(writer, obj, verbose)
    elif obj.type == ObjectType.KIND:
        kind = obj.kind or Kind()
        if not verbose:
            writer.write(f"{obj.id}\t{kind.name}\t{labels}")
        else:
            writer.write(f"ID:\t{obj.id}\nName:\t{kind.name}\nLabels:\t{labels}\n")
        print_aspects(writer, obj, verbose)
    else:
        writer.write("\n")


def print_aspects(writer: _Writer, obj: TopoObject, verbose: bool) -> None:
    """Write the object's aspects: their types in a column, or each with its value."""
    if verbose:
        writer.write("Aspects:\n")
    if obj.aspects is None:
        writer.write(f"\t{none('')}")
    else:
        for index, (aspect_type, aspect) in enumerate(obj.aspects.items()):
            if verbose:
                value = aspect.value.decode("utf-8", errors="replace")
                writer.write(f"- {aspect_type}={value}\n")
            else:
                writer.write("\t" if index == 0 else ",")
                writer.write(aspect_type)
    writer.write("\n")


def _get_object(client: TopoClient, out: TextIO, object_id: str) -> TopoObject:
    try:
        return client.get(object_id)
    except Exception:
        out.write("get error")
        raise


def _list_quietly(client: TopoClient, filters: Filters, sort_order: SortOrder) -> list[TopoObject]:
    # Listing failures leave the table empty rather than failing the command.
    try:
        return list(client.list(filters, sort_order))
    except Exception:
        return []


def get_objects(
    client: TopoClient,
    out: TextIO,
    object_type: ObjectType,
    object_id: str | None = None,
    no_headers: bool = False,
    verbose: bool = False,
    label_query: str = "",
    kind_query: str = "",
    sort_order: SortOrder = SortOrder.UNORDERED,
) -> None:
    """Print one object by id, or every object of ``object_type`` matching the queries."""
    writer = TabWriter(out, padding=3)
    if object_id is None:
        filters = compile_filters(object_type, label_query, kind_query)
        if not no_headers and not verbose:
            print_header(writer, object_type, verbose, False)
        for obj in _list_quietly(client, filters, sort_order):
            print_object(writer, obj, verbose, False)
    else:
        obj = _get_object(client, out, object_id)
        if not no_headers:
            print_header(writer, object_type, verbose, False)
        if obj is not None:
            print_object(writer, obj, verbose, False)
    writer.flush()


def get_related(
    client: TopoClient,
    out: TextIO,
    related_to: str,
    related_via: str,
    target_kind: str = "",
    scope: RelationFilterScope = RelationFilterScope.TARGET_ONLY,
    no_headers: bool = False,
    verbose: bool = False,
) -> None:
    """Print the objects reached from ``related_to`` through relations of kind ``related_via``."""
    if not related_to or not related_via:
        raise InvalidError("missing related-to and/or related-via flags")
    writer = TabWriter(out, padding=3, filter_html=True)
    if not no_headers:
        print_header(writer, ObjectType.RELATION, verbose, False)
    filters = Filters(
        relation_filter=RelationFilter(
            src_id=related_to,
            relation_kind=related_via,
            target_kind=target_kind or "",
            scope=scope,
        )
    )
    for obj in _list_quietly(client, filters, SortOrder.UNORDERED):
        print_object(writer, obj, verbose, False)
    writer.flush()


def list_all_object_types(
    client: TopoClient,
    out: TextIO,
    object_id: str | None = None,
    no_headers: bool = False,
    verbose: bool = False,
    label_query: str = "",
    kind_query: str = "",
    sort_order: SortOrder = SortOrder.UNORDERED,
) -> None:
    """Print entities, relations and kinds together, each row led by its type."""
    writer = TabWriter(out, padding=3)
    if object_id is None:
        filters = compile_filters(ObjectType.ENTITY, label_query, kind_query)
        filters.object_types = [ObjectType.ENTITY, ObjectType.RELATION, ObjectType.KIND]
        objects = list(client.list(filters, sort_order))
    else:
        objects = [_get_object(client, out, object_id)]

    if not no_headers and not verbose:
        writer.write("\t".join(_OBJECTS_HEADER) + "\n")
    for obj in objects:
        print_object(writer, obj, verbose, True)
    writer.flush()