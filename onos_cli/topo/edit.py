"""Delete, update and wipe out topology objects."""

from __future__ import annotations

from typing import Mapping, TextIO

from onos_cli.topo.filters import Filters, SortOrder
from onos_cli.topo.objects import Aspect, ObjectType, TopoClient, TopoObject
from onos_cli.utils import InvalidError

DELETE_KEYWORD = "--delete"
WIPEOUT_CONFIRMATION = "please"


def _is_deletion(value: str) -> bool:
    return not value or value == DELETE_KEYWORD


def delete_object(client: TopoClient, out: TextIO, object_id: str, type_name: str) -> None:
    """Delete the object with ``object_id`` and report it under ``type_name``."""
    client.delete(object_id)
    out.write(f"Deleted {type_name} {object_id}")


def update_object(
    client: TopoClient,
    object_id: str,
    object_type: ObjectType,
    labels: Mapping[str, str] | None = None,
    aspects: Mapping[str, str] | None = None,
    name: str | None = None,
) -> TopoObject:
    """Fetch an object, apply label, aspect and name changes, and store it.

    An empty value or ``--delete`` removes a label or aspect. The name is
    changed only for kinds and only when ``name`` is given.
    """
    obj = client.get(object_id)

    if obj.labels is None:
        obj.labels = {}
    for key, value in (labels or {}).items():
        if _is_deletion(value):
            obj.labels.pop(key, None)
        else:
            obj.labels[key] = value

    if object_type == ObjectType.KIND and name is not None and obj.kind is not None:
        obj.kind.name = name

    for aspect_type, aspect_value in (aspects or {}).items():
        if _is_deletion(aspect_value):
            if obj.aspects is not None:
                obj.aspects.pop(aspect_type, None)
        else:
            if obj.aspects is None:
                obj.aspects = {}
            obj.aspects[aspect_type] = Aspect(type_url=aspect_type, value=aspect_value.encode())

    client.update(obj)
    return obj


def _delete_listed(client: TopoClient, out: TextIO, obj: TopoObject) -> None:
    client.delete(obj.id)
    out.write(f"Deleted {obj.type} {obj.id}\n")


def wipeout(
    client: TopoClient, out: TextIO, confirmation: str, include_kinds: bool = False
) -> None:
    """Delete all relations, then all entities and, optionally, all kinds."""
    if confirmation != WIPEOUT_CONFIRMATION:
        raise InvalidError("Wipeout requires the string 'please'")

    # Relations go first so that deleting entities does not remove them underneath us.
    relations = client.list(Filters(object_types=[ObjectType.RELATION]), SortOrder.UNORDERED)
    for relation in relations:
        _delete_listed(client, out, relation)

    object_types = [ObjectType.ENTITY]
    if include_kinds:
        object_types.append(ObjectType.KIND)
    for obj in client.list(Filters(object_types=object_types), SortOrder.UNORDERED):
        _delete_listed(client, out, obj)