"""Topology objects and the creation of entities, relations and kinds."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Protocol


class ObjectType(enum.IntEnum):
    """Type of a topology object."""

    UNSPECIFIED = 0
    ENTITY = 1
    RELATION = 2
    KIND = 3

    def __str__(self) -> str:
        return self.name


class EventType(enum.IntEnum):
    """Type of a topology change event."""

    NONE = 0
    ADDED = 1
    UPDATED = 2
    REMOVED = 3

    def __str__(self) -> str:
        return self.name


@dataclass
class Entity:
    kind_id: str = ""
    src_relation_ids: list[str] = field(default_factory=list)
    tgt_relation_ids: list[str] = field(default_factory=list)


@dataclass
class Relation:
    kind_id: str = ""
    src_entity_id: str = ""
    tgt_entity_id: str = ""


@dataclass
class Kind:
    name: str = ""


@dataclass
class Aspect:
    type_url: str
    value: bytes


@dataclass
class TopoObject:
    """An entity, relation or kind with its labels and aspects."""

    id: str
    type: ObjectType = ObjectType.UNSPECIFIED
    obj: Entity | Relation | Kind | None = None
    aspects: dict[str, Aspect] | None = None
    labels: dict[str, str] = field(default_factory=dict)

    @property
    def entity(self) -> Entity | None:
        return self.obj if isinstance(self.obj, Entity) else None

    @property
    def relation(self) -> Relation | None:
        return self.obj if isinstance(self.obj, Relation) else None

    @property
    def kind(self) -> Kind | None:
        return self.obj if isinstance(self.obj, Kind) else None

    def set_aspect_bytes(self, aspect_type: str, value: bytes) -> None:
        """Store raw aspect bytes under ``aspect_type``."""
        if self.aspects is None:
            self.aspects = {}
        self.aspects[aspect_type] = Aspect(type_url=aspect_type, value=bytes(value))


@dataclass
class Event:
    type: EventType
    object: TopoObject


class TopoClient(Protocol):
    """Operations offered by a topology service."""

    def create(self, obj: TopoObject) -> Any:
        """Create ``obj``."""

    def get(self, object_id: str) -> TopoObject:
        """Return the object with ``object_id``."""

    def list(self, filters: Any, sort_order: Any) -> list[TopoObject]:
        """Return the objects matching ``filters`` in ``sort_order``."""

    def update(self, obj: TopoObject) -> Any:
        """Replace the stored object with ``obj``."""

    def delete(self, object_id: str) -> Any:
        """Delete the object with ``object_id``."""

    def watch(self, filters: Any, no_replay: bool) -> Iterator[Event]:
        """Yield change events for objects matching ``filters``."""


def create_object(
    client: TopoClient,
    obj: TopoObject,
    labels: Mapping[str, str] | None = None,
    aspects: Mapping[str, str] | None = None,
) -> TopoObject:
    """Attach labels and aspect values to ``obj`` and create it."""
    obj.labels = dict(labels or {})
    for aspect_type, aspect_value in (aspects or {}).items():
        obj.set_aspect_bytes(aspect_type, aspect_value.encode())
    client.create(obj)
    return obj


def create_entity(client, object_id, kind_id="", labels=None, aspects=None) -> TopoObject:
    """Create an entity of kind ``kind_id``."""
    obj = TopoObject(id=object_id, type=ObjectType.ENTITY, obj=Entity(kind_id=kind_id))
    return create_object(client, obj, labels, aspects)


def create_relation(
    client, object_id, src_id, tgt_id, kind_id="", labels=None, aspects=None
) -> TopoObject:
    """Create a relation from ``src_id`` to ``tgt_id``."""
    obj = TopoObject(
        id=object_id,
        type=ObjectType.RELATION,
        obj=Relation(kind_id=kind_id, src_entity_id=src_id, tgt_entity_id=tgt_id),
    )
    return create_object(client, obj, labels, aspects)


def create_kind(client, object_id, name, labels=None, aspects=None) -> TopoObject:
    """Create a kind called ``name``."""
    obj = TopoObject(id=object_id, type=ObjectType.KIND, obj=Kind(name=name))
    return create_object(client, obj, labels, aspects)