"""Load topology objects from JSON documents."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, BinaryIO, TextIO

from onos_cli.topo.objects import (
    Aspect,
    Entity,
    Kind,
    ObjectType,
    Relation,
    TopoClient,
    TopoObject,
)
from onos_cli.utils import InvalidError


def _marshal(value: Any) -> bytes:
    text = json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    for ch, escaped in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(ch, escaped)
    return text.encode()


def _get_string(key: str, json_object: dict) -> str:
    value = json_object.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidError(f"field {key!r} must be a string")
    return value


def get_aspects(json_object: dict) -> dict[str, Aspect]:
    """Every key containing a dot is an aspect whose value is stored as JSON."""
    return {
        key: Aspect(type_url=key, value=_marshal(value))
        for key, value in json_object.items()
        if "." in key
    }


def get_labels(json_object: dict) -> dict[str, str]:
    labels = json_object.get("labels")
    if labels is None:
        return {}
    if not isinstance(labels, dict) or not all(isinstance(v, str) for v in labels.values()):
        raise InvalidError("labels must map strings to strings")
    return dict(labels)


def parse_object(object_id: str, value: Any) -> TopoObject:
    """Build a kind, entity or relation from its JSON description."""
    if not isinstance(value, dict):
        raise InvalidError("invalid json")
    object_type = _get_string("type", value)
    if object_type == "kind":
        obj = TopoObject(id=object_id, type=ObjectType.KIND, obj=Kind(name=_get_string("name", value)))
    elif object_type == "entity":
        obj = TopoObject(
            id=object_id, type=ObjectType.ENTITY, obj=Entity(kind_id=_get_string("kind", value))
        )
    elif object_type == "relation":
        obj = TopoObject(
            id=object_id,
            type=ObjectType.RELATION,
            obj=Relation(
                kind_id=_get_string("kind", value),
                src_entity_id=_get_string("source", value),
                tgt_entity_id=_get_string("target", value),
            ),
        )
    else:
        raise InvalidError("invalid json")
    obj.aspects = get_aspects(value)
    obj.labels = get_labels(value)
    return obj


def read_load_data(
    path: str | None = None, data: str = "{}", stdin: BinaryIO | TextIO | None = None
) -> bytes:
    """Read JSON from a file, from standard input when ``path`` is ``-``, or from ``data``."""
    if path is None:
        return data.encode()
    if path == "-":
        stream = stdin if stdin is not None else sys.stdin.buffer
        content = stream.read()
        return content.encode() if isinstance(content, str) else content
    return Path(path).read_bytes()


def load_from_bytes(client: TopoClient, json_data: bytes | str, out: TextIO | None = None) -> list[TopoObject]:
    """Create every top-level object of the JSON document through ``client``."""
    out = out if out is not None else sys.stdout
    document = json.loads(json_data)
    if not isinstance(document, dict):
        raise InvalidError("invalid json")
    created = []
    for key, value in document.items():
        obj = parse_object(key, value)
        out.write(f"Creating {obj.id}...\n")
        client.create(obj)
        created.append(obj)
    return created