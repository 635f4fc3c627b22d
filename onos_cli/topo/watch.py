"""Watch topology changes and print each event as it arrives."""

from __future__ import annotations

from typing import TextIO

from onos_cli.topo.filters import compile_filters
from onos_cli.topo.get import print_header, print_object
from onos_cli.topo.objects import EventType, ObjectType, TopoClient


def _event_name(event_type: EventType) -> str:
    return "REPLAY" if event_type == EventType.NONE else str(event_type)


def print_update_type(
    writer: TextIO, event_type: EventType, object_type: ObjectType, verbose: bool
) -> None:
    """Write the event type (``REPLAY`` for replayed state) and the object type."""
    if verbose:
        writer.write(f"Update Type:\t{_event_name(event_type)}\n")
        writer.write(f"Object Type:\t{object_type}\n")
    else:
        writer.write(f"{_event_name(event_type):<12}\t{str(object_type):<10}\t")


def watch(
    client: TopoClient,
    out: TextIO,
    object_type: ObjectType,
    object_id: str | None = None,
    no_headers: bool = False,
    verbose: bool = False,
    label_query: str = "",
    kind_query: str = "",
    no_replay: bool = False,
) -> None:
    """Print change events until the stream ends.

    Label and kind filtering happens in the service; the object id and type
    are matched here.
    """
    filters = compile_filters(object_type, label_query, kind_query)
    stream = client.watch(filters, no_replay)

    if not no_headers:
        print_header(out, object_type, True, verbose)

    try:
        for event in stream:
            obj = event.object
            if object_id is not None and object_id != obj.id:
                continue
            if obj.type == ObjectType.UNSPECIFIED or obj.type == object_type:
                print_update_type(out, event.type, obj.type, verbose)
                print_object(out, obj, verbose, False)
    except Exception as err:
        out.write(f"Error receiving notification : {err}")
        raise