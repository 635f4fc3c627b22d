"""Create, read, update, delete and watch UE information."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Protocol, Sequence, TextIO

from onos_cli.topo.objects import Aspect


class UEEventType(enum.IntEnum):
    """Type of a UE change event."""

    NONE = 0
    ADDED = 1
    UPDATED = 2
    REMOVED = 3

    def __str__(self) -> str:
        return self.name


@dataclass
class UE:
    """A UE and its aspects, keyed by aspect type."""

    id: str
    aspects: dict[str, Aspect] = field(default_factory=dict)


@dataclass
class UEEvent:
    type: UEEventType
    ue: UE


class UEClient(Protocol):
    """Operations offered by the UE-NIB service."""

    def create_ue(self, ue: UE) -> object:
        """Create ``ue``."""

    def update_ue(self, ue: UE) -> object:
        """Update the aspects of ``ue``."""

    def delete_ue(self, ue_id: str, aspect_types: Sequence[str]) -> object:
        """Delete the given aspects of the UE."""

    def get_ue(self, ue_id: str, aspect_types: Sequence[str]) -> UE:
        """Return the UE with the given aspects."""

    def list_ues(self, aspect_types: Sequence[str]) -> Iterator[UE]:
        """Yield every UE with the given aspects."""

    def watch_ues(self, aspect_types: Sequence[str], no_replay: bool) -> Iterator[UEEvent]:
        """Yield UE change events."""


def _build_ue(ue_id: str, aspects: Mapping[str, str] | None) -> UE:
    return UE(
        id=ue_id,
        aspects={
            aspect_type: Aspect(type_url=aspect_type, value=value.encode())
            for aspect_type, value in (aspects or {}).items()
        },
    )


def create_ue(client: UEClient, out: TextIO, ue_id: str, aspects: Mapping[str, str]) -> UE:
    """Create a UE carrying the given aspect values."""
    ue = _build_ue(ue_id, aspects)
    try:
        client.create_ue(ue)
    except Exception as err:
        out.write(f"Unable to create UE aspects: {err}")
        raise
    return ue


def update_ue(client: UEClient, out: TextIO, ue_id: str, aspects: Mapping[str, str]) -> UE:
    """Update a UE with the given aspect values."""
    ue = _build_ue(ue_id, aspects)
    try:
        client.update_ue(ue)
    except Exception as err:
        out.write(f"Unable to update UE aspects: {err}")
        raise
    return ue


def delete_ue(client: UEClient, out: TextIO, ue_id: str, aspect_types: Sequence[str] = ()) -> None:
    """Delete the listed aspects of a UE."""
    try:
        client.delete_ue(ue_id, list(aspect_types))
    except Exception as err:
        out.write(f"Unable to delete UE aspects: {err}")
        raise


def print_header(writer: TextIO, replay: bool) -> None:
    """Write the column header for UE listings or, with ``replay``, for events."""
    if replay:
        writer.write(f"{'Event Type':<12}\t{'UE ID':<16}\t{'Aspect Type':<20}\tAspect Value\n")
    else:
        writer.write(f"{'UE ID':<16}\t{'Aspect Types':<20}\n")


def print_ue(writer: TextIO, ue: UE, verbose: bool) -> None:
    """Write a UE as a row of aspect types or, when verbose, with aspect values."""
    if not verbose:
        writer.write(f"{ue.id:<16}\t")
        writer.write(",".join(ue.aspects) + "\n")
    else:
        writer.write(f"ID: {ue.id}\n")
        writer.write("Aspects:\n")
        for aspect_type, aspect in ue.aspects.items():
            value = aspect.value.decode("utf-8", errors="replace")
            writer.write(f"- {aspect_type}={value}\n")


def print_update_type(writer: TextIO, event_type: UEEventType) -> None:
    """Write the event type, ``REPLAY`` standing for replayed state."""
    name = "REPLAY" if event_type == UEEventType.NONE else str(event_type)
    writer.write(f"{name:<12}\t")


def get_ue(
    client: UEClient,
    out: TextIO,
    ue_id: str,
    aspect_types: Sequence[str] = (),
    no_headers: bool = False,
    verbose: bool = False,
) -> UE:
    """Print one UE; headers are left out in verbose output."""
    if verbose:
        no_headers = True
    if not no_headers:
        print_header(out, False)
    try:
        ue = client.get_ue(ue_id, list(aspect_types))
    except Exception as err:
        out.write(f"Unable to get UE aspects: {err}")
        raise
    print_ue(out, ue, verbose)
    return ue


def list_ues(
    client: UEClient,
    out: TextIO,
    aspect_types: Sequence[str] = (),
    no_headers: bool = False,
    verbose: bool = False,
) -> None:
    """Print every UE; headers are left out in verbose output."""
    if verbose:
        no_headers = True
    if not no_headers:
        print_header(out, False)
    try:
        stream = client.list_ues(list(aspect_types))
    except Exception as err:
        out.write(f"Unable to list UEs: {err}")
        raise
    try:
        for ue in stream:
            print_ue(out, ue, verbose)
    except Exception as err:
        out.write(f"Unable to read UE: {err}")
        raise


def watch_ues(
    client: UEClient,
    out: TextIO,
    ue_id: str | None = None,
    aspect_types: Sequence[str] = (),
    no_headers: bool = False,
    no_replay: bool = False,
) -> None:
    """Print UE change events until the stream ends, optionally for one UE only."""
    stream = client.watch_ues(list(aspect_types), no_replay)
    if not no_headers:
        print_header(out, True)
    try:
        for event in stream:
            if ue_id is None or ue_id == event.ue.id:
                print_update_type(out, event.type)
                print_ue(out, event.ue, False)
    except Exception as err:
        out.write(f"Error receiving notification : {err}")
        raise