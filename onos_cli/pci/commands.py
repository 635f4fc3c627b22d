"""Query PCI conflicts and cells and print them as tables."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol, TextIO

from onos_cli.utils import InvalidError, TabWriter

_HEX = re.compile(r"[0-9a-fA-F]+")
_UINT64_MAX = 2**64 - 1


@dataclass
class PciPool:
    min: int
    max: int


@dataclass
class PciCell:
    id: int
    node_id: str = ""
    dlearfcn: int = 0
    cell_type: str = ""
    pci: int = 0
    pci_pool: list[PciPool] = field(default_factory=list)
    neighbor_ids: list[int] = field(default_factory=list)


@dataclass
class CellResolution:
    id: int
    resolved_conflicts: int = 0
    original_pci: int = 0
    resolved_pci: int = 0


class PciClient(Protocol):
    """Operations offered by the PCI service."""

    def get_conflicts(self, cell_id: int) -> list[PciCell]:
        """Return the cells conflicting with ``cell_id``, or all when it is 0."""

    def get_resolved_conflicts(self) -> list[CellResolution]:
        """Return the resolution record of every cell."""

    def get_cell(self, cell_id: int) -> PciCell:
        """Return one cell."""

    def get_cells(self) -> list[PciCell]:
        """Return all cells."""


def parse_cell_id(text: str) -> int:
    """Parse a hexadecimal, unsigned 64-bit cell id."""
    if not _HEX.fullmatch(text):
        raise InvalidError(f"invalid cell id {text!r}")
    value = int(text, 16)
    if value > _UINT64_MAX:
        raise InvalidError(f"cell id {text!r} out of range")
    return value


def _pool(cell: PciCell) -> str:
    return "[" + ",".join(f"{p.min}:{p.max}" for p in cell.pci_pool) + "]"


def print_table_header(writer, no_headers: bool) -> None:
    if not no_headers:
        writer.write("ID\tNode ID\tDlearfcn\tCell Type\tPCI\tPCI Pool\n")


def print_table_cell(writer, cell: PciCell) -> None:
    writer.write(
        f"{cell.id:x}\t{cell.node_id}\t{cell.dlearfcn}\t{cell.cell_type}\t{cell.pci}\t{_pool(cell)}\n"
    )


def print_resolved_header(writer, no_headers: bool) -> None:
    if not no_headers:
        writer.write("ID\tTotal Resolved Conflicts\tMost Recent Resolution\n")


def print_resolved_cell(writer, cell: CellResolution) -> None:
    writer.write(f"{cell.id:x}\t{cell.resolved_conflicts}\t{cell.original_pci}=>{cell.resolved_pci}\n")


def print_single_cell(writer, cell: PciCell) -> None:
    writer.write(
        f"ID: {cell.id:x}\nNode ID: {cell.node_id}\nDlearfcn: {cell.dlearfcn}\n"
        f"Cell Type: {cell.cell_type}\nPCI: {cell.pci}\n"
    )
    neighbors = ",".join(f"{n:x}" for n in cell.neighbor_ids)
    writer.write(f"Neighbors: [{neighbors}]\n")
    writer.write(f"PCI Pool: {_pool(cell)}\n")


def _writer(out: TextIO) -> TabWriter:
    return TabWriter(out, padding=3, filter_html=True)


def get_conflicts(client: PciClient, out: TextIO, cell_id: int | None = None, no_headers: bool = False) -> None:
    """Print the cells conflicting with ``cell_id``, or with any cell when not given."""
    cells = client.get_conflicts(0 if cell_id is None else cell_id)
    with _writer(out) as writer:
        print_table_header(writer, no_headers)
        for cell in cells:
            print_table_cell(writer, cell)


def get_resolved_conflicts(client: PciClient, out: TextIO, no_headers: bool = False) -> None:
    """Print the number of resolutions and the latest resolution of every cell."""
    cells = client.get_resolved_conflicts()
    with _writer(out) as writer:
        print_resolved_header(writer, no_headers)
        for cell in cells:
            print_resolved_cell(writer, cell)


def get_cell(client: PciClient, out: TextIO, cell_id: int) -> None:
    """Print one cell's details."""
    cell = client.get_cell(cell_id)
    with _writer(out) as writer:
        print_single_cell(writer, cell)


def get_cells(client: PciClient, out: TextIO, no_headers: bool = False) -> None:
    """Print all cells as a table."""
    cells = client.get_cells()
    with _writer(out) as writer:
        print_table_header(writer, no_headers)
        for cell in cells:
            print_table_cell(writer, cell)