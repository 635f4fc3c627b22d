import io
import re

import pytest

from onos_cli.pci.commands import (
    CellResolution,
    PciCell,
    PciPool,
    get_cell,
    get_cells,
    get_conflicts,
    get_resolved_conflicts,
    parse_cell_id,
    print_resolved_cell,
    print_single_cell,
    print_table_cell,
    print_table_header,
)
from onos_cli.utils import InvalidError


class FakePci:
    def __init__(self, cells=(), resolutions=(), fail=False):
        self.cells = list(cells)
        self.resolutions = list(resolutions)
        self.conflict_requests = []
        self.cell_requests = []
        self.fail = fail

    def get_conflicts(self, cell_id):
        self.conflict_requests.append(cell_id)
        return self.cells

    def get_resolved_conflicts(self):
        return self.resolutions

    def get_cell(self, cell_id):
        if self.fail:
            raise RuntimeError("unavailable")
        self.cell_requests.append(cell_id)
        return self.cells[0]

    def get_cells(self):
        if self.fail:
            raise RuntimeError("unavailable")
        return self.cells


CELLS = [
    PciCell(id=0x1F, node_id="n1", dlearfcn=100, cell_type="MACRO", pci=7, pci_pool=[PciPool(1, 5)]),
    PciCell(id=0x123456, node_id="node-two", dlearfcn=5, cell_type="FEMTO", pci=12),
]


@pytest.mark.parametrize("value", [0, 1, 0xABC, 2**64 - 1])
def test_parse_cell_id_round_trip(value):
    assert parse_cell_id(format(value, "x")) == value
    assert parse_cell_id(format(value, "X")) == value


@pytest.mark.parametrize("text", ["", "0x1f", "-1", "+1", "1_0", "g", " 1", "1" + "0" * 16])
def test_parse_cell_id_rejects(text):
    with pytest.raises(InvalidError):
        parse_cell_id(text)


def test_table_header():
    out = io.StringIO()
    print_table_header(out, True)
    assert out.getvalue() == ""
    print_table_header(out, False)
    assert out.getvalue() == "ID\tNode ID\tDlearfcn\tCell Type\tPCI\tPCI Pool\n"


def test_table_cell_fields():
    out = io.StringIO()
    cell = PciCell(id=0x1F, node_id="node-1", dlearfcn=100, cell_type="MACRO", pci=7,
                   pci_pool=[PciPool(1, 5), PciPool(10, 20)])
    print_table_cell(out, cell)
    text = out.getvalue()
    assert text.endswith("\n")
    fields = text.rstrip("\n").split("\t")
    assert fields == ["1f", "node-1", "100", "MACRO", "7", "[1:5,10:20]"]


def test_single_cell_listing():
    out = io.StringIO()
    print_single_cell(out, PciCell(id=1, node_id="n", neighbor_ids=[1, 2]))
    lines = out.getvalue().splitlines()
    assert lines[0] == "ID: 1"
    assert "Neighbors: [1,2]" in lines
    assert lines[-1] == "PCI Pool: []"


def test_resolved_cell():
    out = io.StringIO()
    print_resolved_cell(out, CellResolution(id=1, resolved_conflicts=3, original_pci=5, resolved_pci=9))
    assert out.getvalue() == "1\t3\t5=>9\n"


def test_get_cells_aligns_columns():
    out = io.StringIO()
    get_cells(FakePci(CELLS), out)
    lines = out.getvalue().splitlines()
    assert len(lines) == len(CELLS) + 1
    assert lines[0].startswith("ID")
    starts = {re.match(r"\S+\s+", line).end() for line in lines}
    assert len(starts) == 1
    assert all(re.match(r"\S+ {3,}\S", line) for line in lines)


def test_get_conflicts_passes_cell_id():
    client = FakePci(CELLS)
    get_conflicts(client, io.StringIO())
    get_conflicts(client, io.StringIO(), 42, no_headers=True)
    assert client.conflict_requests == [0, 42]


def test_get_conflicts_without_headers_prints_only_cells():
    out = io.StringIO()
    get_conflicts(FakePci(CELLS), out, no_headers=True)
    assert len(out.getvalue().splitlines()) == len(CELLS)


def test_get_resolved_conflicts():
    resolutions = [CellResolution(1, 2, 3, 4), CellResolution(2, 0, 5, 5)]
    out = io.StringIO()
    get_resolved_conflicts(FakePci(resolutions=resolutions), out, no_headers=True)
    lines = out.getvalue().splitlines()
    assert len(lines) == len(resolutions)
    assert all("=>" in line for line in lines)


def test_get_cell_requests_id():
    client = FakePci(CELLS)
    out = io.StringIO()
    get_cell(client, out, 0x1F)
    assert client.cell_requests == [0x1F]
    assert out.getvalue().startswith("ID: ")


def test_client_error_propagates_without_output():
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        get_cells(FakePci(CELLS, fail=True), out)
    assert out.getvalue() == ""