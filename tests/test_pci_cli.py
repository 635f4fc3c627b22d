import pytest

from onos_cli.pci.cli import build_parser, main
from onos_cli.pci.commands import CellResolution, PciCell


class FakePci:
    def __init__(self):
        self.cells = [PciCell(id=1, node_id="n1"), PciCell(id=2, node_id="n2")]
        self.resolutions = [CellResolution(id=1, resolved_conflicts=1, original_pci=3, resolved_pci=4)]
        self.conflict_requests = []
        self.cell_requests = []

    def get_conflicts(self, cell_id):
        self.conflict_requests.append(cell_id)
        return self.cells

    def get_resolved_conflicts(self):
        return self.resolutions

    def get_cell(self, cell_id):
        self.cell_requests.append(cell_id)
        return self.cells[0]

    def get_cells(self):
        return self.cells


@pytest.fixture
def fake():
    return FakePci()


def run(fake, *argv):
    return main(list(argv), client_factory=lambda address: fake)


def test_help_lists_get(monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")
    text = build_parser().format_help()
    assert "Usage:" in text
    assert "Get PCI resources" in text


def test_get_cells(fake, capsys):
    assert run(fake, "get", "cells") == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == len(fake.cells) + 1
    assert lines[0].startswith("ID")


def test_get_cells_no_headers(fake, capsys):
    assert run(fake, "get", "cells", "--no-headers") == 0
    assert len(capsys.readouterr().out.splitlines()) == len(fake.cells)


def test_get_conflicts_ids(fake):
    assert run(fake, "get", "conflicts") == 0
    assert run(fake, "get", "conflict", "1f") == 0
    assert fake.conflict_requests == [0, 0x1F]


def test_get_resolved(fake, capsys):
    assert run(fake, "get", "resolved", "--no-headers") == 0
    assert "3=>4" in capsys.readouterr().out


def test_get_cell(fake, capsys):
    assert run(fake, "get", "cell", "ab") == 0
    assert fake.cell_requests == [0xAB]
    assert "Node ID: n1" in capsys.readouterr().out


def test_get_cell_bad_id(fake, capsys):
    assert run(fake, "get", "cell", "zz") == 1
    assert "zz" in capsys.readouterr().err
    assert fake.cell_requests == []


def test_get_cell_requires_id(fake):
    with pytest.raises(SystemExit) as excinfo:
        run(fake, "get", "cell")
    assert excinfo.value.code == 2


def test_default_address(fake):
    addresses = []
    main(["get", "cells"], client_factory=lambda address: addresses.append(address) or fake)
    assert addresses == ["onos-pci:5150"]


def test_no_client_factory(capsys):
    assert main(["get", "cells"]) == 1
    assert "onos-pci:5150" in capsys.readouterr().err