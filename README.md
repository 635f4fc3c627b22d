# onos_cli

Command-line front ends and printing helpers for three ONOS services:

- **topo**: the topology store of entities, relations and kinds
- **pci**: the PCI conflict-resolution service
- **uenib**: the UE information base

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What the package does not do

The package holds no network transport to the services. Each command talks
to its service only through a client object that you supply: an
implementation of `onos_cli.topo.objects.TopoClient`,
`onos_cli.pci.commands.PciClient` or `onos_cli.uenib.ues.UEClient`. The
installed commands (`onos-topo`, `onos-pci`, `onos-uenib`) have no such
client. They parse their arguments and print help, but any command that
needs the service prints `Error: no client available for <address>` to
standard error and exits with status 1.

## Driving the commands from Python

Each command line is a function `main(argv=None, client_factory=None)` in
`onos_cli.topo.cli`, `onos_cli.pci.cli` and `onos_cli.uenib.cli`. The
`client_factory` is called with the value of `--service-address` and returns
the client. Output goes to standard output. Errors are printed to standard
error as `Error: ...`, and `main` then returns 1. It returns 0 on success.

```python
from onos_cli.topo.cli import main

status = main(["get", "entities", "--label", "env=test"],
              client_factory=lambda address: MyTopoClient(address))
```

The default service addresses are `onos-topo:5150`, `onos-pci:5150` and
`onos-uenib:5150`.

A topology client provides `create(obj)`, `get(object_id)`,
`list(filters, sort_order)`, `update(obj)`, `delete(object_id)` and
`watch(filters, no_replay)`. The last one yields `Event` objects.

A PCI client provides `get_conflicts(cell_id)`, `get_resolved_conflicts()`,
`get_cell(cell_id)` and `get_cells()`.

A UE client provides `create_ue(ue)`, `update_ue(ue)`,
`delete_ue(ue_id, aspect_types)`, `get_ue(ue_id, aspect_types)`,
`list_ues(aspect_types)` and `watch_ues(aspect_types, no_replay)`.

## `onos-topo`

- `get entity [id]` (alias `entities`)
  - Lists entities or shows one.
  - Options: `--kind`, `--label`, `--sort-order ascending|descending|unordered`, `--no-headers`, `-v/--verbose`.
  - `--related-to`, `--related-via`, `--tgt-kind` and `--scope target_only|source_and_target` list the objects reached from an entity through relations of a given kind. `--related-to` and `--related-via` must both be given.
- `get relation [id]` (alias `relations`): lists relations or shows one.
- `get kind [id]` (alias `kinds`): lists kinds or shows one.
- `get objects [id]` (alias `objs`)
  - Lists entities, relations and kinds together, each row led by its object type.
  - Takes the same relation options as `get entity`. Its `--scope` also accepts `all`.
- `create entity <id> [-k kind] [-a type=value] [-l key=value]`
- `create relation <id> <src-id> <tgt-id> [-k kind] [-a ...] [-l ...]`
- `create kind <id> <name> [-a ...] [-l ...]`
- `set entity|relation|kind <id> [-a type=value] [-l key=value]`
  - Changes labels and aspects. An empty value or `--delete` removes one.
  - `set kind` also takes `-n/--name` to rename the kind.
  - `-s/--set` is accepted but has no effect.
- `delete entity <id>`, `delete object <id>` (a relation) and `delete kind <id>`.
- `watch entity|relation|kind [id]` and `watch all`
  - Print change events until the stream ends. A replayed object is shown as `REPLAY`.
  - Options: `-r/--no-replay`, `--no-headers`, `-v/--verbose`, `--kind`, `--label`.
- `load [FILE|-]`
  - Creates the objects of a JSON document. The document is read from a file, from standard input (`-`), or from `-d/--data`, which defaults to `{}`.
- `wipeout please [--include-kinds]`
  - Deletes every relation, then every entity and, with `--include-kinds`, every kind.

### Queries

A label query combines terms with ` && `. Each term takes one of these forms:

- `key=value`
- `key!=value`
- `key in (a, b)`
- `key !in (a, b)`

Terms in any other form are ignored.

A kind query takes one of these forms:

- `= a`
- `!= a`
- `in (a, b)`
- `!in (a, b)`
- a plain comma-separated list such as `a, b`, which means `in (a, b)`

The compiling functions are in `onos_cli.topo.filters` (`compile_filters`,
`compile_label_filters`, `compile_kind_filter`).

### JSON documents

A document maps object IDs to objects:

```json
{
  "somekind": {"type": "kind", "name": "SomeKind"},
  "foo": {"type": "entity", "kind": "somekind", "labels": {"env": "test"},
          "onos.topo.Location": {"lat": 3.14, "lng": 6.28}},
  "rel": {"type": "relation", "kind": "somekind", "source": "foo", "target": "bar"}
}
```

A key that contains a `.` becomes an aspect of that type, and its value is
stored as JSON. `onos_cli.topo.load.parse_object` turns one entry into a
`TopoObject`. `load_from_bytes` creates all the entries through a client.

## `onos-pci`

- `get conflicts [cell-id]` (alias `conflict`): the conflicting cells for one cell, or for all cells.
- `get resolved`: the resolution count and the most recent resolution for each cell.
- `get cell <cell-id>`: the details of one cell, including its neighbours and PCI pool.
- `get cells`: all cells.

Cell IDs are given and shown in hexadecimal. The table commands take
`--no-headers`.

## `onos-uenib`

- `create ue <ue-id> -a type=value`: creates a UE with the given aspects. `-a` is required.
- `update ue <ue-id> -a type=value`: updates a UE with the given aspects. `-a` is required.
- `delete ue <ue-id> [-a type,...]`: deletes aspects of a UE.
- `get ue <ue-id>` and `get ues`
  - Show UEs with their aspect types.
  - With `-v/--verbose`, show each aspect's value instead.
  - Options: `-a`, `--no-headers`.
- `watch ue <ue-id>` and `watch ues`
  - Print UE change events until the stream ends.
  - Options: `-r/--no-replay`, `--no-headers`, `-a`.