"""Command line for the PCI service."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Sequence

from onos_cli.pci.commands import (
    PciClient,
    get_cell,
    get_cells,
    get_conflicts,
    get_resolved_conflicts,
    parse_cell_id,
)

DEFAULT_ADDRESS = "onos-pci:5150"


class _HelpFormatter(argparse.HelpFormatter):
    def add_usage(self, usage, actions, groups, prefix=None):
        super().add_usage(usage, actions, groups, "Usage: " if prefix is None else prefix)


def _run_conflicts(args, client: PciClient, out) -> None:
    cell_id = parse_cell_id(args.id) if args.id is not None else None
    get_conflicts(client, out, cell_id, args.no_headers)


def _run_resolved(args, client: PciClient, out) -> None:
    get_resolved_conflicts(client, out, args.no_headers)


def _run_cell(args, client: PciClient, out) -> None:
    get_cell(client, out, parse_cell_id(args.id))


def _run_cells(args, client: PciClient, out) -> None:
    get_cells(client, out, args.no_headers)


def _leaf(sub, name: str, help_text: str, handler, aliases=()):
    parser = sub.add_parser(
        name, aliases=list(aliases), help=help_text, description=help_text, formatter_class=_HelpFormatter
    )
    parser.set_defaults(handler=handler, command_parser=parser)
    return parser


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the PCI commands."""
    parser = argparse.ArgumentParser(
        prog="pci",
        usage="%(prog)s [command]",
        description="ONOS PCI subsystem commands",
        formatter_class=_HelpFormatter,
    )
    parser.add_argument("--service-address", default=DEFAULT_ADDRESS, help="the PCI service address")
    parser.set_defaults(handler=None, command_parser=parser)
    commands = parser.add_subparsers(title="Available Commands", metavar="command", dest="command")

    get = commands.add_parser(
        "get", help="Get PCI resources", description="Get PCI resources", formatter_class=_HelpFormatter
    )
    get.set_defaults(command_parser=get)
    sub = get.add_subparsers(title="Available Commands", metavar="command", dest="get_command")

    conflicts = _leaf(
        sub, "conflicts", "Get the conflicting cells for a specific cell or all cells if not specified",
        _run_conflicts, aliases=["conflict"],
    )
    conflicts.add_argument("id", nargs="?")
    conflicts.add_argument("--no-headers", action="store_true", help="disables output headers")

    resolved = _leaf(
        sub, "resolved", "Get the number of resolutions and most recent resolution for all cells", _run_resolved
    )
    resolved.add_argument("--no-headers", action="store_true", help="disables output headers")

    cell = _leaf(sub, "cell", "Get a single cell's info", _run_cell)
    cell.add_argument("id")

    cells = _leaf(sub, "cells", "Get all cells", _run_cells)
    cells.add_argument("--no-headers", action="store_true", help="disables output headers")
    return parser


def main(argv: Sequence[str] | None = None, client_factory: Callable[[str], PciClient] | None = None) -> int:
    """Run a PCI command; ``client_factory`` maps a service address to a client."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.handler is None:
        args.command_parser.print_help(sys.stdout)
        return 0
    if client_factory is None:
        print(f"Error: no client available for {args.service_address}", file=sys.stderr)
        return 1
    try:
        client = client_factory(args.service_address)
        args.handler(args, client, sys.stdout)
    except Exception as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    return 0