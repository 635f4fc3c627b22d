"""Command line for the UE-NIB service."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Sequence

from onos_cli.uenib.ues import (
    UEClient,
    create_ue,
    delete_ue,
    get_ue,
    list_ues,
    update_ue,
    watch_ues,
)

DEFAULT_ADDRESS = "onos-uenib:5150"


class _HelpFormatter(argparse.HelpFormatter):
    def add_usage(self, usage, actions, groups, prefix=None):
        super().add_usage(usage, actions, groups, "Usage: " if prefix is None else prefix)


def _key_values(text: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for item in text.split(","):
        key, sep, value = item.partition("=")
        if not sep:
            raise argparse.ArgumentTypeError(f"{text} must be formatted as key=value")
        pairs[key] = value
    return pairs


def _string_list(text: str) -> list[str]:
    return [item for item in text.split(",") if item]


class _MergeDict(argparse.Action):
    """Merge ``key=value`` pairs from repeated options into one mapping."""

    def __call__(self, parser, namespace, values, option_string=None):
        merged = dict(getattr(namespace, self.dest) or {})
        merged.update(values)
        setattr(namespace, self.dest, merged)


class _ExtendList(argparse.Action):
    """Collect comma-separated values from repeated options into one list."""

    def __call__(self, parser, namespace, values, option_string=None):
        collected = list(getattr(namespace, self.dest) or [])
        collected.extend(values)
        setattr(namespace, self.dest, collected)


def _parser(sub, name: str, help_text: str) -> argparse.ArgumentParser:
    return sub.add_parser(name, help=help_text, description=help_text, formatter_class=_HelpFormatter)


def _group(sub, name: str, help_text: str):
    parser = _parser(sub, name, help_text)
    parser.set_defaults(command_parser=parser)
    return parser.add_subparsers(title="Available Commands", metavar="command", dest=f"{name}_command")


def _leaf(sub, name: str, help_text: str, handler: Callable) -> argparse.ArgumentParser:
    parser = _parser(sub, name, help_text)
    parser.set_defaults(handler=handler, command_parser=parser)
    return parser


def _add_aspect_map(parser, help_text: str) -> None:
    parser.add_argument(
        "-a", "--aspect", action=_MergeDict, type=_key_values, required=True,
        metavar="type=value", help=help_text,
    )


def _add_aspect_list(parser, help_text: str) -> None:
    parser.add_argument(
        "-a", "--aspect", action=_ExtendList, type=_string_list, default=None,
        metavar="type", help=help_text,
    )


def _run_get_ue(args, client: UEClient, out) -> None:
    get_ue(client, out, args.id, args.aspect or [], args.no_headers, args.verbose)


def _run_get_ues(args, client: UEClient, out) -> None:
    list_ues(client, out, args.aspect or [], args.no_headers, args.verbose)


def _run_create_ue(args, client: UEClient, out) -> None:
    create_ue(client, out, args.id, args.aspect or {})


def _run_update_ue(args, client: UEClient, out) -> None:
    update_ue(client, out, args.id, args.aspect or {})


def _run_delete_ue(args, client: UEClient, out) -> None:
    delete_ue(client, out, args.id, args.aspect or [])


def _run_watch(args, client: UEClient, out) -> None:
    watch_ues(client, out, getattr(args, "id", None), args.aspect or [], args.no_headers, args.no_replay)


def _add_get(commands) -> None:
    sub = _group(commands, "get", "Get UE information")
    ue = _leaf(sub, "ue", "Get UE information", _run_get_ue)
    ue.add_argument("id", metavar="ue-id")
    ues = _leaf(sub, "ues", "Get list of UE information", _run_get_ues)
    for parser in (ue, ues):
        _add_aspect_list(parser, "UE aspects to get")
        parser.add_argument("--no-headers", action="store_true", help="disables output headers")
        parser.add_argument(
            "-v", "--verbose", action="store_true", help="whether to print the change with verbose output"
        )


def _add_create(commands) -> None:
    sub = _group(commands, "create", "Create UE information")
    ue = _leaf(sub, "ue", "Create UE information", _run_create_ue)
    ue.add_argument("id", metavar="ue-id")
    ue.add_argument("extra", nargs="*", help="additional arguments (ignored)")
    _add_aspect_map(ue, "UE aspect to create")


def _add_update(commands) -> None:
    sub = _group(commands, "update", "Update UE information")
    ue = _leaf(sub, "ue", "Update UE information", _run_update_ue)
    ue.add_argument("id", metavar="ue-id")
    ue.add_argument("extra", nargs="*", help="additional arguments (ignored)")
    _add_aspect_map(ue, "UE aspect to update")


def _add_delete(commands) -> None:
    sub = _group(commands, "delete", "Delete UE information")
    ue = _leaf(sub, "ue", "Delete UE information", _run_delete_ue)
    ue.add_argument("id", metavar="ue-id")
    _add_aspect_list(ue, "UE aspects to delete")


def _add_watch(commands) -> None:
    sub = _group(commands, "watch", "Watch for changes to UE information")
    ue = _leaf(sub, "ue", "Watch for changes to a specific UE information", _run_watch)
    ue.add_argument("id", metavar="ue-id")
    ues = _leaf(sub, "ues", "Watch for changes to any UE information", _run_watch)
    for parser in (ue, ues):
        parser.add_argument("-r", "--no-replay", action="store_true", help="do not replay existing UE state")
        parser.add_argument("--no-headers", action="store_true", help="disables output headers")
        _add_aspect_list(parser, "UE aspects to watch")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the UE-NIB commands."""
    parser = argparse.ArgumentParser(
        prog="uenib",
        usage="%(prog)s [command]",
        description="ONOS UE-NIB subsystem commands",
        formatter_class=_HelpFormatter,
    )
    parser.add_argument("--service-address", default=DEFAULT_ADDRESS, help="the UE-NIB service address")
    parser.set_defaults(handler=None, command_parser=parser)
    commands = parser.add_subparsers(title="Available Commands", metavar="command", dest="command")
    _add_get(commands)
    _add_create(commands)
    _add_update(commands)
    _add_delete(commands)
    _add_watch(commands)
    return parser


def main(argv: Sequence[str] | None = None, client_factory: Callable[[str], UEClient] | None = None) -> int:
    """Run a UE-NIB command; ``client_factory`` maps a service address to a client."""
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