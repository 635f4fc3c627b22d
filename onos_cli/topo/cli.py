"""Command line for the topology service."""

from __future__ import annotations

import argparse
import sys
from functools import partial
from typing import Callable, Sequence

from onos_cli.topo.edit import delete_object, update_object, wipeout
from onos_cli.topo.get import (
    get_objects,
    get_related,
    list_all_object_types,
    parse_scope,
    parse_sort_order,
)
from onos_cli.topo.load import load_from_bytes, read_load_data
from onos_cli.topo.objects import (
    ObjectType,
    TopoClient,
    create_entity,
    create_kind,
    create_relation,
)
from onos_cli.topo.watch import watch

DEFAULT_ADDRESS = "onos-topo:5150"


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


class _MergeDict(argparse.Action):
    """Merge ``key=value`` pairs from repeated options into one mapping."""

    def __call__(self, parser, namespace, values, option_string=None):
        merged = dict(getattr(namespace, self.dest) or {})
        merged.update(values)
        setattr(namespace, self.dest, merged)


def _parser(sub, name: str, help_text: str, aliases: Sequence[str] = ()) -> argparse.ArgumentParser:
    return sub.add_parser(
        name,
        aliases=list(aliases),
        help=help_text,
        description=help_text,
        formatter_class=_HelpFormatter,
    )


def _group(sub, name: str, help_text: str):
    parser = _parser(sub, name, help_text)
    parser.set_defaults(command_parser=parser)
    return parser.add_subparsers(title="Available Commands", metavar="command", dest=f"{name}_command")


def _leaf(sub, name: str, help_text: str, handler: Callable, aliases: Sequence[str] = ()):
    parser = _parser(sub, name, help_text, aliases)
    parser.set_defaults(handler=handler, command_parser=parser)
    return parser


def _add_kv(parser, short: str, long: str, help_text: str) -> None:
    parser.add_argument(
        short, long, action=_MergeDict, type=_key_values, default=None, metavar="key=value", help=help_text
    )


def _add_query_flags(parser, kind: bool = True) -> None:
    parser.add_argument("--no-headers", action="store_true", help="disables output headers")
    parser.add_argument("-v", "--verbose", action="store_true", help="verbose output")
    if kind:
        parser.add_argument("--kind", default="", help="kind query")
    parser.add_argument("--label", default="", help="label query")


def _add_relation_flags(parser, scope_help: str) -> None:
    parser.add_argument("--related-to", default="", help="use relation filter, must also specify related-via")
    parser.add_argument("--related-via", default="", help="use relation filter, must also specify related-to")
    parser.add_argument("--tgt-kind", default="", help="optional target kind for relation filter")
    parser.add_argument("--scope", default="target_only", help=scope_help)


def _add_sort_flag(parser) -> None:
    parser.add_argument(
        "--sort-order", default="unordered", help="sort order: ascending|descending|unordered(default)"
    )


def _related(args) -> bool:
    return bool(args.related_to or args.related_via or args.tgt_kind)


def _run_get(object_type: ObjectType, args, client: TopoClient, out) -> None:
    get_objects(
        client,
        out,
        object_type,
        args.id,
        args.no_headers,
        args.verbose,
        args.label,
        getattr(args, "kind", ""),
        parse_sort_order(args.sort_order),
    )


def _run_get_entity(args, client: TopoClient, out) -> None:
    if _related(args):
        get_related(
            client, out, args.related_to, args.related_via, args.tgt_kind,
            parse_scope(args.scope), args.no_headers, args.verbose,
        )
    else:
        _run_get(ObjectType.ENTITY, args, client, out)


def _run_get_objects(args, client: TopoClient, out) -> None:
    if _related(args):
        get_related(
            client, out, args.related_to, args.related_via, args.tgt_kind,
            parse_scope(args.scope, allow_all=True), args.no_headers, args.verbose,
        )
    else:
        list_all_object_types(
            client, out, args.id, args.no_headers, args.verbose, args.label, args.kind,
            parse_sort_order(args.sort_order),
        )


def _run_create_entity(args, client: TopoClient, out) -> None:
    create_entity(client, args.id, args.kind, args.label or {}, args.aspect or {})


def _run_create_relation(args, client: TopoClient, out) -> None:
    create_relation(client, args.id, args.src_id, args.tgt_id, args.kind, args.label or {}, args.aspect or {})


def _run_create_kind(args, client: TopoClient, out) -> None:
    create_kind(client, args.id, args.name, args.label or {}, args.aspect or {})


def _run_update(object_type: ObjectType, args, client: TopoClient, out) -> None:
    update_object(
        client, args.id, object_type, args.label or {}, args.aspect or {}, getattr(args, "name", None)
    )


def _run_delete(type_name: str, args, client: TopoClient, out) -> None:
    delete_object(client, out, args.id, type_name)


def _run_wipeout(args, client: TopoClient, out) -> None:
    wipeout(client, out, args.confirmation, args.include_kinds)


def _run_watch(object_type: ObjectType, args, client: TopoClient, out) -> None:
    watch(
        client, out, object_type, args.id, args.no_headers, args.verbose,
        args.label, args.kind, args.no_replay,
    )


def _run_load(args, client: TopoClient, out) -> None:
    load_from_bytes(client, read_load_data(args.path, args.data), out)


def _add_get(commands) -> None:
    sub = _group(commands, "get", "Get topology resources")

    entity = _leaf(sub, "entity", "Get Entity", _run_get_entity, aliases=["entities"])
    entity.add_argument("id", nargs="?")
    _add_query_flags(entity)
    _add_relation_flags(entity, "target_only|source_and_target")
    _add_sort_flag(entity)

    relation = _leaf(sub, "relation", "Get Relation", partial(_run_get, ObjectType.RELATION), aliases=["relations"])
    relation.add_argument("id", nargs="?")
    _add_query_flags(relation)
    _add_sort_flag(relation)

    kind = _leaf(sub, "kind", "Get Kind", partial(_run_get, ObjectType.KIND), aliases=["kinds"])
    kind.add_argument("id", nargs="?")
    _add_query_flags(kind, kind=False)
    _add_sort_flag(kind)

    objects = _leaf(sub, "objects", "Get Objects", _run_get_objects, aliases=["objs"])
    objects.add_argument("id", nargs="?")
    _add_query_flags(objects)
    _add_relation_flags(objects, "target_only|all|source_and_target")
    _add_sort_flag(objects)


def _add_create(commands) -> None:
    sub = _group(commands, "create", "Create a topology resource")

    entity = _leaf(sub, "entity", "Create Entity", _run_create_entity)
    entity.add_argument("id")
    entity.add_argument("extra", nargs="*", help="additional arguments (ignored)")
    entity.add_argument("-k", "--kind", default="", help="Kind ID")
    _add_kv(entity, "-a", "--aspect", "aspect of this entity")
    _add_kv(entity, "-l", "--label", "classification label")

    relation = _leaf(sub, "relation", "Create Relation", _run_create_relation)
    relation.add_argument("id")
    relation.add_argument("src_id")
    relation.add_argument("tgt_id")
    relation.add_argument("extra", nargs="*", help="additional arguments (ignored)")
    relation.add_argument("-k", "--kind", default="", help="Kind ID")
    _add_kv(relation, "-a", "--aspect", "aspect of this relation")
    _add_kv(relation, "-l", "--label", "classification label")

    kind = _leaf(sub, "kind", "Create Kind", _run_create_kind)
    kind.add_argument("id")
    kind.add_argument("name")
    kind.add_argument("extra", nargs="*", help="additional arguments (ignored)")
    _add_kv(kind, "-a", "--aspect", "default aspect for entities of this kind")
    _add_kv(kind, "-l", "--label", "classification label")


def _add_set(commands) -> None:
    sub = _group(commands, "set", "Update a topology resource")
    for name, help_text, object_type in (
        ("entity", "Update Entity", ObjectType.ENTITY),
        ("relation", "Update Relation", ObjectType.RELATION),
        ("kind", "Update Kind", ObjectType.KIND),
    ):
        parser = _leaf(sub, name, help_text, partial(_run_update, object_type))
        parser.add_argument("id")
        parser.add_argument("extra", nargs="*", help="additional arguments (ignored)")
        if object_type == ObjectType.KIND:
            parser.add_argument("-n", "--name", default=None, help="Kind Name")
        _add_kv(parser, "-a", "--aspect", "aspect of this entity")
        _add_kv(parser, "-l", "--label", "classification label")
        _add_kv(parser, "-s", "--set", "set single attribute of an aspect")


def _add_delete(commands) -> None:
    sub = _group(commands, "delete", "Delete a topology resource")
    for name, help_text, type_name in (
        ("object", "Delete Relation", "relation"),
        ("entity", "Delete Entity", "entity"),
        ("kind", "Delete kind", "kind"),
    ):
        parser = _leaf(sub, name, help_text, partial(_run_delete, type_name))
        parser.add_argument("id")


def _add_wipeout(commands) -> None:
    parser = _leaf(commands, "wipeout", "Delete All Relations and Entities", _run_wipeout)
    parser.add_argument("confirmation", metavar="please")
    parser.add_argument(
        "--include-kinds", action="store_true", help="delete kinds as well as entities and relations"
    )


def _add_watch(commands) -> None:
    sub = _group(commands, "watch", "Watch for changes to a topology resource type")
    for name, help_text, object_type in (
        ("entity", "Watch Entities", ObjectType.ENTITY),
        ("relation", "Watch Relations", ObjectType.RELATION),
        ("kind", "Watch Kinds", ObjectType.KIND),
        ("all", "Watch Entities, Relations and Kinds", ObjectType.UNSPECIFIED),
    ):
        parser = _leaf(sub, name, help_text, partial(_run_watch, object_type))
        parser.add_argument("id", nargs="?")
        parser.add_argument(
            "extra", nargs="*" if object_type == ObjectType.UNSPECIFIED else "?",
            help="additional arguments (ignored)",
        )
        parser.add_argument("-r", "--no-replay", action="store_true", help="do not replay existing topo state")
        _add_query_flags(parser)


def _add_load(commands) -> None:
    parser = _leaf(commands, "load", "Load topology resources in JSON format", _run_load)
    parser.add_argument("path", nargs="?", metavar="FILE", help="JSON file path, or - for standard input")
    parser.add_argument("-d", "--data", default="{}", help="JSON data")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the topology commands."""
    parser = argparse.ArgumentParser(
        prog="topo",
        usage="%(prog)s [command]",
        description="ONOS topology resource commands",
        formatter_class=_HelpFormatter,
    )
    parser.add_argument("--service-address", default=DEFAULT_ADDRESS, help="the topology service address")
    parser.set_defaults(handler=None, command_parser=parser)
    commands = parser.add_subparsers(title="Available Commands", metavar="command", dest="command")
    _add_get(commands)
    _add_create(commands)
    _add_set(commands)
    _add_delete(commands)
    _add_wipeout(commands)
    _add_watch(commands)
    _add_load(commands)
    return parser


def main(argv: Sequence[str] | None = None, client_factory: Callable[[str], TopoClient] | None = None) -> int:
    """Run a topology command; ``client_factory`` maps a service address to a client."""
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