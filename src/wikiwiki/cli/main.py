from __future__ import annotations

import argparse
import asyncio
import json
import sys

from wikiwiki.settings import settings


def _configure_logging() -> None:
    import logging

    level = (settings.log_level or "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _print(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


def cmd_version() -> int:
    from wikiwiki import __version__

    print(__version__)
    return 0


def _language(args: argparse.Namespace):
    from wikiwiki.language import LanguageContext, default_context

    return LanguageContext(args.lang) if args.lang else default_context


async def _resolve(args: argparse.Namespace):
    from wikiwiki.resolution import EntityResolver

    async with EntityResolver(_language(args)) as resolver:
        if args.id:
            return await resolver.resolve_from_candidate(args.query, args.id)
        return await resolver.resolve(args.query)


def cmd_resolve(args: argparse.Namespace) -> int:
    _configure_logging()
    from wikiwiki.errors import NotFoundError

    try:
        result = asyncio.run(_resolve(args))
    except NotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    _print(result.model_dump(by_alias=True))
    return 0


async def _graph(args: argparse.Namespace):
    from wikiwiki.graph import GraphBuilder, resolver_expander
    from wikiwiki.models import Disambiguation
    from wikiwiki.resolution import EntityResolver

    language = _language(args)
    async with EntityResolver(language) as resolver:
        if args.id:
            entity = await resolver.resolve_from_candidate(args.query, args.id)
        else:
            entity = await resolver.resolve(args.query)
        if isinstance(entity, Disambiguation):
            return entity, None
        expander = resolver_expander(resolver) if args.depth > 1 else None
        builder = GraphBuilder(resolver.wikidata, language, expander=expander)
        graph = await builder.build_graph(entity, depth=args.depth, max_nodes_per_level=args.max_nodes)
        return entity, graph


def cmd_graph(args: argparse.Namespace) -> int:
    _configure_logging()
    from wikiwiki.errors import NotFoundError

    try:
        entity, graph = asyncio.run(_graph(args))
    except NotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    if graph is None:
        # ambiguous query: show the candidates so the caller can pass --id
        _print(entity.model_dump(by_alias=True))
        return 2
    _print({"entity": {"id": entity.id, "name": entity.name, "type": entity.type}, "graph": graph.to_dict()})
    return 0


def cmd_serve(_args: argparse.Namespace) -> int:
    _configure_logging()
    from wikiwiki.server.server import main

    main()
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="wikiwiki")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version").set_defaults(func=lambda _a: cmd_version())

    res = sub.add_parser("resolve", help="Resolve a search term into an entity")
    res.add_argument("query")
    res.add_argument("--id", default=None, help="Wikidata id; skips search and disambiguation")
    res.add_argument("--lang", default=None, help="Wikipedia language code (default: locale)")
    res.set_defaults(func=cmd_resolve)

    gr = sub.add_parser("graph", help="Build the relation graph around an entity")
    gr.add_argument("query")
    gr.add_argument("--id", default=None, help="Wikidata id; skips search and disambiguation")
    gr.add_argument("--lang", default=None)
    gr.add_argument("--depth", type=int, default=1)
    gr.add_argument("--max-nodes", type=int, default=20, help="Max new nodes per level")
    gr.set_defaults(func=cmd_graph)

    sub.add_parser("serve", help="Run the HTTP API").set_defaults(func=cmd_serve)

    return p


def app() -> None:
    parser = build_parser()
    args = parser.parse_args()
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    app()
