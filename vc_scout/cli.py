#!/usr/bin/env python3
"""
VC Scout - CLI entry point
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from .config import Settings
from .directory import (
    STAGES,
    SORT_KEYS,
    SearchFilters,
    export_filename,
    export_list_csv,
    export_list_json,
    load_companies,
    paginate,
    resolve_companies,
    search_companies,
)
from .errors import EnrichmentError
from .logging_setup import configure_logging
from .markdown import to_markdown
from .service import enrich_domain
from .store import SqliteStore
from .workspace import Workspace

# Exit codes: 1 = fatal enrichment failure, 2 = bad input / site unreadable.
EXIT_FATAL = 1
EXIT_CLIENT_ERROR = 2


def exit_code_for(err: EnrichmentError) -> int:
    return EXIT_CLIENT_ERROR if 400 <= err.status_code < 500 else EXIT_FATAL


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vc-scout", description="Company website enrichment for deal flow"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    store_opts = argparse.ArgumentParser(add_help=False)
    store_opts.add_argument(
        "--store", default=None, help="Path to the sqlite store (default: VC_SCOUT_STORE)"
    )

    p_enrich = sub.add_parser("enrich", parents=[store_opts], help="Enrich a company domain")
    p_enrich.add_argument("domain", help="Company domain or URL, e.g. acme.io")
    p_enrich.add_argument(
        "--format",
        choices=["pretty", "json", "markdown"],
        default="pretty",
        help="Output format (default: pretty)",
    )
    p_enrich.add_argument(
        "--company-id", default=None, help="Store the result in the enrichment cache under this id"
    )

    p_search = sub.add_parser("search", help="Search a company directory export")
    p_search.add_argument("--companies", "-c", required=True, help="JSON file with company records")
    p_search.add_argument("--query", "-q", default="", help="Free-text query")
    p_search.add_argument("--stage", action="append", default=[], choices=STAGES)
    p_search.add_argument("--sector", action="append", default=[])
    p_search.add_argument("--min-score", type=int, default=0, help="Minimum thesis score")
    p_search.add_argument("--sort", choices=list(SORT_KEYS), default="thesisScore")
    p_search.add_argument("--asc", action="store_true", help="Sort ascending (default: descending)")
    p_search.add_argument("--page", type=int, default=1)
    p_search.add_argument("--json", "-j", action="store_true", help="Output as JSON")

    p_lists = sub.add_parser("lists", help="Manage company lists")
    lists_sub = p_lists.add_subparsers(dest="action", required=True)
    lists_sub.add_parser("show", parents=[store_opts], help="Show all lists")
    p_create = lists_sub.add_parser("create", parents=[store_opts], help="Create a list")
    p_create.add_argument("name")
    p_create.add_argument("companies", nargs="*", help="Company ids to add")
    for action in ("add", "remove"):
        p = lists_sub.add_parser(
            action, parents=[store_opts], help=f"{action.capitalize()} a company"
        )
        p.add_argument("list", help="List id or name")
        p.add_argument("company_id")
    p_delete = lists_sub.add_parser("delete", parents=[store_opts], help="Delete a list")
    p_delete.add_argument("list", help="List id or name")
    p_export = lists_sub.add_parser(
        "export", parents=[store_opts], help="Export a list as CSV or JSON"
    )
    p_export.add_argument("list", help="List id or name")
    p_export.add_argument("--companies", "-c", required=True, help="JSON file with company records")
    p_export.add_argument("--format", choices=["csv", "json"], default="csv")
    p_export.add_argument(
        "--output", "-o", default=None, help="Output file (default: <list-name>.<format>; '-' for stdout)"
    )

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(EXIT_CLIENT_ERROR) from e
    configure_logging(settings.log_level)

    if args.command == "enrich":
        exit_code = cmd_enrich(args, settings)
    elif args.command == "search":
        exit_code = cmd_search(args)
    elif args.command == "lists":
        exit_code = cmd_lists(args, settings)
    else:
        import uvicorn

        from .api import app

        uvicorn.run(app, host=args.host, port=args.port)
        exit_code = 0

    raise SystemExit(exit_code)


def _workspace(args: argparse.Namespace, settings: Settings) -> Workspace:
    return Workspace(SqliteStore(args.store or settings.store_path))


def cmd_enrich(args: argparse.Namespace, settings: Settings) -> int:
    try:
        result = enrich_domain(args.domain, settings=settings)
    except EnrichmentError as e:
        if args.format == "json":
            print(json.dumps(e.to_dict(), indent=2))
        else:
            print(f"Error: {e.message}", file=sys.stderr)
        return exit_code_for(e)

    if args.company_id:
        _workspace(args, settings).cache_enrichment(args.company_id, result)

    payload = result.to_dict()
    if args.format == "json":
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    elif args.format == "markdown":
        print(to_markdown(payload, domain=args.domain), end="")
    else:
        print_enrichment(payload, args.domain)
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    companies = load_companies(args.companies)
    filters = SearchFilters(stage=args.stage, sector=args.sector, min_thesis_score=args.min_score)
    matches = search_companies(
        companies, args.query, filters, sort_key=args.sort, descending=not args.asc
    )
    page = paginate(matches, args.page)

    if args.json:
        print(
            json.dumps(
                {
                    "page": page.page,
                    "totalPages": page.total_pages,
                    "total": page.total,
                    "results": [c.to_dict() for c in page.items],
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return 0

    print(f"{page.total} companies (page {page.page}/{page.total_pages})")
    print(f"{'-' * 60}")
    for c in page.items:
        print(f"  [{c.thesis_score:>3}] {c.name:<24} {c.stage:<10} {c.sector}")
    return 0


def cmd_lists(args: argparse.Namespace, settings: Settings) -> int:
    ws = _workspace(args, settings)

    if args.action == "show":
        for lst in ws.get_lists():
            print(f"{lst.id}  {lst.name} ({len(lst.companies)})")
            for cid in lst.companies:
                print(f"    - {cid}")
        return 0

    if args.action == "create":
        try:
            lst = ws.create_list(args.name, args.companies)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_CLIENT_ERROR
        print(lst.id)
        return 0

    lst = ws.find_list(args.list)
    if lst is None:
        print(f"Error: unknown list {args.list!r}", file=sys.stderr)
        return EXIT_CLIENT_ERROR

    if args.action == "add":
        ws.add_company(lst.id, args.company_id)
    elif args.action == "remove":
        ws.remove_company(lst.id, args.company_id)
    elif args.action == "delete":
        ws.delete_list(lst.id)
    else:
        companies = resolve_companies(lst.companies, load_companies(args.companies))
        content = export_list_json(companies) if args.format == "json" else export_list_csv(companies)
        output = args.output or export_filename(lst.name, args.format)
        if output == "-":
            print(content)
        else:
            with open(output, "w", encoding="utf-8") as f:
                f.write(content)
            print(output)
    return 0


def print_enrichment(result: dict[str, Any], domain: str) -> None:
    """Print human-readable output."""
    print(f"\n{domain}")
    print(f"{'=' * 50}")
    print(result.get("summary") or "(no summary)")

    print("\nWhat they do:")
    for item in result.get("whatTheyDo") or []:
        print(f"  • {item}")

    keywords = result.get("keywords") or []
    if keywords:
        print(f"\nKeywords: {', '.join(keywords)}")

    print("\nSignals:")
    for item in result.get("signals") or []:
        print(f"  • {item}")

    print("\nSources:")
    for src in result.get("sources") or []:
        print(f"  {src.get('url')}  ({src.get('fetchedAt')})")

    print(f"\nCached at: {result.get('cachedAt')}")


if __name__ == "__main__":
    main()
