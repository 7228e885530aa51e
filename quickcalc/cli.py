#!/usr/bin/env python3
"""
quickcalc CLI — type what you'd type into the search box.

Every command has a short name and a couple of aliases:

    COMMAND     ALIASES             WHAT IT DOES
    -------     -------             ----------------------------------
    calc        eval, solve         Evaluate one query
    repl        shell               Interactive prompt (rates stay cached)
    status      ping, health        Check the live price feeds
    units       list-units          List unit categories and aliases
    money       currencies, assets  List fiat currencies and crypto assets
    lookup      resolve, whatis     Show what a phrase resolves to

Examples:
    quickcalc calc 5 km to miles
    quickcalc calc "(2+2)*2"
    quickcalc calc '$50 to EUR'
    quickcalc calc 0.5 btc in eth --json
"""

import argparse
import asyncio
import json
import logging
import sys

from quickcalc import __version__

logger = logging.getLogger(__name__)


def _setup_logging(args):
    from quickcalc.config import get_config

    level = "DEBUG" if getattr(args, "verbose", False) else get_config()["logging"].get("level", "WARNING")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def _print_result(result, as_json: bool = False):
    if as_json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
        return
    print(f"  {result.input}" + (f"  ({result.input_label})" if result.input_label else ""))
    print(f"  = {result.result}" + (f"  ({result.result_label})" if result.result_label else ""))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_calc(args):
    """Evaluate a single query."""
    from quickcalc.service import ConversionService, calculate

    query = " ".join(args.query)
    if args.offline:
        result = calculate(query)
    else:
        service = ConversionService.from_config()
        result = asyncio.run(service.calculate_async(query))

    if result is None:
        if args.json:
            print("null")
        else:
            print(f"  ✗  No result for '{query}'")
        return 1

    _print_result(result, args.json)
    return 0


def cmd_repl(args):
    """Interactive prompt sharing one service across queries."""
    from quickcalc.service import ConversionService

    service = ConversionService.from_config()
    print(f"  quickcalc {__version__}. Type 'exit' or Ctrl-C to leave.\n")

    async def answer(q: str):
        if args.offline:
            return service.calculate(q)
        return await service.calculate_async(q)

    loop = asyncio.new_event_loop()
    try:
        while True:
            try:
                query = input("  calc> ").strip()
            except EOFError:
                break
            if not query:
                continue
            if query.lower() in ("exit", "quit", "q"):
                break
            if query.lower() == "stats":
                print(json.dumps(service.get_stats(), indent=2))
                continue
            if query.lower() == "refresh":
                service.clear_caches()
                print("  ✓  Rate caches cleared\n")
                continue

            result = loop.run_until_complete(answer(query))
            if result is None:
                print("  ✗  No result\n")
            else:
                _print_result(result)
                print()
    except KeyboardInterrupt:
        print()
    finally:
        loop.close()
    return 0


def cmd_status(args):
    """Check that both price feeds answer, and show cache counters."""
    from quickcalc.service import ConversionService

    service = ConversionService.from_config()
    results = asyncio.run(service.health())

    all_ok = True
    for name, info in results.items():
        if info.get("healthy"):
            print(f"  ✓  {name:<12} {info.get('url', '')}")
        else:
            all_ok = False
            detail = info.get("error") or info.get("url", "")
            print(f"  ✗  {name:<12} {detail}")

    if args.stats:
        print(json.dumps(service.get_stats(), indent=2))
    return 0 if all_ok else 1


def cmd_units(args):
    """List unit categories, or one category in detail."""
    from quickcalc.units import TEMPERATURE_ALIASES, UNIT_CATEGORIES

    wanted = args.category.lower() if args.category else None
    found = False
    for cat in UNIT_CATEGORIES:
        if wanted and cat.name.lower() != wanted:
            continue
        found = True
        print(f"  {cat.name}")
        for i, unit in enumerate(cat.units):
            prefix = "└─" if i == len(cat.units) - 1 else "├─"
            print(f"  {prefix} {unit.symbol:<6} {unit.label:<24} {', '.join(unit.aliases)}")
        print()

    if not wanted or wanted == "temperature":
        found = True
        print("  Temperature")
        by_key: dict = {}
        for alias, key in TEMPERATURE_ALIASES:
            by_key.setdefault(key, []).append(alias)
        items = list(by_key.items())
        for i, (key, aliases) in enumerate(items):
            prefix = "└─" if i == len(items) - 1 else "├─"
            print(f"  {prefix} {key.symbol:<6} {key.label:<24} {', '.join(aliases)}")

    if not found:
        print(f"  ✗  Unknown category '{args.category}'")
        return 1
    return 0


def cmd_money(args):
    """List monetary assets."""
    from quickcalc.monetary import CRYPTO_CURRENCIES, FIAT_CURRENCIES

    sections = []
    if not args.crypto:
        sections.append(("Fiat", FIAT_CURRENCIES))
    if not args.fiat:
        sections.append(("Crypto", CRYPTO_CURRENCIES))

    for title, assets in sections:
        print(f"  {title}")
        for i, asset in enumerate(assets):
            prefix = "└─" if i == len(assets) - 1 else "├─"
            extra = " (stablecoin)" if asset.stablecoin else ""
            print(f"  {prefix} {asset.code:<6} {asset.symbol:<5} {asset.label}{extra}")
        print()
    return 0


def cmd_lookup(args):
    """Show every interpretation of a phrase."""
    from quickcalc.aliases import ALIAS_INDEX, MonetaryEntry, TemperatureEntry, UnitEntry

    phrase = " ".join(args.phrase)
    entries = ALIAS_INDEX.resolve(phrase)
    if not entries:
        print(f"  ✗  '{phrase}' is not a known unit or currency")
        return 1

    for entry in entries:
        if isinstance(entry, TemperatureEntry):
            print(f"  ✓  Temperature: {entry.key.label} ({entry.key.symbol})")
        elif isinstance(entry, UnitEntry):
            print(f"  ✓  {entry.category.name}: {entry.unit.label} ({entry.unit.symbol})")
        elif isinstance(entry, MonetaryEntry):
            print(f"  ✓  {entry.asset.kind.value.title()}: {entry.asset.display_label} ({entry.asset.code})")
    return 0


# ---------------------------------------------------------------------------
# Parser with aliases
# ---------------------------------------------------------------------------

def _add_command(subparsers, names, help_text, func, setup_fn=None):
    """Register a command under its name plus aliases."""
    p = subparsers.add_parser(names[0], help=help_text, aliases=names[1:])
    p.set_defaults(func=func)
    if setup_fn:
        setup_fn(p)
    return p


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quickcalc",
        description="quickcalc — units, arithmetic and currencies from one query.",
        epilog="Run 'quickcalc <command> --help' for command-specific options.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V", action="version",
        version=f"quickcalc {__version__}",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    def setup_calc(p):
        p.add_argument("query", nargs="+", help="Query, e.g. 5 km to miles")
        p.add_argument("--offline", action="store_true", help="Skip live currency / crypto rates")
        p.add_argument("--json", action="store_true", help="Print the result as JSON")

    _add_command(sub, ["calc", "eval", "solve"], "Evaluate one query", cmd_calc, setup_calc)

    def setup_repl(p):
        p.add_argument("--offline", action="store_true", help="Skip live currency / crypto rates")

    _add_command(sub, ["repl", "shell"], "Interactive prompt", cmd_repl, setup_repl)

    def setup_status(p):
        p.add_argument("--stats", action="store_true", help="Also print rate cache counters")

    _add_command(sub, ["status", "ping", "health"], "Check the live price feeds", cmd_status, setup_status)

    def setup_units(p):
        p.add_argument("--category", "-c", default=None, help="Only this category (e.g. Length)")

    _add_command(sub, ["units", "list-units"], "List unit categories and aliases", cmd_units, setup_units)

    def setup_money(p):
        group = p.add_mutually_exclusive_group()
        group.add_argument("--fiat", action="store_true", help="Fiat currencies only")
        group.add_argument("--crypto", action="store_true", help="Crypto assets only")

    _add_command(sub, ["money", "currencies", "assets"], "List currencies and crypto assets", cmd_money, setup_money)

    def setup_lookup(p):
        p.add_argument("phrase", nargs="+", help="Unit or currency phrase")

    _add_command(sub, ["lookup", "resolve", "whatis"], "Show what a phrase resolves to", cmd_lookup, setup_lookup)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    _setup_logging(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
