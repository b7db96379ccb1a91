"""
Command line front end for Fact Fusion.

Talks to the store through the client core and prints plain-text snapshots.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from factfusion.categories import ALL_CATEGORIES, CATEGORIES, color_of
from factfusion.collection import FactCollection
from factfusion.config import get_settings
from factfusion.gateway import RemoteFactGateway, RemoteFailure
from factfusion.models import CollectionSnapshot, Fact, VoteColumn
from factfusion.validation import ValidationFailure
from factfusion.voting import is_disputed


logger = logging.getLogger(__name__)


EMPTY_MESSAGE = "No facts for this category yet! Why not create one?"


def render_fact(fact: Fact) -> str:
    """One line per fact: marker, text, source, category tag and counters."""
    marker = "[DISPUTED] " if is_disputed(fact) else ""
    try:
        tag = f"{fact.category} {color_of(fact.category)}"
    except LookupError:
        tag = fact.category
    return (
        f"#{fact.id} {marker}{fact.text} ({fact.source}) [{tag}] "
        f"interesting={fact.votes_interesting} "
        f"mindblowing={fact.votes_mindblowing} "
        f"false={fact.votes_false}"
    )


def render_snapshot(snapshot: CollectionSnapshot) -> str:
    if snapshot.is_loading:
        return "Loading facts..."
    if not snapshot.facts:
        return EMPTY_MESSAGE
    lines = [render_fact(f) for f in snapshot.facts]
    lines.append(
        f"There are {len(snapshot.facts)} facts in the database. "
        "Add your own to make it count!"
    )
    return "\n".join(lines)


def _print_failure(message: str, failure: RemoteFailure):
    print(f"{message} [{failure.kind.value}]", file=sys.stderr)


async def _list(gateway, args) -> int:
    collection = FactCollection(gateway, notify=_print_failure)
    if not await collection.set_filter(args.category):
        return 1
    print(render_snapshot(collection.snapshot))
    return 0


async def _submit(gateway, args) -> int:
    collection = FactCollection(gateway, notify=_print_failure)
    try:
        fact = await collection.submit_fact(args.text, args.source, args.category)
    except ValidationFailure as e:
        for problem in e.problems:
            print(f"Invalid fact: {problem}", file=sys.stderr)
        return 1
    except RemoteFailure:
        return 1
    print(render_fact(fact))
    return 0


async def _vote(gateway, args) -> int:
    collection = FactCollection(gateway, notify=_print_failure)
    fact = await collection.vote(args.fact_id, VoteColumn(args.column))
    if fact is None:
        return 1
    print(render_fact(fact))
    return 0


def build_parser() -> argparse.ArgumentParser:
    category_names = [info.name.value for info in CATEGORIES]

    parser = argparse.ArgumentParser(description="Fact Fusion client")
    parser.add_argument(
        "--store-url",
        default=None,
        help="Store API root (default from settings)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List facts, most interesting first")
    list_parser.add_argument(
        "--category",
        default=ALL_CATEGORIES,
        choices=[ALL_CATEGORIES] + category_names,
        help="Only show one category"
    )
    list_parser.set_defaults(handler=_list)

    submit_parser = subparsers.add_parser("submit", help="Share a new fact")
    submit_parser.add_argument("text")
    submit_parser.add_argument("source", help="http(s) URL backing the fact")
    submit_parser.add_argument("category", help=", ".join(category_names))
    submit_parser.set_defaults(handler=_submit)

    vote_parser = subparsers.add_parser("vote", help="Vote on a fact")
    vote_parser.add_argument("fact_id", type=int)
    vote_parser.add_argument("column", choices=[c.value for c in VoteColumn])
    vote_parser.set_defaults(handler=_vote)

    return parser


async def _run(args) -> int:
    async with RemoteFactGateway(base_url=args.store_url) as gateway:
        logger.debug(f"Using store at {gateway.base_url}")
        return await args.handler(gateway, args)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
