"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML",
    )
    common.add_argument(
        "--db",
        type=Path,
        default=None,
        metavar="DB_PATH",
        help="SQLite database (overrides db_path from --config)",
    )
    common.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    parser = argparse.ArgumentParser(
        prog="five-for-the-future",
        description="Five for the Future contributor data from BuddyPress xprofile fields",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # contributors
    contributors_parser = subparsers.add_parser(
        "contributors",
        parents=[common],
        help="List every user with hours and teams saved",
    )
    contributors_parser.add_argument(
        "--indexed",
        action="store_true",
        help="Output an object keyed by user ID",
    )

    # contributor
    contributor_parser = subparsers.add_parser(
        "contributor",
        parents=[common],
        help="Show one user's contribution data",
    )
    contributor_parser.add_argument("user_id", type=int)

    # pledge
    pledge_parser = subparsers.add_parser(
        "pledge",
        parents=[common],
        help="Aggregate hours and teams for a pledge's contributors",
    )
    pledge_parser.add_argument("pledge_id", type=int)

    # reset
    reset_parser = subparsers.add_parser(
        "reset",
        parents=[common],
        help="Delete a user's contribution data and cached values",
    )
    reset_parser.add_argument("user_id", type=int)

    # set-field
    set_parser = subparsers.add_parser(
        "set-field",
        parents=[common],
        help="Store a profile field value for a user",
    )
    set_parser.add_argument("user_id", type=int)
    set_parser.add_argument(
        "field",
        choices=["sponsored", "hours_per_week", "team_names"],
    )
    set_parser.add_argument(
        "value",
        nargs="+",
        help="Value; team_names accepts several",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "contributors":
        _run_contributors(args)
    elif args.command == "contributor":
        _run_contributor(args)
    elif args.command == "pledge":
        _run_pledge(args)
    elif args.command == "reset":
        _run_reset(args)
    elif args.command == "set-field":
        _run_set_field(args)
    else:
        parser.print_help()


def _load_settings(args: argparse.Namespace):
    from five_for_the_future.models.settings import Settings

    settings = Settings.from_yaml(args.config) if args.config else Settings()
    if args.db is not None:
        settings = settings.model_copy(update={"db_path": args.db})
    return settings


def _build(args: argparse.Namespace):
    from five_for_the_future.pipeline import build_aggregator

    try:
        return build_aggregator(_load_settings(args))
    except ValueError as e:
        raise SystemExit(str(e))


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def _run_contributors(args: argparse.Namespace) -> None:
    """Run contributors command."""
    aggregator = _build(args)
    records = aggregator.fetch_all_contributor_hours_teams()
    if args.indexed:
        _print_json({str(k): v for k, v in aggregator.index_contributors(records).items()})
    else:
        _print_json([r.model_dump(exclude={"sponsored"}) for r in records])


def _run_contributor(args: argparse.Namespace) -> None:
    """Run contributor command."""
    aggregator = _build(args)
    _print_json(aggregator.get_contributor_data(args.user_id).model_dump())


def _run_pledge(args: argparse.Namespace) -> None:
    """Run pledge command."""
    aggregator = _build(args)
    _print_json(aggregator.aggregate_for_pledge(args.pledge_id).model_dump())


def _run_reset(args: argparse.Namespace) -> None:
    """Run reset command."""
    aggregator = _build(args)
    aggregator.reset_contribution_data(args.user_id)
    print(f"Reset contribution data for user {args.user_id}")


def _run_set_field(args: argparse.Namespace) -> None:
    """Run set-field command. team_names is stored as a serialized array."""
    from five_for_the_future.constants import FIELD_IDS
    from five_for_the_future.models.xprofile import ProfileField

    aggregator = _build(args)
    field = ProfileField(args.field)
    value = list(args.value) if field is ProfileField.TEAM_NAMES else " ".join(args.value)
    aggregator.store.set_value(args.user_id, FIELD_IDS[field], value)
    print(f"Set {field.value} for user {args.user_id}")


if __name__ == "__main__":
    main()
