#!/usr/bin/env python3
"""
FinBuddy CLI - personal finance tracking with AI categorization.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    users         Register, log in and manage your profile
    transactions  Add, upload and manage transactions
    goals         Track savings goals
    assistant     Ask questions about your finances
    migrate       Database migrations

Examples:
    python -m cli migrate apply
    python -m cli users register --full-name "Asha Rao" --email asha@example.com --age 30
    python -m cli users login --email asha@example.com
    export FINBUDDY_TOKEN=<token>
    python -m cli transactions upload statement.csv
    python -m cli assistant ask "Where did my money go?"
"""

import sys
import argparse
from http import HTTPStatus
from cli import assistant, goals, migrate, transactions, users
from config import load_config
from db.manager import DatabaseManager
from errors import FinBuddyError
from logger import get_logger, setup_logging
from services.base import Services


def build_parser():
    """Build the argument parser with every command registered."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="FinBuddy - Personal finance tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    users.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    goals.setup_parser(subparsers)
    assistant.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    return parser


def main():
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config()
        setup_logging(config)

        if args.command == "migrate":
            # Migrate commands need db_manager for raw database operations
            args.func(args, DatabaseManager(config))
        else:
            args.func(args, Services(config))
    except FinBuddyError as e:
        logger = get_logger()
        logger.error(
            f"Error {e.status_code} ({HTTPStatus(e.status_code).phrase}): {e.message}"
        )
        for detail in e.details or []:
            location = ".".join(str(part) for part in detail.get("loc", ()))
            logger.error(f"  {location}: {detail.get('msg')}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
