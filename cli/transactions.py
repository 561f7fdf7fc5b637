#!/usr/bin/env python3

import json
import sys
from pathlib import Path
from cli.common import add_token_argument, current_user_id, drop_none
from errors import NotFoundError
from ingestion import import_csv_file
from models.schemas import (
    TransactionCreate,
    TransactionUpdate,
    parse_request,
)
from logger import get_logger

logger = get_logger()


def _format_row(t):
    confidence = f"{t.confidence}%" if t.confidence is not None else "-"
    sign = "-" if t.type == "debit" else "+"
    return (
        f"{t.id:>6}  {t.transaction_date.isoformat()}  {sign}{t.amount:>12.2f}  "
        f"{t.category:<18} {confidence:>5}  {t.description[:40]}"
    )


def _show_transaction(t):
    logger.info(f"  ID: {t.id}")
    logger.info(f"  Date: {t.transaction_date.isoformat()}")
    logger.info(f"  Description: {t.description}")
    logger.info(f"  Amount: {t.amount:.2f} ({t.type})")
    logger.info(f"  Category: {t.category}")
    logger.info(f"  Status: {t.status}")
    if t.confidence is not None:
        logger.info(f"  Confidence: {t.confidence}%")


def cmd_add(args, services):
    """Record a transaction by hand.

    Without --category the description is run through the categorizer.
    """
    user_id = current_user_id(args, services)
    data = parse_request(
        TransactionCreate,
        drop_none(
            {
                "date": args.date,
                "description": args.description,
                "amount": args.amount,
                "type": args.type,
                "category": args.category,
            }
        ),
    )

    transaction = services.transactions.add(user_id, data)

    logger.info("✓ Transaction added")
    _show_transaction(transaction)


def cmd_list(args, services):
    """List the current user's transactions, newest first."""
    user_id = current_user_id(args, services)
    transactions = services.transactions.find_by_user(
        user_id,
        category=args.category,
        transaction_type=args.type,
        limit=args.limit,
    )

    if args.json:
        print(json.dumps([t.to_dict() for t in transactions], indent=2))
        return

    if not transactions:
        logger.info("No transactions found.")
        return

    logger.info("\nTransactions:")
    logger.info("=" * 100)
    for t in transactions:
        logger.info(_format_row(t))
    logger.info(f"\nTotal transactions: {len(transactions)}")


def cmd_show(args, services):
    """Show a single transaction."""
    user_id = current_user_id(args, services)
    transaction = services.transactions.find(args.transaction_id, user_id)
    if transaction is None:
        raise NotFoundError("Transaction not found")

    _show_transaction(transaction)


def cmd_update(args, services):
    """Edit a transaction. Setting a category marks it categorized."""
    user_id = current_user_id(args, services)
    changes = parse_request(
        TransactionUpdate,
        drop_none(
            {
                "date": args.date,
                "description": args.description,
                "amount": args.amount,
                "type": args.type,
                "category": args.category,
            }
        ),
    )

    transaction = services.transactions.apply_update(
        args.transaction_id, user_id, changes
    )

    logger.info("✓ Transaction updated")
    _show_transaction(transaction)


def cmd_delete(args, services):
    """Delete a transaction."""
    user_id = current_user_id(args, services)
    if not services.transactions.delete(args.transaction_id, user_id):
        raise NotFoundError("Transaction not found")

    logger.info(f"✓ Transaction {args.transaction_id} deleted")


def cmd_upload(args, services):
    """Upload a CSV statement and categorize its rows."""
    user_id = current_user_id(args, services)

    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        logger.error(f"File not found: {args.csv_file}")
        sys.exit(1)

    logger.info(f"Uploading transactions from: {csv_path}")
    logger.info("-" * 80)

    result = import_csv_file(services, user_id, csv_path)

    logger.info(f"✓ Uploaded {result.count} transaction(s)")
    logger.info(f"  Categorized: {result.categorized}")
    if result.categorized < result.count:
        pending = result.count - result.categorized
        logger.info(
            f"  ({pending} left pending, retry with 'transactions recategorize')"
        )


def cmd_recategorize(args, services):
    """Run the categorizer over transactions still pending."""
    user_id = current_user_id(args, services)
    pending = services.transactions.find_pending(user_id)

    if not pending:
        logger.info("No pending transactions.")
        return

    logger.info(f"Categorizing {len(pending)} pending transaction(s)...")
    services.categorizer.categorize_transactions(pending)

    updated = 0
    for t in pending:
        if t.status == "categorized" and services.transactions.update(
            t, ["category", "confidence", "status"]
        ):
            updated += 1

    logger.info(f"✓ Categorized {updated}/{len(pending)} transaction(s)")


def _add_field_arguments(parser, required):
    parser.add_argument("--date", required=required, help="Date (YYYY-MM-DD)")
    parser.add_argument("--description", required=required, help="Description")
    parser.add_argument("--amount", required=required, help="Positive amount")
    parser.add_argument(
        "--type",
        choices=["debit", "credit"],
        required=required,
        help="debit for money out, credit for money in",
    )
    parser.add_argument("--category", help="Category name")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Manage transactions",
        description="Add, upload, list and edit transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions add
    add_parser = transactions_subparsers.add_parser(
        "add", help="Add a transaction by hand"
    )
    add_token_argument(add_parser)
    _add_field_arguments(add_parser, required=True)
    add_parser.set_defaults(func=cmd_add)

    # transactions list
    list_parser = transactions_subparsers.add_parser("list", help="List transactions")
    add_token_argument(list_parser)
    list_parser.add_argument("--category", help="Only this category")
    list_parser.add_argument(
        "--type", choices=["debit", "credit"], help="Only debits or credits"
    )
    list_parser.add_argument(
        "--limit", type=int, default=100, help="Maximum rows (default: 100)"
    )
    list_parser.add_argument("--json", action="store_true", help="Print rows as JSON")
    list_parser.set_defaults(func=cmd_list)

    # transactions show
    show_parser = transactions_subparsers.add_parser("show", help="Show a transaction")
    add_token_argument(show_parser)
    show_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    show_parser.set_defaults(func=cmd_show)

    # transactions update
    update_parser = transactions_subparsers.add_parser(
        "update", help="Edit a transaction"
    )
    add_token_argument(update_parser)
    update_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    _add_field_arguments(update_parser, required=False)
    update_parser.set_defaults(func=cmd_update)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction"
    )
    add_token_argument(delete_parser)
    delete_parser.add_argument("transaction_id", type=int, help="Transaction ID")
    delete_parser.set_defaults(func=cmd_delete)

    # transactions upload
    upload_parser = transactions_subparsers.add_parser(
        "upload", help="Upload a CSV of transactions"
    )
    add_token_argument(upload_parser)
    upload_parser.add_argument(
        "csv_file", help="CSV with date, description and amount columns"
    )
    upload_parser.set_defaults(func=cmd_upload)

    # transactions recategorize
    recategorize_parser = transactions_subparsers.add_parser(
        "recategorize", help="Categorize transactions left pending"
    )
    add_token_argument(recategorize_parser)
    recategorize_parser.set_defaults(func=cmd_recategorize)
