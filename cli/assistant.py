#!/usr/bin/env python3

import json
from cli.common import add_token_argument, current_user_id
from logger import get_logger

logger = get_logger()


def cmd_ask(args, services):
    """Ask the assistant a question about your finances."""
    user_id = current_user_id(args, services)
    envelope = services.assistant.ask(user_id, args.message)

    if args.json:
        print(json.dumps(envelope.to_dict(), indent=2, ensure_ascii=False))
        return

    logger.info(envelope.message)

    data = envelope.data.to_dict()
    details = {key: value for key, value in data.items() if key != "type"}
    if details:
        logger.info("")
        logger.info(json.dumps(details, indent=2, ensure_ascii=False))

    logger.info("\nYou could also ask:")
    for suggestion in envelope.suggestions:
        logger.info(f"  - {suggestion}")


def cmd_insights(args, services):
    """Show insights about recent spending."""
    user_id = current_user_id(args, services)
    insights = services.assistant.insights(user_id)

    logger.info("\nInsights:")
    logger.info("=" * 80)
    for number, insight in enumerate(insights, start=1):
        logger.info(f"{number}. {insight}")


def setup_parser(subparsers):
    """Setup assistant subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "assistant",
        help="Ask about your finances",
        description="Chat with the finance assistant and get spending insights",
    )

    assistant_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available assistant commands",
        dest="subcommand",
        required=True,
    )

    # assistant ask
    ask_parser = assistant_subparsers.add_parser("ask", help="Ask a question")
    add_token_argument(ask_parser)
    ask_parser.add_argument("message", help="Your question")
    ask_parser.add_argument(
        "--json", action="store_true", help="Print the full response as JSON"
    )
    ask_parser.set_defaults(func=cmd_ask)

    # assistant insights
    insights_parser = assistant_subparsers.add_parser(
        "insights", help="Insights from the last 30 days"
    )
    add_token_argument(insights_parser)
    insights_parser.set_defaults(func=cmd_insights)
