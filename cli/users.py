#!/usr/bin/env python3

import getpass
from cli.common import add_token_argument, current_user_id, drop_none
from models.schemas import SettingsUpdate, parse_request
from logger import get_logger

logger = get_logger()


def _read_password(args, prompt="Password: "):
    if args.password:
        return args.password
    return getpass.getpass(prompt)


def _show_user(user):
    logger.info(f"  ID: {user.id}")
    logger.info(f"  Name: {user.full_name}")
    logger.info(f"  Email: {user.email}")
    logger.info(f"  Age: {user.age}")
    logger.info(f"  Currency: {user.currency}")
    logger.info(f"  Timezone: {user.timezone}")


def cmd_register(args, services):
    """Register a new user and print an access token."""
    user, token = services.auth.register(
        {
            "full_name": args.full_name,
            "email": args.email,
            "age": args.age,
            "password": _read_password(args),
        }
    )

    logger.info(f"✓ User registered successfully with ID: {user.id}")
    _show_user(user)
    logger.info(f"\nToken: {token}")
    logger.info("Export it as FINBUDDY_TOKEN or pass it with --token.")


def cmd_login(args, services):
    """Log in and print a fresh access token."""
    user, token = services.auth.login(args.email, _read_password(args))

    logger.info(f"✓ Logged in as {user.full_name}")
    logger.info(f"\nToken: {token}")


def cmd_show(args, services):
    """Show the current user's profile."""
    user_id = current_user_id(args, services)
    user = services.users.find(user_id)

    logger.info("\nProfile:")
    logger.info("=" * 80)
    _show_user(user)


def cmd_update(args, services):
    """Update profile settings."""
    user_id = current_user_id(args, services)
    changes = parse_request(
        SettingsUpdate,
        drop_none(
            {
                "full_name": args.full_name,
                "age": args.age,
                "currency": args.currency,
                "timezone": args.timezone,
            }
        ),
    )

    user = services.users.update_settings(user_id, changes)

    logger.info("✓ Profile updated")
    _show_user(user)


def setup_parser(subparsers):
    """Setup users subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "users",
        help="Manage your account",
        description="Register, log in and update your profile",
    )

    users_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available user commands",
        dest="subcommand",
        required=True,
    )

    # users register
    register_parser = users_subparsers.add_parser(
        "register", help="Create a new account"
    )
    register_parser.add_argument("--full-name", required=True, help="Your full name")
    register_parser.add_argument("--email", required=True, help="Email address")
    register_parser.add_argument("--age", type=int, required=True, help="Age (13-120)")
    register_parser.add_argument(
        "--password", help="Password (prompted for when omitted)"
    )
    register_parser.set_defaults(func=cmd_register)

    # users login
    login_parser = users_subparsers.add_parser("login", help="Get an access token")
    login_parser.add_argument("--email", required=True, help="Email address")
    login_parser.add_argument("--password", help="Password (prompted for when omitted)")
    login_parser.set_defaults(func=cmd_login)

    # users show
    show_parser = users_subparsers.add_parser("show", help="Show your profile")
    add_token_argument(show_parser)
    show_parser.set_defaults(func=cmd_show)

    # users update
    update_parser = users_subparsers.add_parser("update", help="Update your profile")
    add_token_argument(update_parser)
    update_parser.add_argument("--full-name", help="New full name")
    update_parser.add_argument("--age", type=int, help="New age")
    update_parser.add_argument("--currency", help="Currency code, e.g. INR or USD")
    update_parser.add_argument("--timezone", help="IANA timezone, e.g. Asia/Kolkata")
    update_parser.set_defaults(func=cmd_update)
