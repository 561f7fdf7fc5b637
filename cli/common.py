"""Helpers shared by CLI commands."""

import os


def add_token_argument(parser):
    """Add the --token option used by commands that act for a user."""
    parser.add_argument(
        "--token",
        default=os.environ.get("FINBUDDY_TOKEN"),
        help="Access token from 'users login' (default: $FINBUDDY_TOKEN)",
    )


def current_user_id(args, services) -> int:
    """Resolve the --token argument to a user id.

    Raises:
        AuthenticationError: If the token is missing or invalid.
    """
    return services.auth.authenticate(args.token)


def drop_none(values: dict) -> dict:
    """Remove options the user did not pass."""
    return {key: value for key, value in values.items() if value is not None}
