#!/usr/bin/env python3

import json
from assistant.builders import percent
from cli.common import add_token_argument, current_user_id, drop_none
from errors import NotFoundError
from models.schemas import GoalCreate, GoalUpdate, parse_request
from logger import get_logger

logger = get_logger()


def _show_goal(goal):
    logger.info(f"  ID: {goal.id}")
    logger.info(f"  Name: {goal.name}")
    logger.info(f"  Description: {goal.description}")
    logger.info(
        f"  Saved: {goal.current_amount:.2f} of {goal.target_amount:.2f} "
        f"({percent(goal.current_amount, goal.target_amount)}%)"
    )
    logger.info(f"  Deadline: {goal.deadline.isoformat()}")
    logger.info(f"  Category: {goal.category}")
    logger.info(f"  Priority: {goal.priority}")
    logger.info(f"  Monthly contribution: {goal.monthly_contribution:.2f}")
    logger.info(f"  Status: {goal.status}")


def _goal_fields(args):
    return drop_none(
        {
            "name": args.name,
            "description": args.description,
            "target_amount": args.target_amount,
            "current_amount": args.current_amount,
            "deadline": args.deadline,
            "category": args.category,
            "priority": args.priority,
            "monthly_contribution": args.monthly_contribution,
        }
    )


def cmd_create(args, services):
    """Create a savings goal."""
    user_id = current_user_id(args, services)
    data = parse_request(GoalCreate, _goal_fields(args))

    goal = services.goals.create(user_id, data)

    logger.info(f"✓ Goal created successfully with ID: {goal.id}")
    _show_goal(goal)


def cmd_list(args, services):
    """List the current user's goals."""
    user_id = current_user_id(args, services)
    goals = services.goals.find_by_user(user_id)

    if args.json:
        print(json.dumps([g.to_dict() for g in goals], indent=2))
        return

    if not goals:
        logger.info("No goals found.")
        return

    logger.info("\nGoals:")
    logger.info("=" * 80)
    for goal in goals:
        _show_goal(goal)
        logger.info("-" * 80)

    logger.info(f"\nTotal goals: {len(goals)}")


def cmd_show(args, services):
    """Show a single goal."""
    user_id = current_user_id(args, services)
    goal = services.goals.find(args.goal_id, user_id)
    if goal is None:
        raise NotFoundError("Goal not found")

    _show_goal(goal)


def cmd_update(args, services):
    """Edit a goal or record progress towards it."""
    user_id = current_user_id(args, services)
    fields = _goal_fields(args)
    if args.status is not None:
        fields["status"] = args.status
    changes = parse_request(GoalUpdate, fields)

    goal = services.goals.update(args.goal_id, user_id, changes)

    logger.info("✓ Goal updated")
    _show_goal(goal)


def cmd_delete(args, services):
    """Delete a goal."""
    user_id = current_user_id(args, services)
    if not services.goals.delete(args.goal_id, user_id):
        raise NotFoundError("Goal not found")

    logger.info(f"✓ Goal {args.goal_id} deleted")


def _add_field_arguments(parser, required):
    parser.add_argument("--name", required=required, help="Goal name")
    parser.add_argument("--description", required=required, help="Description")
    parser.add_argument(
        "--target-amount", required=required, help="Amount to reach"
    )
    parser.add_argument("--current-amount", help="Amount saved so far")
    parser.add_argument("--deadline", required=required, help="Deadline (YYYY-MM-DD)")
    parser.add_argument("--category", required=required, help="Goal category")
    parser.add_argument(
        "--priority", choices=["high", "medium", "low"], required=required
    )
    parser.add_argument(
        "--monthly-contribution", required=required, help="Planned monthly saving"
    )


def setup_parser(subparsers):
    """Setup goals subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "goals",
        help="Manage savings goals",
        description="Create, track and edit savings goals",
    )

    goals_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available goal commands",
        dest="subcommand",
        required=True,
    )

    # goals create
    create_parser = goals_subparsers.add_parser("create", help="Create a goal")
    add_token_argument(create_parser)
    _add_field_arguments(create_parser, required=True)
    create_parser.set_defaults(func=cmd_create)

    # goals list
    list_parser = goals_subparsers.add_parser("list", help="List goals")
    add_token_argument(list_parser)
    list_parser.add_argument("--json", action="store_true", help="Print goals as JSON")
    list_parser.set_defaults(func=cmd_list)

    # goals show
    show_parser = goals_subparsers.add_parser("show", help="Show a goal")
    add_token_argument(show_parser)
    show_parser.add_argument("goal_id", type=int, help="Goal ID")
    show_parser.set_defaults(func=cmd_show)

    # goals update
    update_parser = goals_subparsers.add_parser("update", help="Edit a goal")
    add_token_argument(update_parser)
    update_parser.add_argument("goal_id", type=int, help="Goal ID")
    _add_field_arguments(update_parser, required=False)
    update_parser.add_argument(
        "--status", choices=["active", "completed", "paused"], help="Goal status"
    )
    update_parser.set_defaults(func=cmd_update)

    # goals delete
    delete_parser = goals_subparsers.add_parser("delete", help="Delete a goal")
    add_token_argument(delete_parser)
    delete_parser.add_argument("goal_id", type=int, help="Goal ID")
    delete_parser.set_defaults(func=cmd_delete)
