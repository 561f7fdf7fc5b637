"""Response builders for the assistant's data-backed intents.

Each builder is a pure function of the user's transaction and goal snapshot.
Builders never filter by date; the caller decides which records to pass in.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, List, Optional

from dateutil.relativedelta import relativedelta

from models.goal import Goal
from models.intent import Intent
from models.response import (
    BudgetStatusData,
    CategorySpend,
    GoalProgressData,
    GoalProgressItem,
    ResponseData,
    SavingsTipsData,
    SpendingSummaryData,
)
from models.transaction import Transaction

CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€", "GBP": "£"}

GENERAL_SAVINGS_TIPS = [
    "Move money into savings as soon as your income arrives.",
    "Review your subscriptions and cancel the ones you no longer use.",
    "Build an emergency fund worth three to six months of expenses.",
]


@dataclass
class BuiltResponse:
    message: str
    data: ResponseData


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percent(part, whole) -> int:
    """Round part/whole*100 half-up to an integer; 0 when whole is 0."""
    whole = _to_decimal(whole)
    if whole == 0:
        return 0
    ratio = _to_decimal(part) / whole * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_amount(amount, currency: str = "INR") -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    return f"{symbol}{_to_decimal(amount):,.2f}"


def _totals_by_type(transactions: List[Transaction]) -> Dict[str, Decimal]:
    totals = {"debit": Decimal("0"), "credit": Decimal("0")}
    for txn in transactions:
        if txn.type in totals:
            totals[txn.type] += _to_decimal(txn.amount)
    return totals


def spending_by_category(transactions: List[Transaction]) -> List[CategorySpend]:
    """Group debits by category, largest first."""
    category_totals: Dict[str, Decimal] = {}
    for txn in transactions:
        if txn.type != "debit":
            continue
        category_totals[txn.category] = category_totals.get(
            txn.category, Decimal("0")
        ) + _to_decimal(txn.amount)

    total = sum(category_totals.values(), Decimal("0"))
    categories = [
        CategorySpend(name=name, amount=amount, percentage=percent(amount, total))
        for name, amount in category_totals.items()
    ]
    # sorted() is stable, so equal amounts keep first-seen order
    return sorted(categories, key=lambda c: c.amount, reverse=True)


def build_spending_summary(
    transactions: List[Transaction], goals: List[Goal], currency: str = "INR"
) -> BuiltResponse:
    categories = spending_by_category(transactions)
    total_spent = sum((c.amount for c in categories), Decimal("0"))

    message = (
        f"Here's your spending summary. You've spent "
        f"{format_amount(total_spent, currency)} across {len(categories)} categories."
    )
    return BuiltResponse(
        message, SpendingSummaryData(total_spent=total_spent, categories=categories)
    )


def build_goal_progress(
    transactions: List[Transaction], goals: List[Goal], currency: str = "INR"
) -> BuiltResponse:
    active_goals = [g for g in goals if g.status == "active"]

    items = []
    for goal in active_goals:
        target = _to_decimal(goal.target_amount)
        current = _to_decimal(goal.current_amount)
        items.append(
            GoalProgressItem(
                name=goal.name,
                progress=percent(current, target),
                remaining=target - current,
            )
        )

    message = (
        f"You have {len(active_goals)} active goals. Here's your progress overview."
    )
    return BuiltResponse(
        message, GoalProgressData(active_goals=len(active_goals), goals=items)
    )


def months_until(deadline: date, today: date) -> int:
    """Whole months left before a deadline, never less than 1."""
    delta = relativedelta(deadline, today)
    return max(1, delta.years * 12 + delta.months)


def build_savings_tips(
    transactions: List[Transaction],
    goals: List[Goal],
    currency: str = "INR",
    today: Optional[date] = None,
) -> BuiltResponse:
    today = today or date.today()
    tips: List[str] = []

    categories = spending_by_category(transactions)
    top_category = categories[0].name if categories else None
    if categories:
        top = categories[0]
        cut = (top.amount / 10).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        tips.append(
            f"Your biggest expense is {top.name} at "
            f"{format_amount(top.amount, currency)} ({top.percentage}% of spending). "
            f"Trimming it by 10% would save {format_amount(cut, currency)}."
        )

    for goal in goals:
        if goal.status != "active":
            continue
        remaining = _to_decimal(goal.target_amount) - _to_decimal(goal.current_amount)
        if remaining <= 0 or goal.deadline <= today:
            continue
        needed = (remaining / months_until(goal.deadline, today)).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        tip = (
            f"Save {format_amount(needed, currency)} a month to reach "
            f"'{goal.name}' by {goal.deadline.isoformat()}."
        )
        if needed > _to_decimal(goal.monthly_contribution):
            tip += (
                f" That is more than your planned "
                f"{format_amount(goal.monthly_contribution, currency)}."
            )
        tips.append(tip)

    tips.extend(GENERAL_SAVINGS_TIPS)

    return BuiltResponse(
        "Here are a few ways you could save more.",
        SavingsTipsData(tips=tips, top_category=top_category),
    )


def build_budget_status(
    transactions: List[Transaction], goals: List[Goal], currency: str = "INR"
) -> BuiltResponse:
    totals = _totals_by_type(transactions)
    income = totals["credit"]
    spent = totals["debit"]
    net = income - spent
    savings_rate = percent(net, income)

    if net >= 0:
        message = (
            f"You've earned {format_amount(income, currency)} and spent "
            f"{format_amount(spent, currency)}, leaving "
            f"{format_amount(net, currency)} ({savings_rate}% of income)."
        )
    else:
        message = (
            f"You've spent {format_amount(-net, currency)} more than you earned "
            f"({format_amount(spent, currency)} spent against "
            f"{format_amount(income, currency)} income)."
        )

    return BuiltResponse(
        message,
        BudgetStatusData(
            total_income=income,
            total_spent=spent,
            net=net,
            savings_rate=savings_rate,
        ),
    )


Builder = Callable[[List[Transaction], List[Goal], str], BuiltResponse]

# general_query has no builder; the orchestrator answers it with the LLM
BUILDERS: Dict[Intent, Builder] = {
    Intent.SPENDING_SUMMARY: build_spending_summary,
    Intent.GOAL_PROGRESS: build_goal_progress,
    Intent.SAVINGS_TIPS: build_savings_tips,
    Intent.BUDGET_STATUS: build_budget_status,
}
