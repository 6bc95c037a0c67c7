"""Plain-text renderings of the order set for restaurant staff."""

from collections.abc import Iterable
from datetime import date, datetime

from dinner_concierge.domain.menu import CategoryKey, MenuItem
from dinner_concierge.domain.orders import UserOrder

RULE = "===================="
MISSING = "(none)"
COURSE_LABELS: tuple[tuple[str, CategoryKey], ...] = (
    ("Soup", CategoryKey.SOUP),
    ("Appetizer", CategoryKey.APPETIZER),
    ("Main", CategoryKey.MAIN),
)


def format_staff_report(orders: Iterable[UserOrder], generated_at: datetime) -> str:
    """Format the downloadable per-person report."""
    order_list = list(orders)
    lines = ["DINNER ORDER SUMMARY", RULE, ""]
    for order in order_list:
        lines.append(f"[ {order.user_name} ]")
        for label, key in COURSE_LABELS:
            lines.append(f"- {label}: {_name(order.choice(key))}")
        if order.a_la_carte:
            lines.append(f"- Add-ons: {_names(order.a_la_carte)}")
        if order.notes:
            lines.append(f"- NOTE: {order.notes}")
        lines.append("")
    lines.append(RULE)
    lines.append(f"Total Guests: {len(order_list)}")
    lines.append(f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
    return "\n".join(lines) + "\n"


def format_message_digest(orders: Iterable[UserOrder]) -> str:
    """Format a short chat-style digest of all orders."""
    order_list = list(orders)
    if not order_list:
        return "No dinner orders yet."
    noun = "guest" if len(order_list) == 1 else "guests"
    blocks = [f"Dinner orders ({len(order_list)} {noun})"]
    for order in order_list:
        lines = [f"* {order.user_name}"]
        lines.extend(
            f"  {label}: {_name(order.choice(key))}" for label, key in COURSE_LABELS
        )
        if order.a_la_carte:
            lines.append(f"  Add-ons: {_names(order.a_la_carte)}")
        if order.notes:
            lines.append(f"  Note: {order.notes}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def export_filename(day: date) -> str:
    """Return the download filename for a report generated on a given day."""
    return f"Dinner_Order_{day.isoformat()}.txt"


def _name(item: MenuItem | None) -> str:
    return item.name if item else MISSING


def _names(items: list[MenuItem]) -> str:
    return ", ".join(item.name for item in items)
