"""Per-person order records and the rules around confirming them."""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dinner_concierge.domain.menu import SINGLE_CHOICE_CATEGORIES, CategoryKey, MenuItem

DEFAULT_HOUSEHOLD: tuple[str, ...] = ("Jackson", "Stella", "Ai Ning", "Channing")


class UserOrder(BaseModel):
    """One person's dinner selections.

    The JSON layout uses the camelCase aliases (``userName``, ``aLaCarte``,
    ``isConfirmed``); Python code uses the snake_case attributes.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_name: str = Field(alias="userName")
    soup: MenuItem | None = None
    appetizer: MenuItem | None = None
    main: MenuItem | None = None
    a_la_carte: list[MenuItem] = Field(default_factory=list, alias="aLaCarte")
    notes: str = ""
    is_confirmed: bool = Field(default=False, alias="isConfirmed")

    @field_validator("a_la_carte")
    @classmethod
    def _unique_add_ons(cls, items: list[MenuItem]) -> list[MenuItem]:
        seen: set[str] = set()
        unique: list[MenuItem] = []
        for item in items:
            if item.id in seen:
                continue
            seen.add(item.id)
            unique.append(item)
        return unique

    @classmethod
    def empty(cls, user_name: str) -> "UserOrder":
        """Return a blank draft for a person."""
        return cls(user_name=user_name)

    def choice(self, key: CategoryKey) -> MenuItem | None:
        """Return the selected item of a single-choice category."""
        if key not in SINGLE_CHOICE_CATEGORIES:
            raise ValueError("a la carte is a multi-select category")
        return getattr(self, key.value)

    def add_on_ids(self) -> list[str]:
        return [item.id for item in self.a_la_carte]


OrderSet = dict[str, UserOrder]


def is_confirmable(order: UserOrder) -> bool:
    """Return true when soup, appetizer and main are all selected."""
    return (
        order.soup is not None
        and order.appetizer is not None
        and order.main is not None
    )


def confirm(order: UserOrder) -> UserOrder | None:
    """Return a confirmed copy of the order, or None when it is incomplete."""
    if not is_confirmable(order):
        return None
    return order.model_copy(update={"is_confirmed": True})


def merge_orders(existing: OrderSet, imported: OrderSet) -> OrderSet:
    """Merge an imported order set into an existing one; imports win."""
    merged = dict(existing)
    merged.update(imported)
    return merged


def pending_members(orders: OrderSet, roster: Iterable[str]) -> list[str]:
    """Return roster members that have no confirmed order yet."""
    return [
        name
        for name in roster
        if name not in orders or not orders[name].is_confirmed
    ]


def ordered_for_roster(orders: OrderSet, roster: Iterable[str]) -> list[UserOrder]:
    """Return orders with roster members first, then everyone else."""
    roster_names = list(roster)
    ordered = [orders[name] for name in roster_names if name in orders]
    ordered.extend(
        order for name, order in orders.items() if name not in roster_names
    )
    return ordered
