"""View flow for picking a person, editing their order and reviewing all orders."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from dinner_concierge.domain.catalog import DEFAULT_MENU
from dinner_concierge.domain.errors import (
    ExtractionError,
    InvalidTransitionError,
    UnknownItemError,
    UnknownMemberError,
)
from dinner_concierge.domain.menu import (
    SINGLE_CHOICE_CATEGORIES,
    CategoryKey,
    FullMenu,
)
from dinner_concierge.domain.orders import (
    OrderSet,
    UserOrder,
    confirm,
    is_confirmable,
    merge_orders,
    ordered_for_roster,
    pending_members,
)
from dinner_concierge.services.exports import (
    format_message_digest,
    format_staff_report,
)
from dinner_concierge.services.menu_extraction import MenuExtractionService
from dinner_concierge.services.order_store import OrderStore
from dinner_concierge.services.share_codec import (
    build_share_link,
    encode_orders,
    import_shared_orders,
)

logger = logging.getLogger(__name__)


class ViewState(StrEnum):
    """Views of the flow; SELECTING is the initial one."""

    SELECTING = "selecting"
    ORDERING = "ordering"
    REVIEWING = "reviewing"


class ScanOutcome(StrEnum):
    """Result of a menu scan."""

    UPDATED = "updated"
    NO_RESULT = "no_result"
    FAILED = "failed"


@dataclass(frozen=True)
class Notice:
    """Non-blocking message for the user."""

    level: str
    text: str


@dataclass
class FlowController:
    """State machine owning the session's orders and menu.

    The controller is the single writer of ``orders`` and ``menu``. Every
    change to ``orders`` is persisted through ``order_store``; a failed write
    keeps the in-memory change and queues a notice.
    """

    order_store: OrderStore
    extraction_service: MenuExtractionService
    roster: list[str]
    menu: FullMenu = field(default_factory=lambda: DEFAULT_MENU)
    orders: OrderSet = field(default_factory=dict)
    view: ViewState = ViewState.SELECTING
    person: str | None = None
    draft: UserOrder | None = None
    processing: bool = False
    notices: list[Notice] = field(default_factory=list)

    def start(self, import_payload: str | None = None) -> list[str]:
        """Load stored orders, apply an optional share payload and persist."""
        self.orders = self.order_store.load()
        self.view = ViewState.SELECTING
        self.person = None
        self.draft = None
        if import_payload:
            return self.import_shared(import_payload)
        self._persist()
        return []

    def import_shared(self, payload: str) -> list[str]:
        """Merge orders from a share payload; imported entries win."""
        self._require_idle()
        imported = import_shared_orders(payload, self.menu)
        if not imported:
            self._notify("error", "Nothing to import from that link.")
            return []
        self.orders = merge_orders(self.orders, imported)
        self._persist()
        names = list(imported)
        logger.info("Imported shared orders", extra={"names": names})
        self._notify("info", f"Sync successful! Updated orders for: {', '.join(names)}")
        return names

    def select_person(self, name: str) -> UserOrder:
        """Start editing a person's order from the selection view."""
        self._require_view(ViewState.SELECTING)
        return self._open_order(name)

    def edit_person(self, name: str) -> UserOrder:
        """Start editing a person's order from the summary view."""
        self._require_view(ViewState.REVIEWING)
        return self._open_order(name)

    def choose(self, category: CategoryKey, item_id: str) -> UserOrder:
        """Select the dish of a single-choice category in the draft."""
        draft = self._require_draft()
        if category not in SINGLE_CHOICE_CATEGORIES:
            raise InvalidTransitionError("Use toggle_add_on for a la carte items")
        item = self.menu.category(category).find_item(item_id)
        if item is None:
            raise UnknownItemError(item_id, category.value)
        self.draft = draft.model_copy(update={category.value: item})
        return self.draft

    def clear_choice(self, category: CategoryKey) -> UserOrder:
        draft = self._require_draft()
        if category is CategoryKey.A_LA_CARTE:
            self.draft = draft.model_copy(update={"a_la_carte": []})
        else:
            self.draft = draft.model_copy(update={category.value: None})
        return self.draft

    def toggle_add_on(self, item_id: str) -> UserOrder:
        """Add an a la carte item to the draft, or remove it when present."""
        draft = self._require_draft()
        if item_id in draft.add_on_ids():
            add_ons = [item for item in draft.a_la_carte if item.id != item_id]
        else:
            item = self.menu.a_la_carte.find_item(item_id)
            if item is None:
                raise UnknownItemError(item_id, CategoryKey.A_LA_CARTE.value)
            add_ons = [*draft.a_la_carte, item]
        self.draft = draft.model_copy(update={"a_la_carte": add_ons})
        return self.draft

    def set_notes(self, notes: str) -> UserOrder:
        draft = self._require_draft()
        self.draft = draft.model_copy(update={"notes": notes})
        return self.draft

    def can_save(self) -> bool:
        """Return true when the draft may be saved."""
        return self.draft is not None and is_confirmable(self.draft)

    def save(self, order: UserOrder | None = None) -> bool:
        """Confirm and store an order, returning to the selection view.

        Incomplete orders are ignored and False is returned.
        """
        self._require_view(ViewState.ORDERING)
        self._require_idle()
        candidate = order if order is not None else self._require_draft()
        if candidate.user_name != self.person:
            raise InvalidTransitionError(
                f"Cannot save an order for {candidate.user_name} "
                f"while editing {self.person}"
            )
        confirmed = confirm(candidate)
        if confirmed is None:
            return False
        self.orders[confirmed.user_name] = confirmed
        self._persist()
        self._go_to_selection()
        return True

    def back(self) -> None:
        """Leave the order form, discarding the draft."""
        self._require_view(ViewState.ORDERING)
        self._go_to_selection()

    def view_summary(self) -> None:
        self._require_view(ViewState.SELECTING)
        self._require_idle()
        if not self.orders:
            raise InvalidTransitionError("There are no orders to review yet")
        self.view = ViewState.REVIEWING

    def leave_summary(self) -> None:
        self._require_view(ViewState.REVIEWING)
        self._go_to_selection()

    def pending_members(self) -> list[str]:
        return pending_members(self.orders, self.roster)

    def share_payload(self, person: str | None = None) -> str:
        """Encode all orders, or only one person's order when they have one."""
        payload_orders = self.orders
        if person and person in self.orders:
            payload_orders = {person: self.orders[person]}
        return encode_orders(payload_orders)

    def share_link(self, base_url: str, person: str | None = None) -> str:
        return build_share_link(base_url, self.share_payload(person))

    def export_report(self, now: datetime | None = None) -> str:
        """Return the staff report for all orders."""
        generated_at = now or datetime.now().astimezone()
        return format_staff_report(
            ordered_for_roster(self.orders, self.roster), generated_at
        )

    def export_digest(self) -> str:
        return format_message_digest(ordered_for_roster(self.orders, self.roster))

    async def scan_menu(self, image_bytes: bytes) -> ScanOutcome:
        """Replace the menu with one extracted from a photo.

        Opening, editing or importing orders is rejected while the scan runs.
        On any failure the previous menu stays in effect.
        """
        if self.processing:
            raise InvalidTransitionError("A menu scan is already in progress")
        self.processing = True
        try:
            menu = await self.extraction_service.extract(image_bytes)
        except ExtractionError:
            logger.exception("Menu extraction failed")
            self._notify(
                "error", "Error parsing menu. Make sure your API key is valid."
            )
            return ScanOutcome.FAILED
        finally:
            self.processing = False
        if menu is None:
            self._notify("error", "Could not parse menu. Please try a clearer image.")
            return ScanOutcome.NO_RESULT
        self.menu = menu
        logger.info(
            "Menu replaced from photo", extra={"items": len(menu.all_items())}
        )
        self._notify("info", "Menu updated successfully.")
        return ScanOutcome.UPDATED

    def drain_notices(self) -> list[Notice]:
        """Return queued notices and clear the queue."""
        notices, self.notices = self.notices, []
        return notices

    def _open_order(self, name: str) -> UserOrder:
        if name not in self.roster:
            raise UnknownMemberError(name)
        self._require_idle()
        existing = self.orders.get(name)
        self.draft = existing if existing is not None else UserOrder.empty(name)
        self.person = name
        self.view = ViewState.ORDERING
        return self.draft

    def _go_to_selection(self) -> None:
        self.view = ViewState.SELECTING
        self.person = None
        self.draft = None

    def _require_view(self, *views: ViewState) -> None:
        if self.view not in views:
            raise InvalidTransitionError(
                f"Action not available in the {self.view.value} view"
            )

    def _require_idle(self) -> None:
        if self.processing:
            raise InvalidTransitionError("Wait for the menu scan to finish")

    def _require_draft(self) -> UserOrder:
        self._require_view(ViewState.ORDERING)
        self._require_idle()
        if self.draft is None:
            raise InvalidTransitionError("No order is being edited")
        return self.draft

    def _persist(self) -> None:
        if not self.order_store.save(self.orders):
            self._notify(
                "error",
                "Could not save orders on this device; they are kept for this session.",
            )

    def _notify(self, level: str, text: str) -> None:
        self.notices.append(Notice(level=level, text=text))
