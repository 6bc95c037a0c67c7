"""Shared test fixtures."""

import asyncio
import logging
from dataclasses import dataclass, field

import pytest

from dinner_concierge.config import Settings
from dinner_concierge.containers import AppContainer
from dinner_concierge.domain.catalog import DEFAULT_MENU
from dinner_concierge.domain.errors import PersistenceError
from dinner_concierge.domain.orders import DEFAULT_HOUSEHOLD, UserOrder
from dinner_concierge.services.flow import FlowController
from dinner_concierge.services.menu_extraction import (
    MenuExtractionService,
    MenuVisionClient,
)
from dinner_concierge.services.order_store import KeyValueStore, OrderStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for tests."""

    values: dict[str, str] = field(default_factory=dict)
    writes: int = 0

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.values[key] = value


@dataclass
class FailingKeyValueStore(KeyValueStore):
    """Store whose reads and writes always fail."""

    def get(self, key: str) -> str | None:
        raise PersistenceError("storage unavailable")

    def set(self, key: str, value: str) -> None:
        raise PersistenceError("quota exceeded")


def extracted_menu_payload() -> dict[str, object]:
    """Raw extraction output with deliberately wrong category flags."""
    return {
        "soup": {
            "title": "Soups",
            "items": [{"id": "x-s1", "name": "Pumpkin Soup", "price": None}],
            "required": False,
            "multiSelect": True,
        },
        "appetizer": {
            "title": "Starters",
            "items": [{"id": "x-ap1", "name": "Burrata", "price": 420}],
            "required": False,
            "multiSelect": False,
        },
        "main": {
            "title": "Mains",
            "items": [
                {"id": "x-m1", "name": "Roast Duck", "price": 1880},
                {"id": "x-m2", "name": "Sea Bass", "price": 1650},
            ],
            "required": True,
            "multiSelect": True,
        },
        "aLaCarte": {
            "title": "Extras",
            "items": [{"id": "x-al1", "name": "Truffle Fries", "price": 280}],
            "required": True,
            "multiSelect": False,
        },
    }


@dataclass
class FakeMenuVisionClient(MenuVisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] | None = field(default_factory=extracted_menu_payload)
    calls: list[dict[str, object]] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object] | None:
        self.calls.append(
            {"model": model, "image_data_url": image_data_url, "prompt": prompt}
        )
        return self.payload


@dataclass
class GatedMenuVisionClient(MenuVisionClient):
    """Vision client that holds the call open until released."""

    payload: dict[str, object] | None = field(default_factory=extracted_menu_payload)
    started: asyncio.Event = field(default_factory=asyncio.Event)
    release: asyncio.Event = field(default_factory=asyncio.Event)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object] | None:
        self.started.set()
        await self.release.wait()
        return self.payload


@dataclass
class FailingMenuVisionClient(MenuVisionClient):
    """Vision client that fails like a network error."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object] | None:
        raise ConnectionError("network unreachable")


def make_order(  # noqa: PLR0913
    name: str,
    soup: str | None = "s2",
    appetizer: str | None = "ap1",
    main: str | None = "m5",
    add_ons: tuple[str, ...] = (),
    notes: str = "",
    confirmed: bool = True,
) -> UserOrder:
    """Build an order from default menu ids."""
    return UserOrder(
        user_name=name,
        soup=DEFAULT_MENU.soup.find_item(soup) if soup else None,
        appetizer=DEFAULT_MENU.appetizer.find_item(appetizer) if appetizer else None,
        main=DEFAULT_MENU.main.find_item(main) if main else None,
        a_la_carte=[DEFAULT_MENU.a_la_carte.find_item(item_id) for item_id in add_ons],
        notes=notes,
        is_confirmed=confirmed,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        storage_path=tmp_path / "storage.json",
        public_base_url="https://dinner.example/",
    )


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def order_store(kv_store: InMemoryKeyValueStore) -> OrderStore:
    return OrderStore(kv_store)


@pytest.fixture
def vision_client() -> FakeMenuVisionClient:
    return FakeMenuVisionClient()


@pytest.fixture
def extraction_service(vision_client: FakeMenuVisionClient) -> MenuExtractionService:
    return MenuExtractionService(
        client=vision_client,
        model="gpt-5.2",
        reasoning_effort="medium",
        store=False,
    )


@pytest.fixture
def flow(
    order_store: OrderStore, extraction_service: MenuExtractionService
) -> FlowController:
    return FlowController(
        order_store=order_store,
        extraction_service=extraction_service,
        roster=list(DEFAULT_HOUSEHOLD),
    )


@pytest.fixture
def container(
    settings: Settings,
    order_store: OrderStore,
    extraction_service: MenuExtractionService,
    flow: FlowController,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        order_store=order_store,
        menu_extraction_service=extraction_service,
        flow=flow,
        close_resources=close_resources,
    )


@pytest.fixture(autouse=True)
def propagate_app_logs() -> None:
    """Let caplog see application records even after configure_logging ran."""
    logging.getLogger("dinner_concierge").propagate = True
