"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from dinner_concierge.adapters.json_file_store import JsonFileKeyValueStore
from dinner_concierge.adapters.openai_vision_client import OpenAIVisionClient
from dinner_concierge.config import Settings, parse_household_members
from dinner_concierge.services.flow import FlowController
from dinner_concierge.services.menu_extraction import MenuExtractionService
from dinner_concierge.services.order_store import OrderStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    order_store: OrderStore
    menu_extraction_service: MenuExtractionService
    flow: FlowController
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    order_store = OrderStore(
        store=JsonFileKeyValueStore(resolved_settings.storage_path),
        key=resolved_settings.storage_key,
    )
    openai_client = (
        OpenAIVisionClient.create(resolved_settings.openai_api_key)
        if resolved_settings.openai_api_key
        else None
    )
    menu_extraction_service = MenuExtractionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    flow = FlowController(
        order_store=order_store,
        extraction_service=menu_extraction_service,
        roster=parse_household_members(resolved_settings.household_members),
    )

    async def close_resources() -> None:
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        order_store=order_store,
        menu_extraction_service=menu_extraction_service,
        flow=flow,
        close_resources=close_resources,
    )
