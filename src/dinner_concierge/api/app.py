"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from dinner_concierge.api.models import ChoiceRequest, NotesRequest
from dinner_concierge.app_logging import configure_logging
from dinner_concierge.containers import AppContainer
from dinner_concierge.domain.errors import (
    InvalidTransitionError,
    UnknownItemError,
    UnknownMemberError,
)
from dinner_concierge.domain.menu import CategoryKey
from dinner_concierge.domain.orders import UserOrder
from dinner_concierge.services.exports import export_filename
from dinner_concierge.services.flow import FlowController

HTTP_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.flow.start()
        logger.info(
            "Loaded orders",
            extra={"count": len(app.state.container.flow.orders)},
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition(
        request: Request, exc: InvalidTransitionError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(UnknownMemberError)
    async def unknown_member(request: Request, exc: UnknownMemberError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(UnknownItemError)
    async def unknown_item(request: Request, exc: UnknownItemError) -> JSONResponse:
        return _error(HTTP_UNPROCESSABLE, exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_model=None)
    async def session_state(
        request: Request,
        import_payload: str | None = Query(default=None, alias="import"),
    ) -> dict[str, object] | RedirectResponse:
        """Return the session snapshot; consume a share payload when present."""
        flow = _flow(request)
        if import_payload is not None:
            flow.import_shared(import_payload)
            return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
        return _snapshot(flow)

    @app.get("/menu")
    async def menu(request: Request) -> dict[str, object]:
        """Return the menu in effect."""
        return _flow(request).menu.model_dump(by_alias=True, exclude_none=True)

    @app.get("/orders")
    async def orders(request: Request) -> dict[str, object]:
        """Return every stored order keyed by person."""
        return {
            name: _dump_order(order) for name, order in _flow(request).orders.items()
        }

    @app.post("/people/{name}/select")
    async def select_person(name: str, request: Request) -> dict[str, object]:
        flow = _flow(request)
        flow.select_person(name)
        return _draft_response(flow)

    @app.post("/people/{name}/edit")
    async def edit_person(name: str, request: Request) -> dict[str, object]:
        flow = _flow(request)
        flow.edit_person(name)
        return _draft_response(flow)

    @app.get("/draft")
    async def draft(request: Request) -> dict[str, object]:
        flow = _flow(request)
        if flow.draft is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _draft_response(flow)

    @app.put("/draft/notes")
    async def set_notes(body: NotesRequest, request: Request) -> dict[str, object]:
        flow = _flow(request)
        flow.set_notes(body.notes)
        return _draft_response(flow)

    @app.put("/draft/{category}")
    async def choose(
        category: CategoryKey, body: ChoiceRequest, request: Request
    ) -> dict[str, object]:
        """Select or clear the dish of a category in the draft."""
        flow = _flow(request)
        if body.item_id is None:
            flow.clear_choice(category)
        else:
            flow.choose(category, body.item_id)
        return _draft_response(flow)

    @app.post("/draft/add-ons/{item_id}")
    async def toggle_add_on(item_id: str, request: Request) -> dict[str, object]:
        flow = _flow(request)
        flow.toggle_add_on(item_id)
        return _draft_response(flow)

    @app.post("/draft/save")
    async def save_draft(request: Request) -> dict[str, object]:
        """Confirm the draft; incomplete drafts are left untouched."""
        flow = _flow(request)
        saved = flow.save()
        return {"saved": saved, **_snapshot(flow)}

    @app.post("/draft/back")
    async def leave_draft(request: Request) -> dict[str, object]:
        flow = _flow(request)
        flow.back()
        return _snapshot(flow)

    @app.post("/summary")
    async def view_summary(request: Request) -> dict[str, object]:
        flow = _flow(request)
        flow.view_summary()
        return _snapshot(flow)

    @app.post("/summary/back")
    async def leave_summary(request: Request) -> dict[str, object]:
        flow = _flow(request)
        flow.leave_summary()
        return _snapshot(flow)

    @app.get("/share")
    async def share(request: Request, person: str | None = None) -> dict[str, str]:
        """Return a share payload and link for all orders or one person."""
        state_container: AppContainer = request.app.state.container
        flow = state_container.flow
        payload = flow.share_payload(person)
        link = flow.share_link(state_container.settings.public_base_url, person)
        return {"payload": payload, "link": link}

    @app.get("/export/report", response_class=PlainTextResponse)
    async def export_report(request: Request) -> PlainTextResponse:
        """Return the staff report as a text file download."""
        filename = export_filename(date.today())
        return PlainTextResponse(
            _flow(request).export_report(),
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/export/digest", response_class=PlainTextResponse)
    async def export_digest(request: Request) -> PlainTextResponse:
        return PlainTextResponse(_flow(request).export_digest())

    @app.post("/menu/scan")
    async def scan_menu(request: Request) -> dict[str, object]:
        """Replace the menu with one extracted from the uploaded image bytes."""
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=HTTP_UNPROCESSABLE,
                detail="Upload the menu photo as the request body.",
            )
        flow = _flow(request)
        outcome = await flow.scan_menu(image_bytes)
        return {"outcome": outcome.value, **_snapshot(flow)}

    return app


def _flow(request: Request) -> FlowController:
    state_container: AppContainer = request.app.state.container
    return state_container.flow


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def _dump_order(order: UserOrder) -> dict[str, object]:
    return order.model_dump(by_alias=True, exclude_none=True)


def _snapshot(flow: FlowController) -> dict[str, object]:
    """Summarize the session for the current view."""
    return {
        "view": flow.view.value,
        "person": flow.person,
        "processing": flow.processing,
        "scan_available": flow.extraction_service.is_configured,
        "members": [
            {"name": name, "ordered": name in flow.orders} for name in flow.roster
        ],
        "order_count": len(flow.orders),
        "pending": flow.pending_members(),
        "notices": [asdict(notice) for notice in flow.drain_notices()],
    }


def _draft_response(flow: FlowController) -> dict[str, object]:
    return {
        "person": flow.person,
        "draft": _dump_order(flow.draft) if flow.draft else None,
        "can_save": flow.can_save(),
    }
