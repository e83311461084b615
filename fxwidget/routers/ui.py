from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from fxwidget.core.config import Settings
from fxwidget.services.amount_input import AmountInput, parse_amount
from fxwidget.services.converter_state import ConverterState
from fxwidget.services.rates.table_service import RateTableService
from .deps import get_app_settings, get_rate_table_service

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

ACTION_UPDATE = "update"
ACTION_SWAP = "swap"


def _render(
    request: Request,
    state: ConverterState,
    svc: RateTableService,
    settings: Settings,
) -> HTMLResponse:
    table = svc.get_table()
    context: Dict[str, Any] = {
        "app_name": settings.app_name,
        "version": settings.version,
        "currencies": table.currencies(),
        "state": state,
        "view": state.display(table),
        "as_of": table.date,
        "amount_rejected": not state.amount_input.accepted,
    }
    return templates.TemplateResponse(request, "converter.html", context)


@router.get("/", response_class=HTMLResponse)
async def ui_home(
    request: Request,
    amount: Optional[str] = Query(None),
    from_code: Optional[str] = Query(None),
    to_code: Optional[str] = Query(None),
    settings: Settings = Depends(get_app_settings),
    svc: RateTableService = Depends(get_rate_table_service),
):
    state = ConverterState.initial(
        settings.default_amount,
        from_code or settings.default_from,
        to_code or settings.default_to,
    )
    if amount is not None:
        state = state.with_amount_text(amount)
    return _render(request, state, svc, settings)


@router.post("/", response_class=HTMLResponse)
async def ui_submit(
    request: Request,
    amount_raw: str = Form(""),
    last_amount: str = Form(""),
    from_code: str = Form(...),
    to_code: str = Form(...),
    action: str = Form(ACTION_UPDATE),
    settings: Settings = Depends(get_app_settings),
    svc: RateTableService = Depends(get_rate_table_service),
):
    """Apply one user action and re-render.

    The page carries the last accepted amount in a hidden field so an invalid
    edit can fall back to it without any server-side session.
    """
    previous = parse_amount(last_amount)
    if previous is None:
        previous = settings.default_amount
    state = ConverterState(
        amount_input=AmountInput.from_amount(previous),
        from_code=from_code.upper(),
        to_code=to_code.upper(),
    ).with_amount_text(amount_raw)
    if action == ACTION_SWAP:
        state = state.swapped()
    return _render(request, state, svc, settings)
