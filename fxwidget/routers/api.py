from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from fxwidget.models.conversion import ConversionDisplay, ConversionRequest
from fxwidget.services.rates.conversion import describe
from fxwidget.services.rates.table_service import RateTableService
from .deps import get_rate_table_service

"""JSON API over the conversion engine.

Endpoints:
    - GET /api/rates    -> the session rate table plus sorted currency list
    - GET /api/convert  -> display values for one conversion request
"""

router = APIRouter(prefix="/api", tags=["rates"])


class RateTableOut(BaseModel):
    base: str
    date: Optional[str]
    currencies: List[str]
    rates: Dict[str, float]


@router.get("/rates", response_model=RateTableOut, summary="Current rate table")
async def get_rates(svc: RateTableService = Depends(get_rate_table_service)):
    table = svc.get_table()
    return RateTableOut(
        base=table.base,
        date=table.date,
        currencies=table.currencies(),
        rates=dict(table.rates),
    )


@router.get(
    "/convert", response_model=ConversionDisplay, summary="Convert an amount"
)
async def get_conversion(
    amount: float = Query(..., ge=0, allow_inf_nan=False, description="Amount in from_code"),
    from_code: str = Query("USD", min_length=1, max_length=8),
    to_code: str = Query("EUR", min_length=1, max_length=8),
    svc: RateTableService = Depends(get_rate_table_service),
):
    req = ConversionRequest(amount=amount, from_code=from_code, to_code=to_code)
    return describe(svc.get_table(), req)
