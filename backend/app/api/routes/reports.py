"""
Settlement report routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import date
from app.db.session import get_db
from app.schemas.settlement import SettlementReport, SettlementShareResponse
from app.services.report_formatter import build_share_link, format_share_message
from app.services.settlement_service import build_settlement_report

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/settlement", response_model=SettlementReport)
async def get_settlement_report(
    restaurant_id: int,
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db)
):
    """Payout report of a restaurant's delivered orders between two dates (inclusive)."""
    return build_settlement_report(restaurant_id, start_date, end_date, db)


@router.get("/settlement/share", response_model=SettlementShareResponse)
async def share_settlement_report(
    restaurant_id: int,
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db)
):
    """Text message and share link for a settlement report."""
    report = build_settlement_report(restaurant_id, start_date, end_date, db)
    message = format_share_message(report)
    return SettlementShareResponse(
        message=message,
        share_link=build_share_link(report, message)
    )
