# emphub/routers/visit_reports.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime

from emphub.database import get_db
from emphub.models.employee import Employee
from emphub.models.reports import VisitReport
from emphub.schemas.reports import VisitReportCreate, VisitReportOut
from emphub.services.reports import day_bounds, ensure_can_view_bde, resolve_bde_id, scope_query
from emphub.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/visit-reports", tags=["Visit Reports"])

@router.post("", response_model=VisitReportOut, status_code=status.HTTP_201_CREATED)
def create_visit_report(
    report: VisitReportCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    bde_id = resolve_bde_id(db, current_user, report.bde_id)

    db_report = VisitReport(**report.model_dump(exclude={"bde_id"}), bde_id=bde_id)
    db.add(db_report)
    db.commit()
    db.refresh(db_report)
    logger.info("Visit report %s filed for BDE %s", db_report.id, bde_id)
    return db_report

@router.get("", response_model=List[VisitReportOut])
def get_visit_reports(
    location: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Visit reports from the caller's team, newest first"""
    if start_date and end_date and end_date < start_date:
        raise HTTPException(status_code=400, detail="endDate must not be before startDate")

    query = scope_query(db.query(VisitReport), VisitReport.bde_id, db, current_user)
    if location:
        query = query.filter(VisitReport.location.ilike(f"%{location}%"))
    if start_date:
        query = query.filter(VisitReport.created_at >= day_bounds(start_date)[0])
    if end_date:
        query = query.filter(VisitReport.created_at < day_bounds(end_date)[1])
    return query.order_by(VisitReport.created_at.desc()).all()

@router.get("/bde/{bde_id}", response_model=List[VisitReportOut])
def get_visit_reports_by_bde(
    bde_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    ensure_can_view_bde(db, current_user, bde_id)
    return db.query(VisitReport).filter(
        VisitReport.bde_id == bde_id
    ).order_by(VisitReport.created_at.desc()).all()

@router.get("/count/today")
def count_today_visits(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    start, end = day_bounds(datetime.utcnow().date())
    query = scope_query(db.query(VisitReport), VisitReport.bde_id, db, current_user)
    count = query.filter(VisitReport.created_at >= start, VisitReport.created_at < end).count()
    return {"count": count}
