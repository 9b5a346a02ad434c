# emphub/routers/sales_reports.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from emphub.database import get_db
from emphub.models.employee import Employee
from emphub.models.product import Product
from emphub.models.reports import ReportStatus, SalesReport
from emphub.schemas.reports import PointsSummary, SalesReportCreate, SalesReportOut
from emphub.services.reports import day_bounds, ensure_can_view_bde, month_bounds, resolve_bde_id, scope_query
from emphub.utils.auth import get_current_user, require_admin
from emphub.utils.roles import is_bde

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sales-reports", tags=["Sales Reports"])

def _approved_points(db: Session, current_user: Employee, bde_id: Optional[int], start: datetime, end: datetime) -> PointsSummary:
    """Sum approved points in [start, end) for one BDE or the caller's whole scope"""
    if is_bde(current_user):
        bde_id = current_user.id
    elif bde_id is not None:
        ensure_can_view_bde(db, current_user, bde_id)

    query = db.query(func.coalesce(func.sum(SalesReport.points), 0)).filter(
        SalesReport.status == ReportStatus.APPROVED,
        SalesReport.approved_at >= start,
        SalesReport.approved_at < end,
    )
    if bde_id is not None:
        query = query.filter(SalesReport.bde_id == bde_id)
    else:
        query = scope_query(query, SalesReport.bde_id, db, current_user)
    return PointsSummary(bde_id=bde_id, points=int(query.scalar() or 0))

@router.post("", response_model=SalesReportOut, status_code=status.HTTP_201_CREATED)
def create_sales_report(
    report: SalesReportCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    bde_id = resolve_bde_id(db, current_user, report.bde_id)

    product = db.query(Product).filter(Product.id == report.product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    db_report = SalesReport(
        **report.model_dump(exclude={"bde_id"}),
        bde_id=bde_id,
        points=product.points,
        status=ReportStatus.PENDING,
    )
    db.add(db_report)
    db.commit()
    db.refresh(db_report)
    logger.info("Sales report %s filed for BDE %s (%s points pending)", db_report.id, bde_id, product.points)
    return db_report

@router.get("", response_model=List[SalesReportOut])
def get_sales_reports(
    status_filter: Optional[ReportStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    query = scope_query(db.query(SalesReport), SalesReport.bde_id, db, current_user)
    if status_filter:
        query = query.filter(SalesReport.status == status_filter)
    return query.order_by(SalesReport.created_at.desc()).all()

@router.get("/pending", response_model=List[SalesReportOut])
def get_pending_sales_reports(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    return db.query(SalesReport).filter(
        SalesReport.status == ReportStatus.PENDING
    ).order_by(SalesReport.created_at).all()

@router.get("/stats/today", response_model=PointsSummary)
def get_today_points(
    bde_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    start, end = day_bounds(datetime.utcnow().date())
    return _approved_points(db, current_user, bde_id, start, end)

@router.get("/stats/month", response_model=PointsSummary)
def get_month_points(
    bde_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    now = datetime.utcnow()
    start, end = month_bounds(now.year, now.month)
    return _approved_points(db, current_user, bde_id, start, end)

@router.get("/month/{year}/{month}", response_model=List[SalesReportOut])
def get_sales_reports_for_month(
    year: int,
    month: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    start, end = month_bounds(year, month)
    query = scope_query(db.query(SalesReport), SalesReport.bde_id, db, current_user)
    return query.filter(
        SalesReport.created_at >= start, SalesReport.created_at < end
    ).order_by(SalesReport.created_at.desc()).all()

@router.get("/bde/{bde_id}", response_model=List[SalesReportOut])
def get_sales_reports_by_bde(
    bde_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    ensure_can_view_bde(db, current_user, bde_id)
    return db.query(SalesReport).filter(
        SalesReport.bde_id == bde_id
    ).order_by(SalesReport.created_at.desc()).all()

@router.post("/{report_id}/approve", response_model=SalesReportOut)
def approve_sales_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    db_report = db.query(SalesReport).filter(SalesReport.id == report_id).first()
    if not db_report:
        raise HTTPException(status_code=404, detail="Sales report not found")
    if db_report.status != ReportStatus.PENDING:
        raise HTTPException(status_code=400, detail=f"Report is already {db_report.status.value}")

    db_report.status = ReportStatus.APPROVED
    db_report.approved_by = current_user.id
    db_report.approved_at = datetime.utcnow()
    db.commit()
    db.refresh(db_report)
    logger.info("Sales report %s approved by %s", report_id, current_user.username)
    return db_report
