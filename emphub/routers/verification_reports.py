# emphub/routers/verification_reports.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from emphub.database import get_db
from emphub.models.employee import Employee
from emphub.models.reports import ReportStatus, VerificationReport
from emphub.schemas.reports import VerificationReject, VerificationReportCreate, VerificationReportOut
from emphub.services.reports import ensure_can_view_bde, resolve_bde_id, scope_query
from emphub.utils.auth import get_current_user, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verification-reports", tags=["Verification Reports"])

def _get_pending(db: Session, report_id: int) -> VerificationReport:
    db_report = db.query(VerificationReport).filter(VerificationReport.id == report_id).first()
    if not db_report:
        raise HTTPException(status_code=404, detail="Verification report not found")
    if db_report.status != ReportStatus.PENDING:
        raise HTTPException(status_code=400, detail=f"Report is already {db_report.status.value}")
    return db_report

@router.post("", response_model=VerificationReportOut, status_code=status.HTTP_201_CREATED)
def create_verification_report(
    report: VerificationReportCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    bde_id = resolve_bde_id(db, current_user, report.bde_id)

    db_report = VerificationReport(
        **report.model_dump(exclude={"bde_id"}),
        bde_id=bde_id,
        status=ReportStatus.PENDING,
    )
    db.add(db_report)
    db.commit()
    db.refresh(db_report)
    logger.info("Verification report %s filed for BDE %s", db_report.id, bde_id)
    return db_report

@router.get("", response_model=List[VerificationReportOut])
def get_verification_reports(
    q: Optional[str] = Query(None, description="Matches merchant, business name or mobile"),
    status_filter: Optional[ReportStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    query = scope_query(db.query(VerificationReport), VerificationReport.bde_id, db, current_user)
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(or_(
            VerificationReport.merchant_name.ilike(pattern),
            VerificationReport.business_name.ilike(pattern),
            VerificationReport.mobile_number.ilike(pattern),
        ))
    if status_filter:
        query = query.filter(VerificationReport.status == status_filter)
    return query.order_by(VerificationReport.created_at.desc()).all()

@router.get("/pending", response_model=List[VerificationReportOut])
def get_pending_verification_reports(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    return db.query(VerificationReport).filter(
        VerificationReport.status == ReportStatus.PENDING
    ).order_by(VerificationReport.created_at).all()

@router.get("/bde/{bde_id}", response_model=List[VerificationReportOut])
def get_verification_reports_by_bde(
    bde_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    ensure_can_view_bde(db, current_user, bde_id)
    return db.query(VerificationReport).filter(
        VerificationReport.bde_id == bde_id
    ).order_by(VerificationReport.created_at.desc()).all()

@router.post("/{report_id}/approve", response_model=VerificationReportOut)
def approve_verification_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    db_report = _get_pending(db, report_id)
    db_report.status = ReportStatus.APPROVED
    db_report.approved_by = current_user.id
    db_report.approved_at = datetime.utcnow()
    db.commit()
    db.refresh(db_report)
    logger.info("Verification report %s approved by %s", report_id, current_user.username)
    return db_report

@router.post("/{report_id}/reject", response_model=VerificationReportOut)
def reject_verification_report(
    report_id: int,
    rejection: VerificationReject,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    db_report = _get_pending(db, report_id)
    db_report.status = ReportStatus.REJECTED
    db_report.rejected_by = current_user.id
    db_report.rejected_at = datetime.utcnow()
    db_report.rejection_reason = rejection.reason
    db.commit()
    db.refresh(db_report)
    logger.info("Verification report %s rejected by %s", report_id, current_user.username)
    return db_report
