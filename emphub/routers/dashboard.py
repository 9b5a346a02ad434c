# emphub/routers/dashboard.py
from collections import Counter
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session
from datetime import datetime

from emphub.database import get_db
from emphub.models.employee import Employee
from emphub.models.reports import ReportStatus, SalesReport, VisitReport
from emphub.services.reports import day_bounds, scope_query
from emphub.utils.auth import get_current_user
from emphub.utils.hierarchy import HierarchyManager, visible_records
from emphub.utils.roles import UserType, role_of

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

@router.get("/overview")
def get_overview(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Headline numbers for the caller's part of the organisation"""
    employees = visible_records(current_user, HierarchyManager(db).get_all())
    by_role = Counter(role_of(emp) for emp in employees)

    start, end = day_bounds(datetime.utcnow().date())
    visits_today = scope_query(db.query(VisitReport), VisitReport.bde_id, db, current_user).filter(
        VisitReport.created_at >= start, VisitReport.created_at < end
    ).count()
    points_today = scope_query(
        db.query(func.coalesce(func.sum(SalesReport.points), 0)), SalesReport.bde_id, db, current_user
    ).filter(
        SalesReport.status == ReportStatus.APPROVED,
        SalesReport.approved_at >= start,
        SalesReport.approved_at < end,
    ).scalar()

    return {
        "total_employees": len(employees),
        "counts_by_role": {role.value: by_role.get(role, 0) for role in UserType},
        "visits_today": visits_today,
        "approved_points_today": int(points_today or 0),
    }
