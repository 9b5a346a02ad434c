# emphub/services/reports.py
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from emphub.models.employee import Employee
from emphub.utils.hierarchy import HierarchyManager
from emphub.utils.roles import UserType, role_of


def resolve_bde_id(db: Session, current_user: Employee, bde_id: Optional[int]) -> int:
    """Decide which BDE a new report belongs to.

    BDEs always file for themselves. Admins file on behalf of a BDE and must
    name one. Everyone else is refused.
    """
    role = role_of(current_user)
    if role is UserType.BDE:
        if bde_id is not None and bde_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="BDEs can only submit reports for themselves"
            )
        return current_user.id

    if role is not UserType.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only BDEs and admins can submit reports"
        )

    if bde_id is None:
        raise HTTPException(status_code=400, detail="bde_id is required when submitting on behalf of a BDE")
    bde = HierarchyManager(db).get_employee(bde_id)
    if not bde or role_of(bde) is not UserType.BDE:
        raise HTTPException(status_code=404, detail="BDE not found")
    return bde.id


def scope_query(query, bde_column, db: Session, current_user: Employee):
    """Limit a report query to the BDEs the caller may see"""
    scope = HierarchyManager(db).get_scoped_bde_ids(current_user)
    if scope is None:
        return query
    return query.filter(bde_column.in_(scope))


def ensure_can_view_bde(db: Session, current_user: Employee, bde_id: int):
    if not HierarchyManager(db).can_view_bde(current_user, bde_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view reports for your own team"
        )


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail="Month must be between 1 and 12")
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return start, end
