# emphub/routers/attendance.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date, datetime

from emphub.database import get_db
from emphub.models.employee import Employee
from emphub.schemas.attendance import AttendanceOut, AttendanceWithEmployee
from emphub.services.attendance import query_attendance, with_employee
from emphub.utils.auth import get_current_user
from emphub.utils.hierarchy import HierarchyManager

router = APIRouter(prefix="/attendance", tags=["Attendance"])

def _scoped_ids(db: Session, current_user: Employee, employee_id: Optional[int]) -> Optional[List[int]]:
    """Restrict the query to the caller's team, optionally narrowed to one employee"""
    scope = HierarchyManager(db).get_team_member_ids(current_user)
    if employee_id is None:
        return scope
    if scope is not None and employee_id not in scope:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view attendance for your own team"
        )
    return [employee_id]

@router.get("", response_model=List[AttendanceWithEmployee])
def get_attendance(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    employee_id: Optional[int] = Query(None, alias="employeeId"),
    phone_number: Optional[str] = Query(None, alias="phoneNumber"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Attendance records visible to the caller, filterable by date range, employee and phone"""
    if start_date and end_date and end_date < start_date:
        raise HTTPException(status_code=400, detail="endDate must not be before startDate")

    records = query_attendance(
        db,
        employee_ids=_scoped_ids(db, current_user, employee_id),
        start_date=start_date,
        end_date=end_date,
        phone_number=phone_number,
    )
    return [with_employee(record) for record in records]

@router.get("/today", response_model=List[AttendanceWithEmployee])
def get_today_attendance(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    today = datetime.utcnow().date()
    records = query_attendance(
        db,
        employee_ids=_scoped_ids(db, current_user, None),
        start_date=today,
        end_date=today,
    )
    return [with_employee(record) for record in records]

@router.get("/me", response_model=List[AttendanceOut])
def get_my_attendance(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return query_attendance(db, employee_ids=[current_user.id])
