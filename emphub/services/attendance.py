# emphub/services/attendance.py
"""
Attendance bookkeeping: one open record per employee per day, opened at
login and closed at logout.
"""

import logging
from datetime import date, datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from emphub.models.attendance import AttendanceRecord
from emphub.models.employee import Employee

logger = logging.getLogger(__name__)


def _open_record_for_today(db: Session, employee_id: int) -> Optional[AttendanceRecord]:
    today = datetime.utcnow().date()
    return db.query(AttendanceRecord).filter(
        AttendanceRecord.employee_id == employee_id,
        AttendanceRecord.date == today,
        AttendanceRecord.logout_time.is_(None)
    ).first()


def record_login(db: Session, employee_id: int) -> AttendanceRecord:
    """Open today's attendance record, reusing one that is still open"""
    existing = _open_record_for_today(db, employee_id)
    if existing:
        return existing

    now = datetime.utcnow()
    record = AttendanceRecord(
        employee_id=employee_id,
        login_time=now,
        date=now.date(),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Attendance login recorded for employee %s", employee_id)
    return record


def record_logout(db: Session, employee_id: int) -> Optional[AttendanceRecord]:
    """Close today's open record, None when there is nothing to close"""
    record = _open_record_for_today(db, employee_id)
    if not record:
        return None

    record.logout_time = datetime.utcnow()
    db.commit()
    db.refresh(record)
    logger.info("Attendance logout recorded for employee %s", employee_id)
    return record


def query_attendance(
    db: Session,
    employee_ids: Optional[List[int]] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    phone_number: Optional[str] = None,
) -> List[AttendanceRecord]:
    """
    Attendance rows joined to their employees.

    employee_ids=None means no restriction; an empty list matches nothing.
    phone_number is a substring match on the employee's mobile.
    """
    query = db.query(AttendanceRecord).join(Employee, Employee.id == AttendanceRecord.employee_id)

    if employee_ids is not None:
        if not employee_ids:
            return []
        query = query.filter(AttendanceRecord.employee_id.in_(employee_ids))
    if start_date:
        query = query.filter(AttendanceRecord.date >= start_date)
    if end_date:
        query = query.filter(AttendanceRecord.date <= end_date)
    if phone_number:
        query = query.filter(Employee.mobile.contains(phone_number))

    return query.order_by(AttendanceRecord.date.desc(), AttendanceRecord.login_time.desc()).all()


def with_employee(record: AttendanceRecord) -> dict:
    employee = record.employee
    return {
        "id": record.id,
        "employee_id": record.employee_id,
        "login_time": record.login_time,
        "logout_time": record.logout_time,
        "date": record.date,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
        "employee_name": employee.name if employee else None,
        "employee_code": employee.employee_id if employee else None,
        "employee_mobile": employee.mobile if employee else None,
        "user_type": employee.user_type if employee else None,
    }
