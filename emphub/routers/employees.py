# emphub/routers/employees.py
import logging
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from emphub.database import get_db
from emphub.models.employee import Employee
from emphub.models.document import EmployeeDocument
from emphub.models.reports import SalesReport, VerificationReport, VisitReport
from emphub.schemas.employee import EmployeeDetail, EmployeeOut, EmployeeUpdate
from emphub.utils.auth import get_current_user, require_admin
from emphub.utils.filters import filter_by_role, filter_by_text, resolve_name, search_employees
from emphub.utils.hierarchy import HierarchyManager
from emphub.utils.roles import UserType, role_of
from emphub.utils.security import get_password_hash

logger = logging.getLogger(__name__)

router = APIRouter()

def _with_names(employee: Employee, all_employees: List[Employee]) -> EmployeeDetail:
    return EmployeeDetail(
        **EmployeeOut.model_validate(employee).model_dump(),
        manager_name=resolve_name(employee, all_employees, "manager"),
        bdm_name=resolve_name(employee, all_employees, "bdm"),
    )

@router.get("/employees", response_model=List[EmployeeDetail])
def get_all_employees(
    search: Optional[str] = Query(None, description="Matches name, employee code, mobile or job location"),
    role: Optional[str] = Query(None, description="User type, or 'all'"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """List employees with their manager and BDM names resolved"""
    all_employees = HierarchyManager(db).get_all()
    employees = filter_by_role(filter_by_text(all_employees, search), role)
    return [_with_names(emp, all_employees) for emp in employees]

@router.get("/employees/bdm/{bdm_id}", response_model=List[EmployeeOut])
def get_bdes_of_bdm(
    bdm_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """BDEs reporting to a BDM"""
    return [
        emp for emp in HierarchyManager(db).get_users_by_bdm(bdm_id)
        if role_of(emp) is UserType.BDE
    ]

@router.get("/search-employees", response_model=List[EmployeeOut])
def search(
    q: str = Query("", description="Search text"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    return search_employees(HierarchyManager(db).get_all(), q)

@router.get("/employees/{employee_id}", response_model=EmployeeDetail)
def get_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    hierarchy_manager = HierarchyManager(db)
    employee = hierarchy_manager.get_employee(employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return _with_names(employee, hierarchy_manager.get_all())

@router.put("/employees/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: int,
    employee_update: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Update an employee.

    Admins can update anyone, managers only employees whose manager_id is
    theirs, BDMs only their own BDEs. BDEs cannot update employees.
    """
    db_employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not db_employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    role = role_of(current_user)
    if role is not UserType.ADMIN:
        if role is UserType.BDE or role is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have permission to update employees"
            )
        if role is UserType.MANAGER and db_employee.manager_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only update your own team members"
            )
        if role is UserType.BDM and db_employee.bdm_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only update your own team members"
            )
        # Reporting lines and roles go through the assignment endpoints
        if employee_update.user_type is not None or "manager_id" in employee_update.model_fields_set \
                or "bdm_id" in employee_update.model_fields_set:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only admins can change roles or reporting lines"
            )

    update_data = employee_update.model_dump(exclude_unset=True)

    # Handle password update separately (hash it if provided)
    if 'password' in update_data:
        password = update_data.pop('password')
        if password:
            db_employee.hashed_password = get_password_hash(password)

    if 'user_type' in update_data and update_data['user_type'] is not None:
        update_data['user_type'] = UserType(update_data['user_type']).value

    for field in ("manager_id", "bdm_id"):
        ref_id = update_data.get(field)
        if ref_id is not None:
            if ref_id == employee_id:
                raise HTTPException(status_code=400, detail="Employee cannot report to themselves")
            if not db.query(Employee.id).filter(Employee.id == ref_id).first():
                raise HTTPException(status_code=400, detail=f"Referenced {field} {ref_id} does not exist")

    for field, value in update_data.items():
        setattr(db_employee, field, value)
    db_employee.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(db_employee)
    logger.info("Employee %s updated by %s", db_employee.employee_id, current_user.username)
    return db_employee

def _release_employee_rows(db: Session, employee_id: int):
    """Remove the employee's own documents and reports, keep the ones they only signed off"""
    for model in (VisitReport, SalesReport, VerificationReport):
        db.query(model).filter(model.bde_id == employee_id).delete(synchronize_session=False)
    db.query(EmployeeDocument).filter(EmployeeDocument.employee_id == employee_id).delete(synchronize_session=False)

    db.query(SalesReport).filter(SalesReport.approved_by == employee_id).update(
        {SalesReport.approved_by: None}, synchronize_session=False
    )
    db.query(VerificationReport).filter(VerificationReport.approved_by == employee_id).update(
        {VerificationReport.approved_by: None}, synchronize_session=False
    )
    db.query(VerificationReport).filter(VerificationReport.rejected_by == employee_id).update(
        {VerificationReport.rejected_by: None}, synchronize_session=False
    )
    db.query(EmployeeDocument).filter(EmployeeDocument.uploaded_by == employee_id).update(
        {EmployeeDocument.uploaded_by: None}, synchronize_session=False
    )

@router.delete("/employees/{employee_id}")
def delete_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    """Delete an employee - admin only"""
    db_employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not db_employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    if db_employee.id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account"
        )

    # Clear reporting lines that point at the deleted employee
    db.query(Employee).filter(Employee.manager_id == employee_id).update(
        {Employee.manager_id: None}, synchronize_session=False
    )
    db.query(Employee).filter(Employee.bdm_id == employee_id).update(
        {Employee.bdm_id: None}, synchronize_session=False
    )
    _release_employee_rows(db, employee_id)
    db.delete(db_employee)
    db.commit()
    logger.info("Employee %s deleted by %s", db_employee.employee_id, current_user.username)
    return {"success": True}

