# emphub/routers/hierarchy.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from emphub.database import get_db
from emphub.models.employee import Employee
from emphub.schemas.employee import EmployeeOut
from emphub.schemas.hierarchy import ManagerNode
from emphub.utils.auth import get_current_user, require_admin
from emphub.utils.hierarchy import HierarchyManager, build_hierarchy, potential_supervisors, visible_records
from emphub.utils.roles import UserType, can_assign_to_bdm, can_assign_to_manager

router = APIRouter()


# 1. Organisation chart (manager -> BDM -> BDE) limited to what the caller may see
@router.get("/hierarchy", response_model=List[ManagerNode])
def get_hierarchy(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    employees = HierarchyManager(db).get_all()
    return build_hierarchy(visible_records(current_user, employees))


# 2. Direct reports
@router.get("/managers/{manager_id}/employees", response_model=List[EmployeeOut])
def get_employees_by_manager(
    manager_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    return HierarchyManager(db).get_users_by_manager(manager_id)


@router.get("/bdms/{bdm_id}/employees", response_model=List[EmployeeOut])
def get_employees_by_bdm(
    bdm_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    return HierarchyManager(db).get_users_by_bdm(bdm_id)


# 3. Assignment management (admin only)
@router.post("/employees/{employee_id}/assign-manager/{manager_id}", response_model=EmployeeOut)
def assign_manager(
    employee_id: int,
    manager_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin),
):
    hierarchy_manager = HierarchyManager(db)
    employee = hierarchy_manager.get_employee(employee_id)
    manager = hierarchy_manager.get_employee(manager_id)
    if employee and manager and not can_assign_to_manager(employee, manager):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This employee cannot be assigned to that manager",
        )

    updated = hierarchy_manager.assign_to_manager(employee_id, manager_id)
    if not updated:
        raise HTTPException(status_code=404, detail="Employee or manager not found")
    return updated


@router.post("/employees/{employee_id}/assign-bdm/{bdm_id}", response_model=EmployeeOut)
def assign_bdm(
    employee_id: int,
    bdm_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin),
):
    hierarchy_manager = HierarchyManager(db)
    employee = hierarchy_manager.get_employee(employee_id)
    bdm = hierarchy_manager.get_employee(bdm_id)
    if employee and bdm and not can_assign_to_bdm(employee, bdm):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only BDEs can be assigned to a BDM",
        )

    updated = hierarchy_manager.assign_to_bdm(employee_id, bdm_id)
    if not updated:
        raise HTTPException(
            status_code=404,
            detail="Employee, BDM not found, or BDM doesn't have a manager",
        )
    return updated


@router.post("/employees/{employee_id}/remove-assignment", response_model=EmployeeOut)
def remove_assignment(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin),
):
    updated = HierarchyManager(db).remove_assignment(employee_id)
    if not updated:
        raise HTTPException(status_code=404, detail="Employee not found")
    return updated


@router.get("/employees/{employee_id}/potential-supervisors", response_model=List[EmployeeOut])
def get_potential_supervisors(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    hierarchy_manager = HierarchyManager(db)
    employee = hierarchy_manager.get_employee(employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return potential_supervisors(employee, hierarchy_manager.get_all())


# 4. Employees by role
@router.get("/roles/managers", response_model=List[EmployeeOut])
def get_managers(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    return HierarchyManager(db).get_users_by_role(UserType.MANAGER)


@router.get("/roles/bdms", response_model=List[EmployeeOut])
def get_bdms(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    return HierarchyManager(db).get_users_by_role(UserType.BDM)


@router.get("/roles/bdes", response_model=List[EmployeeOut])
def get_bdes(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user),
):
    return HierarchyManager(db).get_users_by_role(UserType.BDE)
