# emphub/routers/auth.py
import logging
from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session

from emphub.database import get_db
from emphub.models.employee import Employee, BankDetail
from emphub.schemas.employee import EmployeeCreate, EmployeeLogin, EmployeeOut, ChangePassword
from emphub.schemas.tokens import Token
from emphub.utils.auth import get_current_user, require_admin
from emphub.utils.ids import next_employee_code
from emphub.utils.security import get_password_hash, verify_password, create_access_token
from emphub.services.attendance import record_login, record_logout

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=EmployeeOut, status_code=status.HTTP_201_CREATED)
def register(
    employee: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    """Create an employee account - admin only, employee code derived from the role"""
    existing_user = db.query(Employee).filter(Employee.username == employee.username).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Username already exists")

    for field in ("manager_id", "bdm_id"):
        ref_id = getattr(employee, field)
        if ref_id and not db.query(Employee.id).filter(Employee.id == ref_id).first():
            raise HTTPException(status_code=400, detail=f"Referenced {field} {ref_id} does not exist")

    new_user = Employee(
        employee_id=next_employee_code(db, employee.user_type),
        name=employee.name,
        mobile=employee.mobile,
        job_location=employee.job_location,
        user_type=employee.user_type.value,
        salary=employee.salary,
        joining_date=employee.joining_date,
        travel_allowance=employee.travel_allowance,
        referral_name=employee.referral_name,
        remarks=employee.remarks,
        manager_id=employee.manager_id or None,
        bdm_id=employee.bdm_id or None,
        username=employee.username,
        hashed_password=get_password_hash(employee.password),
    )
    db.add(new_user)
    db.flush()

    if employee.bank_details:
        db.add(BankDetail(employee_id=new_user.id, **employee.bank_details.model_dump()))

    db.commit()
    db.refresh(new_user)
    logger.info("Registered %s (%s) by %s", new_user.employee_id, new_user.user_type, current_user.username)
    return new_user

@router.post("/login", response_model=Token)
def login(credentials: EmployeeLogin, db: Session = Depends(get_db)):
    db_user = db.query(Employee).filter(Employee.username == credentials.username).first()
    if not db_user or not verify_password(credentials.password, db_user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    record_login(db, db_user.id)
    token = create_access_token(data={"sub": db_user.username})
    logger.info("User %s logged in", db_user.username)
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": EmployeeOut.model_validate(db_user),
    }

@router.post("/logout")
def logout(db: Session = Depends(get_db), current_user: Employee = Depends(get_current_user)):
    """Close today's attendance record, the token itself simply expires"""
    record = record_logout(db, current_user.id)
    return {"success": True, "attendance_closed": record is not None}

@router.get("/user", response_model=EmployeeOut)
def get_current_user_info(current_user: Employee = Depends(get_current_user)):
    return current_user

@router.post("/user/change-password")
def change_password(
    payload: ChangePassword,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    if not verify_password(payload.current_password, current_user.hashed_password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    current_user.hashed_password = get_password_hash(payload.new_password)
    current_user.updated_at = datetime.utcnow()
    db.commit()
    logger.info("Password changed for %s", current_user.username)
    return {"success": True}
