# emphub/routers/bank_details.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from datetime import datetime

from emphub.database import get_db
from emphub.models.employee import Employee, BankDetail
from emphub.schemas.bank import BankDetailCreate, BankDetailOut
from emphub.utils.auth import get_current_user
from emphub.utils.roles import is_admin

router = APIRouter(prefix="/bank-details", tags=["Bank Details"])

@router.get("/{employee_id}", response_model=BankDetailOut)
def get_bank_details(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Users can only see their own bank details unless they're admin"""
    if not is_admin(current_user) and current_user.id != employee_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own bank details"
        )

    details = db.query(BankDetail).filter(BankDetail.employee_id == employee_id).first()
    if not details:
        raise HTTPException(status_code=404, detail="Bank details not found")
    return details

@router.post("", response_model=BankDetailOut)
def upsert_bank_details(
    payload: BankDetailCreate,
    response: Response,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    """Create or update bank details - 201 on create, 200 on update"""
    if not is_admin(current_user) and current_user.id != payload.employee_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only update your own bank details"
        )

    if not db.query(Employee.id).filter(Employee.id == payload.employee_id).first():
        raise HTTPException(status_code=404, detail="Employee not found")

    details = db.query(BankDetail).filter(BankDetail.employee_id == payload.employee_id).first()
    if details:
        for field, value in payload.model_dump(exclude={"employee_id"}).items():
            setattr(details, field, value)
        details.updated_at = datetime.utcnow()
        response.status_code = status.HTTP_200_OK
    else:
        details = BankDetail(**payload.model_dump())
        db.add(details)
        response.status_code = status.HTTP_201_CREATED

    db.commit()
    db.refresh(details)
    return details
