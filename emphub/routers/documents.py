# emphub/routers/documents.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from emphub.database import get_db
from emphub.models.document import DocumentType, EmployeeDocument
from emphub.models.employee import Employee
from emphub.schemas.document import MONTH_PATTERN, EmployeeDocumentCreate, EmployeeDocumentOut
from emphub.utils.auth import get_current_user, require_admin
from emphub.utils.roles import is_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employee-documents", tags=["Employee Documents"])

def _ensure_can_view(current_user: Employee, employee_id: int):
    if not is_admin(current_user) and current_user.id != employee_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only view your own documents"
        )

@router.post("", response_model=EmployeeDocumentOut, status_code=status.HTTP_201_CREATED)
def upload_document(
    document: EmployeeDocumentCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    if not db.query(Employee.id).filter(Employee.id == document.employee_id).first():
        raise HTTPException(status_code=404, detail="Employee not found")

    db_document = EmployeeDocument(
        employee_id=document.employee_id,
        document_type=document.document_type,
        document_url=document.document_url,
        month=document.month if document.document_type == DocumentType.PAYSLIP else None,
        uploaded_by=current_user.id,
    )
    db.add(db_document)
    db.commit()
    db.refresh(db_document)
    logger.info(
        "%s uploaded for employee %s by %s",
        document.document_type.value, document.employee_id, current_user.username
    )
    return db_document

@router.get("/{employee_id}", response_model=List[EmployeeDocumentOut])
def get_documents(
    employee_id: int,
    document_type: Optional[DocumentType] = Query(None),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _ensure_can_view(current_user, employee_id)
    query = db.query(EmployeeDocument).filter(EmployeeDocument.employee_id == employee_id)
    if document_type:
        query = query.filter(EmployeeDocument.document_type == document_type)
    return query.order_by(EmployeeDocument.uploaded_at.desc()).all()

@router.get("/{employee_id}/payslips/{month}", response_model=EmployeeDocumentOut)
def get_payslip(
    employee_id: int,
    month: str,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _ensure_can_view(current_user, employee_id)
    if not MONTH_PATTERN.match(month):
        raise HTTPException(status_code=400, detail="Month must use the YYYY-MM format")

    payslip = db.query(EmployeeDocument).filter(
        EmployeeDocument.employee_id == employee_id,
        EmployeeDocument.document_type == DocumentType.PAYSLIP,
        EmployeeDocument.month == month,
    ).order_by(EmployeeDocument.uploaded_at.desc()).first()
    if not payslip:
        raise HTTPException(status_code=404, detail="Payslip not found")
    return payslip

@router.get("/{employee_id}/offer-letter", response_model=EmployeeDocumentOut)
def get_offer_letter(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(get_current_user)
):
    _ensure_can_view(current_user, employee_id)
    letter = db.query(EmployeeDocument).filter(
        EmployeeDocument.employee_id == employee_id,
        EmployeeDocument.document_type == DocumentType.OFFER_LETTER,
    ).order_by(EmployeeDocument.uploaded_at.desc()).first()
    if not letter:
        raise HTTPException(status_code=404, detail="Offer letter not found")
    return letter

@router.delete("/{document_id}")
def delete_document(
    document_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    db_document = db.query(EmployeeDocument).filter(EmployeeDocument.id == document_id).first()
    if not db_document:
        raise HTTPException(status_code=404, detail="Document not found")

    db.delete(db_document)
    db.commit()
    logger.info("Document %s deleted by %s", document_id, current_user.username)
    return {"success": True}
