# emphub/models/document.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from emphub.database import Base
import enum

class DocumentType(str, enum.Enum):
    PAYSLIP = "payslip"
    OFFER_LETTER = "offer_letter"

class EmployeeDocument(Base):
    __tablename__ = "employee_documents"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    document_type = Column(Enum(DocumentType), nullable=False)
    document_url = Column(Text, nullable=False)  # URL or base64 payload
    month = Column(String(7), nullable=True)  # YYYY-MM, payslips only
    uploaded_by = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    uploaded_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    employee = relationship("Employee", foreign_keys=[employee_id])
    uploader = relationship("Employee", foreign_keys=[uploaded_by])
