from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
import re
from emphub.models.document import DocumentType

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

class EmployeeDocumentCreate(BaseModel):
    employee_id: int = Field(gt=0)
    document_type: DocumentType
    document_url: str = Field(min_length=1)
    month: Optional[str] = None

    @field_validator('month')
    @classmethod
    def month_format(cls, v):
        if v is not None and not MONTH_PATTERN.match(v):
            raise ValueError('Month must use the YYYY-MM format')
        return v

    @model_validator(mode='after')
    def payslip_needs_month(self):
        if self.document_type == DocumentType.PAYSLIP and not self.month:
            raise ValueError('Month is required for payslips')
        return self

class EmployeeDocumentOut(BaseModel):
    id: int
    employee_id: int
    document_type: DocumentType
    document_url: str
    month: Optional[str] = None
    uploaded_by: Optional[int] = None
    uploaded_at: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }
