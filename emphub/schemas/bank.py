from pydantic import BaseModel, Field
from datetime import datetime

class BankDetailCreate(BaseModel):
    employee_id: int
    bank_name: str = Field(min_length=1)
    ifsc_code: str = Field(min_length=1)
    account_number: str = Field(min_length=1)

class BankDetailOut(BaseModel):
    id: int
    employee_id: int
    bank_name: str
    ifsc_code: str
    account_number: str
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }
