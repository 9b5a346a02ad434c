from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from emphub.utils.roles import UserType


def canonical_user_type(value):
    """Map any accepted spelling onto the canonical role value, leave unknown values alone"""
    if value is None:
        return value
    try:
        return UserType(value).value
    except ValueError:
        return value


class BankDetailsIn(BaseModel):
    bank_name: str = Field(min_length=1)
    ifsc_code: str = Field(min_length=1)
    account_number: str = Field(min_length=1)


class EmployeeCreate(BaseModel):
    username: str = Field(min_length=4)
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    mobile: str = Field(min_length=10)
    user_type: UserType
    job_location: str = Field(min_length=1)
    salary: float = Field(gt=0)
    joining_date: date
    travel_allowance: float = Field(ge=0)
    referral_name: Optional[str] = None
    remarks: Optional[str] = None
    manager_id: Optional[int] = None
    bdm_id: Optional[int] = None
    bank_details: Optional[BankDetailsIn] = None

    @field_validator('user_type', mode='before')
    @classmethod
    def normalize_user_type(cls, v):
        if isinstance(v, str):
            return UserType(v)
        return v


class EmployeeLogin(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ChangePassword(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class EmployeeOut(BaseModel):
    id: int
    employee_id: Optional[str] = None
    name: Optional[str] = None
    mobile: Optional[str] = None
    job_location: Optional[str] = None
    user_type: Optional[str] = None
    salary: Optional[float] = None
    joining_date: Optional[date] = None
    travel_allowance: Optional[float] = None
    referral_name: Optional[str] = None
    remarks: Optional[str] = None
    manager_id: Optional[int] = None
    bdm_id: Optional[int] = None
    username: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

    @field_validator('user_type', mode='before')
    @classmethod
    def normalize_user_type(cls, v):
        return canonical_user_type(v)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    mobile: Optional[str] = None
    job_location: Optional[str] = None
    user_type: Optional[UserType] = None
    salary: Optional[float] = Field(default=None, gt=0)
    joining_date: Optional[date] = None
    travel_allowance: Optional[float] = Field(default=None, ge=0)
    referral_name: Optional[str] = None
    remarks: Optional[str] = None
    manager_id: Optional[int] = None
    bdm_id: Optional[int] = None
    password: Optional[str] = None

    @field_validator('user_type', mode='before')
    @classmethod
    def normalize_user_type(cls, v):
        if isinstance(v, str):
            return UserType(v)
        return v


class EmployeeDetail(EmployeeOut):
    # Resolved from manager_id / bdm_id: a name, "None" or "Unknown"
    manager_name: str = "None"
    bdm_name: str = "None"
