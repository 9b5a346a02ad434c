from pydantic import BaseModel
from typing import Optional
from datetime import date as Date, datetime

class AttendanceOut(BaseModel):
    id: int
    employee_id: int
    login_time: datetime
    logout_time: Optional[datetime] = None
    date: Date
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }

# Attendance row joined with the employee it belongs to
class AttendanceWithEmployee(AttendanceOut):
    employee_name: Optional[str] = None
    employee_code: Optional[str] = None
    employee_mobile: Optional[str] = None
    user_type: Optional[str] = None
