# emphub/schemas/tokens.py
from pydantic import BaseModel
from emphub.schemas.employee import EmployeeOut

class Token(BaseModel):
    access_token: str
    token_type: str
    user: EmployeeOut

    model_config = {
        "from_attributes": True
    }
