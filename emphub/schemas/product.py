from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    points: int = Field(gt=0)

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    points: Optional[int] = Field(default=None, gt=0)

class ProductOut(BaseModel):
    id: int
    name: str
    points: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }
