from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from emphub.models.reports import ReportStatus, PaymentMode

# Visit reports

class VisitReportCreate(BaseModel):
    bde_id: Optional[int] = None  # Defaults to the caller when a BDE files the report
    store_name: str = Field(min_length=1)
    owner_name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    phone_number: str = Field(min_length=10)
    photo_url: str = Field(min_length=1)
    products_interested: List[str] = Field(min_length=1)

class VisitReportOut(BaseModel):
    id: int
    bde_id: int
    store_name: str
    owner_name: str
    location: str
    phone_number: str
    photo_url: str
    products_interested: List[str]
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }

# Sales reports

class SalesReportCreate(BaseModel):
    bde_id: Optional[int] = None
    merchant_name: str = Field(min_length=1)
    merchant_mobile: str = Field(min_length=10)
    location: str = Field(min_length=1)
    amount: float = Field(gt=0)
    transaction_id: str = Field(min_length=1)
    payment_mode: PaymentMode
    product_id: int = Field(gt=0)

class SalesReportOut(BaseModel):
    id: int
    bde_id: int
    merchant_name: str
    merchant_mobile: str
    location: str
    amount: float
    transaction_id: str
    payment_mode: PaymentMode
    product_id: int
    status: ReportStatus
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    points: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }

class PointsSummary(BaseModel):
    bde_id: Optional[int] = None
    points: int

# Verification reports

class VerificationReportCreate(BaseModel):
    bde_id: Optional[int] = None
    merchant_name: str = Field(min_length=1)
    mobile_number: str = Field(min_length=10)
    business_name: str = Field(min_length=1)
    full_address: str = Field(min_length=1)
    verification_video: str = Field(min_length=1)
    shop_photo: str = Field(min_length=1)
    shop_owner_photo: str = Field(min_length=1)
    aadhaar_card_photo: str = Field(min_length=1)
    pan_card_photo: str = Field(min_length=1)
    store_outside_photo: str = Field(min_length=1)

class VerificationReject(BaseModel):
    reason: str = Field(min_length=1)

class VerificationReportOut(BaseModel):
    id: int
    bde_id: int
    merchant_name: str
    mobile_number: str
    business_name: str
    full_address: str
    verification_video: str
    shop_photo: str
    shop_owner_photo: str
    aadhaar_card_photo: str
    pan_card_photo: str
    store_outside_photo: str
    status: ReportStatus
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejected_by: Optional[int] = None
    rejected_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True
    }
