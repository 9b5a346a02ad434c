# emphub/models/reports.py
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text, JSON, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from emphub.database import Base
import enum

class ReportStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class PaymentMode(str, enum.Enum):
    UPI = "upi"
    NEFT = "neft"
    IMPS = "imps"
    CHEQUE = "cheque"
    RTGS = "rtgs"

class VisitReport(Base):
    __tablename__ = "visit_reports"

    id = Column(Integer, primary_key=True, index=True)
    bde_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    store_name = Column(String, nullable=False)
    owner_name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    phone_number = Column(String, nullable=False)
    photo_url = Column(Text, nullable=False)
    products_interested = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    bde = relationship("Employee", foreign_keys=[bde_id])

class SalesReport(Base):
    __tablename__ = "sales_reports"

    id = Column(Integer, primary_key=True, index=True)
    bde_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    merchant_name = Column(String, nullable=False)
    merchant_mobile = Column(String, nullable=False)
    location = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    transaction_id = Column(String, nullable=False)
    payment_mode = Column(Enum(PaymentMode), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    # Approval workflow
    status = Column(Enum(ReportStatus), default=ReportStatus.PENDING, nullable=False, index=True)
    approved_by = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    points = Column(Integer, nullable=True)  # Copied from the product when the report is filed

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    bde = relationship("Employee", foreign_keys=[bde_id])
    product = relationship("Product")

class VerificationReport(Base):
    __tablename__ = "verification_reports"

    id = Column(Integer, primary_key=True, index=True)
    bde_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    merchant_name = Column(String, nullable=False)
    mobile_number = Column(String, nullable=False)
    business_name = Column(String, nullable=False)
    full_address = Column(Text, nullable=False)

    # Evidence (URLs or base64 payloads)
    verification_video = Column(Text, nullable=False)
    shop_photo = Column(Text, nullable=False)
    shop_owner_photo = Column(Text, nullable=False)
    aadhaar_card_photo = Column(Text, nullable=False)
    pan_card_photo = Column(Text, nullable=False)
    store_outside_photo = Column(Text, nullable=False)

    status = Column(Enum(ReportStatus), default=ReportStatus.PENDING, nullable=False, index=True)
    approved_by = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejected_by = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    rejected_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    bde = relationship("Employee", foreign_keys=[bde_id])
