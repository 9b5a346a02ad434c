# emphub/init_db.py
import logging
from datetime import datetime
from sqlalchemy.orm import Session

from emphub.config.settings import settings
from emphub.database import Base, engine, SessionLocal
from emphub.models import Employee
from emphub.utils.roles import UserType
from emphub.utils.security import get_password_hash

logger = logging.getLogger(__name__)

def create_tables():
    """Create all tables that do not exist yet"""
    Base.metadata.create_all(bind=engine)

def ensure_default_admin(db: Session) -> Employee:
    """Create the bootstrap admin account when it is missing"""
    admin = settings.DEFAULT_ADMIN
    existing = db.query(Employee).filter(Employee.username == admin["username"]).first()
    if existing:
        logger.info("Admin user already exists in the database")
        return existing

    logger.info("Initializing database with admin user...")
    user = Employee(
        employee_id="AD1",
        name=admin["name"],
        mobile=admin["mobile"],
        job_location=admin["job_location"],
        user_type=UserType.ADMIN.value,
        salary=100000,
        joining_date=datetime.utcnow().date(),
        travel_allowance=10000,
        referral_name=None,
        remarks="Default admin account",
        username=admin["username"],
        hashed_password=get_password_hash(admin["password"]),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Admin user created successfully: %s", user.name)
    return user

def init_database():
    create_tables()
    db = SessionLocal()
    try:
        ensure_default_admin(db)
    finally:
        db.close()
