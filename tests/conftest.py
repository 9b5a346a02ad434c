"""Shared fixtures: an in-memory database per test and helpers for tokens."""
import os
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the application engine away from any real database
os.environ["DATABASE_URL"] = "sqlite://"

from main import app  # noqa: E402
from emphub.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from emphub.init_db import ensure_default_admin  # noqa: E402
from emphub.models.employee import Employee  # noqa: E402
from emphub.utils.security import create_access_token, get_password_hash  # noqa: E402

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    return ensure_default_admin(db)


@pytest.fixture
def make_employee(db):
    """Insert an employee row directly, bypassing the API"""
    counter = {"n": 0}

    def _make(user_type, name=None, manager=None, bdm=None, **overrides):
        counter["n"] += 1
        n = counter["n"]
        employee = Employee(
            employee_id=overrides.pop("employee_id", f"T{n:04d}"),
            name=name or f"Employee {n}",
            mobile=overrides.pop("mobile", f"90000000{n:02d}"),
            job_location=overrides.pop("job_location", "Pune"),
            user_type=user_type,
            salary=overrides.pop("salary", 30000),
            joining_date=overrides.pop("joining_date", date(2024, 1, 1)),
            travel_allowance=overrides.pop("travel_allowance", 1000),
            manager_id=manager.id if manager else None,
            bdm_id=bdm.id if bdm else None,
            username=overrides.pop("username", f"user{n}"),
            hashed_password=get_password_hash(DEFAULT_PASSWORD),
            **overrides,
        )
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    return _make


@pytest.fixture
def auth_headers():
    """Bearer headers for an employee"""
    def _headers(employee):
        token = create_access_token(data={"sub": employee.username})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def team(admin, make_employee):
    """One manager with a BDM and two BDEs, plus an unrelated branch"""
    manager = make_employee("manager", name="Alice")
    bdm = make_employee("business_development_manager", name="Bob", manager=manager)
    bde = make_employee("business_development_executive", name="Carl", manager=manager, bdm=bdm)
    bde2 = make_employee("business_development_executive", name="Cara", manager=manager, bdm=bdm)

    other_manager = make_employee("manager", name="Mona")
    other_bdm = make_employee("business_development_manager", name="Otto", manager=other_manager)
    other_bde = make_employee("business_development_executive", name="Olga", manager=other_manager, bdm=other_bdm)

    return {
        "admin": admin,
        "manager": manager,
        "bdm": bdm,
        "bde": bde,
        "bde2": bde2,
        "other_manager": other_manager,
        "other_bdm": other_bdm,
        "other_bde": other_bde,
    }
