import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from emphub.config.settings import settings
from emphub.init_db import init_database
from emphub.routers import (
    auth, employees, hierarchy, bank_details, attendance, products,
    visit_reports, sales_reports, verification_reports, documents, dashboard,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Employee Management API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api", tags=["Authentication"])
app.include_router(employees.router, prefix="/api", tags=["Employees"])
app.include_router(hierarchy.router, prefix="/api", tags=["Hierarchy"])
app.include_router(bank_details.router, prefix="/api")
app.include_router(attendance.router, prefix="/api")
app.include_router(products.router, prefix="/api")
app.include_router(visit_reports.router, prefix="/api")
app.include_router(sales_reports.router, prefix="/api")
app.include_router(verification_reports.router, prefix="/api")
app.include_router(documents.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")

@app.on_event("startup")
def startup_event():
    """Create tables and the bootstrap admin when the application starts"""
    logger.info("Starting Employee Management API...")
    init_database()

@app.get("/")
def read_root():
    return {"message": "Employee Management API"}

@app.get("/health")
def health():
    return {"status": "ok"}
