from .employee import Employee, BankDetail
from .attendance import AttendanceRecord
from .product import Product
from .reports import VisitReport, SalesReport, VerificationReport, ReportStatus, PaymentMode
from .document import EmployeeDocument, DocumentType
