from .employee import EmployeeCreate, EmployeeLogin, EmployeeOut, EmployeeUpdate, EmployeeDetail, ChangePassword, BankDetailsIn
from .tokens import Token
from .hierarchy import ManagerNode, BDMNode
from .bank import BankDetailCreate, BankDetailOut
from .attendance import AttendanceOut, AttendanceWithEmployee
from .product import ProductCreate, ProductUpdate, ProductOut
from .reports import VisitReportCreate, VisitReportOut, SalesReportCreate, SalesReportOut, PointsSummary, VerificationReportCreate, VerificationReportOut, VerificationReject
from .document import EmployeeDocumentCreate, EmployeeDocumentOut
