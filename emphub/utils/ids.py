import time
from sqlalchemy.orm import Session
from emphub.models.employee import Employee
from emphub.utils.roles import UserType

ROLE_PREFIXES = {
    UserType.ADMIN: "AD",
    UserType.MANAGER: "M",
    UserType.BDM: "BDM",
    UserType.BDE: "BDE",
}

def role_prefix(user_type) -> str:
    """
    Prefix used for employee codes, EMP for anything unrecognised.
    """
    try:
        return ROLE_PREFIXES.get(UserType(user_type), "EMP")
    except ValueError:
        return "EMP"

def next_employee_code(db: Session, user_type) -> str:
    """
    Generates an employee code from the role prefix and the last five digits
    of the current millisecond clock, stepping forward until it is unused.
    Format: M12345, BDM12346, BDE00017 ...
    """
    prefix = role_prefix(user_type)
    number = int(time.time() * 1000) % 100000

    for _ in range(100000):
        code = f"{prefix}{number:05d}"
        taken = db.query(Employee.id).filter(Employee.employee_id == code).first()
        if not taken:
            return code
        number = (number + 1) % 100000

    raise ValueError(f"No free employee code left for prefix {prefix}")
