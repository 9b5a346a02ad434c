# emphub/utils/roles.py
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional


class UserType(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    BDM = "business_development_manager"
    BDE = "business_development_executive"

    @classmethod
    def _missing_(cls, value):
        # Accept "bdm"/"bde" and the older compact spellings
        # ("businessdevelopmentmanager") stored by earlier releases
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        for member in cls:
            if key in (member.value, member.value.replace("_", ""), member.name.lower()):
                return member
        return None


ROLE_LABELS = {
    UserType.ADMIN: "Admin",
    UserType.MANAGER: "Manager",
    UserType.BDM: "Business Development Manager",
    UserType.BDE: "Business Development Executive",
}


def field_of(record: Any, name: str) -> Any:
    """Read a field from an ORM object, pydantic model or plain mapping"""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def role_of(record: Any) -> Optional[UserType]:
    """Return the record's UserType, or None when it is missing or unrecognised"""
    value = field_of(record, "user_type")
    if value is None:
        return None
    try:
        return UserType(value)
    except ValueError:
        return None


def is_admin(record: Any) -> bool:
    return role_of(record) is UserType.ADMIN


def is_manager(record: Any) -> bool:
    return role_of(record) is UserType.MANAGER


def is_bdm(record: Any) -> bool:
    return role_of(record) is UserType.BDM


def is_bde(record: Any) -> bool:
    return role_of(record) is UserType.BDE


def can_assign_to_manager(employee: Any, manager: Any) -> bool:
    """Check whether employee may report to manager.

    Managers never report to managers and nobody reports to themselves.
    The target's own role is not inspected here; callers that accept
    arbitrary ids check it separately (see HierarchyManager.assign_to_manager).
    """
    if is_manager(employee):
        return False
    if field_of(employee, "id") == field_of(manager, "id"):
        return False
    return True


def can_assign_to_bdm(employee: Any, bdm: Any) -> bool:
    """Only BDEs can be placed under a BDM, and never under themselves"""
    if not is_bde(employee):
        return False
    if field_of(employee, "id") == field_of(bdm, "id"):
        return False
    return True
