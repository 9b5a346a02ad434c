# emphub/utils/filters.py
"""Search and lookup helpers over flat employee lists.

All functions are pure and tolerate missing optional fields: they never
raise for empty input or broken references.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, List, Union

from emphub.utils.roles import UserType, field_of, role_of


def _text(record: Any, name: str) -> str:
    value = field_of(record, name)
    return value if isinstance(value, str) else ""


def matches_text(record: Any, term: str) -> bool:
    """True when term appears in the name, employee code, mobile or job location.

    Mobile numbers are compared as typed, every other field case-insensitively.
    """
    needle = term.lower()
    return (
        needle in _text(record, "name").lower()
        or needle in _text(record, "employee_id").lower()
        or term in _text(record, "mobile")
        or needle in _text(record, "job_location").lower()
    )


def filter_by_text(records: Sequence[Any], term: Optional[str]) -> Sequence[Any]:
    if not term:
        return records
    return [record for record in records if matches_text(record, term)]


def filter_by_role(records: Sequence[Any], role: Union[UserType, str, None]) -> Sequence[Any]:
    if not role or role == "all":
        return records
    try:
        wanted = UserType(role)
    except ValueError:
        # Nobody can hold a role that does not exist
        return []
    return [record for record in records if role_of(record) is wanted]


class Relation(str, Enum):
    MANAGER = "manager"
    BDM = "bdm"

    @property
    def field(self) -> str:
        return "manager_id" if self is Relation.MANAGER else "bdm_id"


class LinkStatus(Enum):
    FOUND = "found"
    NOT_SET = "not_set"
    DANGLING = "dangling"


@dataclass(frozen=True)
class RelatedName:
    status: LinkStatus
    name: Optional[str] = None

    def __str__(self) -> str:
        if self.status is LinkStatus.FOUND:
            return self.name or ""
        if self.status is LinkStatus.NOT_SET:
            return "None"
        return "Unknown"


def lookup_related(record: Any, all_records: Sequence[Any], which: Union[Relation, str]) -> RelatedName:
    """Find the manager or BDM a record points at.

    Distinguishes an unset reference from one whose target no longer exists.
    """
    relation = Relation(which)
    ref_id = field_of(record, relation.field)
    if not ref_id:
        return RelatedName(LinkStatus.NOT_SET)
    for candidate in all_records:
        if field_of(candidate, "id") == ref_id:
            return RelatedName(LinkStatus.FOUND, field_of(candidate, "name"))
    return RelatedName(LinkStatus.DANGLING)


def resolve_name(record: Any, all_records: Sequence[Any], which: Union[Relation, str]) -> str:
    return str(lookup_related(record, all_records, which))


def search_employees(records: Sequence[Any], query: str) -> List[Any]:
    """Quick lookup by name, employee code or mobile (all case-insensitive)"""
    needle = (query or "").lower()
    return [
        record for record in records
        if needle in _text(record, "name").lower()
        or needle in _text(record, "employee_id").lower()
        or needle in _text(record, "mobile").lower()
    ]
