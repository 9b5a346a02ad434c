# emphub/utils/hierarchy.py
import logging
from collections import defaultdict
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy.orm import Session
from emphub.models.employee import Employee
from emphub.schemas.employee import EmployeeOut, canonical_user_type
from emphub.schemas.hierarchy import BDMNode, EmployeeNode, ManagerNode
from emphub.utils.roles import UserType, field_of, role_of, is_admin, is_manager, is_bdm, is_bde

logger = logging.getLogger(__name__)


def build_hierarchy(records: Sequence[Any]) -> List[ManagerNode]:
    """Assemble Manager -> BDM -> BDE trees from a flat employee list.

    Children are indexed by parent id in a single pass, so the result is
    built without recursion and input order is kept at every level.
    BDMs and BDEs whose parent link does not match a manager/BDM in the
    list are left out of the tree.
    """
    managers = []
    bdms_by_manager: Dict[Any, List[Any]] = defaultdict(list)
    bdes_by_bdm: Dict[Any, List[Any]] = defaultdict(list)

    for record in records:
        role = role_of(record)
        if role is UserType.MANAGER:
            managers.append(record)
        elif role is UserType.BDM and field_of(record, "manager_id") is not None:
            bdms_by_manager[field_of(record, "manager_id")].append(record)
        elif role is UserType.BDE and field_of(record, "bdm_id") is not None:
            bdes_by_bdm[field_of(record, "bdm_id")].append(record)

    tree = []
    for manager in managers:
        bdm_nodes = []
        for bdm in bdms_by_manager.get(field_of(manager, "id"), []):
            bdes = [_node(EmployeeNode, bde) for bde in bdes_by_bdm.get(field_of(bdm, "id"), [])]
            bdm_nodes.append(_node(BDMNode, bdm, bdes=bdes))
        tree.append(_node(ManagerNode, manager, bdms=bdm_nodes))
    return tree


def _node(node_type, record: Any, **children):
    """Wrap a record without validating it.

    Mappings keep all of their keys. ORM rows only expose the public employee
    fields so credentials never end up in a node.
    """
    if isinstance(record, Mapping):
        fields = dict(record)
    else:
        fields = {name: getattr(record, name, None) for name in EmployeeOut.model_fields}
    fields["user_type"] = canonical_user_type(fields.get("user_type"))
    fields.update(children)
    return node_type.model_construct(**fields)


def visible_records(viewer: Any, records: Sequence[Any]) -> List[Any]:
    """Subset of records the viewer may see in the organisation chart"""
    viewer_id = field_of(viewer, "id")

    if is_admin(viewer):
        return list(records)

    if is_manager(viewer):
        own_bdm_ids = {
            field_of(r, "id") for r in records
            if is_bdm(r) and field_of(r, "manager_id") == viewer_id
        }
        return [
            r for r in records
            if field_of(r, "id") == viewer_id
            or field_of(r, "manager_id") == viewer_id
            or (is_bde(r) and field_of(r, "bdm_id") in own_bdm_ids)
        ]

    if is_bdm(viewer):
        manager_id = field_of(viewer, "manager_id")
        return [
            r for r in records
            if field_of(r, "id") == viewer_id
            or (manager_id and field_of(r, "id") == manager_id)
            or (is_bde(r) and field_of(r, "bdm_id") == viewer_id)
        ]

    if is_bde(viewer):
        related = {field_of(viewer, "bdm_id"), field_of(viewer, "manager_id")} - {None}
        return [
            r for r in records
            if field_of(r, "id") == viewer_id or field_of(r, "id") in related
        ]

    return [r for r in records if field_of(r, "id") == viewer_id]


def potential_supervisors(employee: Any, records: Sequence[Any]) -> List[Any]:
    """Candidates an employee can be assigned under.

    BDMs report to managers. A BDE that already has a manager can only move
    between that manager's BDMs, otherwise any BDM qualifies.
    """
    if is_bdm(employee):
        return [r for r in records if is_manager(r)]
    if is_bde(employee):
        manager_id = field_of(employee, "manager_id")
        if manager_id:
            return [r for r in records if is_bdm(r) and field_of(r, "manager_id") == manager_id]
        return [r for r in records if is_bdm(r)]
    return []


class HierarchyManager:
    """Database-backed reporting line operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        return self.db.query(Employee).filter(Employee.id == employee_id).first()

    def get_all(self) -> List[Employee]:
        return self.db.query(Employee).order_by(Employee.id).all()

    def get_users_by_manager(self, manager_id: int) -> List[Employee]:
        """Everyone whose manager_id points at the manager (BDMs and directly placed BDEs)"""
        return self.db.query(Employee).filter(
            Employee.manager_id == manager_id
        ).order_by(Employee.id).all()

    def get_users_by_bdm(self, bdm_id: int) -> List[Employee]:
        return self.db.query(Employee).filter(
            Employee.bdm_id == bdm_id
        ).order_by(Employee.id).all()

    def get_users_by_role(self, role: UserType) -> List[Employee]:
        return self.db.query(Employee).filter(
            Employee.user_type == UserType(role).value
        ).order_by(Employee.id).all()

    def assign_to_manager(self, employee_id: int, manager_id: int) -> Optional[Employee]:
        """Point an employee at a manager and clear any BDM link.

        Returns None when either row is missing or the target is not a manager.
        """
        employee = self.get_employee(employee_id)
        if not employee:
            return None

        manager = self.get_employee(manager_id)
        if not manager or not is_manager(manager):
            return None

        employee.manager_id = manager.id
        employee.bdm_id = None
        employee.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(employee)
        logger.info("Assigned employee %s to manager %s", employee.employee_id, manager.employee_id)
        return employee

    def assign_to_bdm(self, employee_id: int, bdm_id: int) -> Optional[Employee]:
        """Place an employee under a BDM, inheriting the BDM's manager.

        Returns None when either row is missing, the target is not a BDM
        or the BDM has no manager yet.
        """
        employee = self.get_employee(employee_id)
        if not employee:
            return None

        bdm = self.get_employee(bdm_id)
        if not bdm or not is_bdm(bdm):
            return None
        if not bdm.manager_id:
            return None

        employee.manager_id = bdm.manager_id
        employee.bdm_id = bdm.id
        employee.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(employee)
        logger.info("Assigned employee %s to BDM %s", employee.employee_id, bdm.employee_id)
        return employee

    def remove_assignment(self, employee_id: int) -> Optional[Employee]:
        employee = self.get_employee(employee_id)
        if not employee:
            return None

        employee.manager_id = None
        employee.bdm_id = None
        employee.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(employee)
        logger.info("Cleared reporting lines for employee %s", employee.employee_id)
        return employee

    def get_team_bde_ids(self, manager_id: int) -> List[int]:
        """BDEs placed directly under a manager plus the BDEs of each of its BDMs"""
        direct = self.get_users_by_manager(manager_id)
        bde_ids = [emp.id for emp in direct if is_bde(emp)]

        for bdm in (emp for emp in direct if is_bdm(emp)):
            for bde in self.get_users_by_bdm(bdm.id):
                if is_bde(bde) and bde.id not in bde_ids:
                    bde_ids.append(bde.id)
        return bde_ids

    def get_team_member_ids(self, user: Employee) -> Optional[List[int]]:
        """Employee ids whose records the user may see. None means everyone (admins)."""
        if is_admin(user):
            return None
        if is_manager(user):
            member_ids = [user.id] + [emp.id for emp in self.get_users_by_manager(user.id)]
            for bde_id in self.get_team_bde_ids(user.id):
                if bde_id not in member_ids:
                    member_ids.append(bde_id)
            return member_ids
        if is_bdm(user):
            return [user.id] + [emp.id for emp in self.get_users_by_bdm(user.id)]
        return [user.id]

    def get_scoped_bde_ids(self, user: Employee) -> Optional[List[int]]:
        """BDE ids whose reports the user may see. None means everyone (admins)."""
        if is_admin(user):
            return None
        if is_manager(user):
            return self.get_team_bde_ids(user.id)
        if is_bdm(user):
            return [emp.id for emp in self.get_users_by_bdm(user.id) if is_bde(emp)]
        if is_bde(user):
            return [user.id]
        return []

    def can_view_bde(self, user: Employee, bde_id: int) -> bool:
        scope = self.get_scoped_bde_ids(user)
        return scope is None or bde_id in scope
