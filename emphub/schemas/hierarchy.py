from typing import List
from emphub.schemas.employee import EmployeeOut

# Tree nodes keep whatever fields the source record carries
class EmployeeNode(EmployeeOut):
    model_config = {
        "from_attributes": True,
        "extra": "allow"
    }

class BDMNode(EmployeeNode):
    bdes: List[EmployeeNode] = []

class ManagerNode(EmployeeNode):
    bdms: List[BDMNode] = []
