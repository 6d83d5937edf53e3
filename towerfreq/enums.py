from enum import Enum


class Outcome(Enum):
    ASSIGNED = "assigned"
    UNASSIGNABLE = "unassignable"
