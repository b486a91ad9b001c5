"""Department definitions.

Five organizational roles exist:
1. Solar and Wind - uploads files and requests review
2. Environmental - reviewer
3. Electrical - reviewer
4. Civil - reviewer
5. Permitting - reviewer
"""

from enum import Enum
from typing import Optional, Tuple


class Department(str, Enum):
    """Organizational roles a user can log in under."""

    SOLAR_AND_WIND = "Solar and Wind"
    ENVIRONMENTAL = "Environmental"
    ELECTRICAL = "Electrical"
    CIVIL = "Civil"
    PERMITTING = "Permitting"


# Requesting role; never a key in an approval status map
UPLOADER_DEPARTMENT = Department.SOLAR_AND_WIND

# Reviewing departments in canonical display order
REVIEW_DEPARTMENTS: Tuple[str, ...] = (
    Department.ENVIRONMENTAL.value,
    Department.ELECTRICAL.value,
    Department.CIVIL.value,
    Department.PERMITTING.value,
)

ALL_DEPARTMENTS: Tuple[str, ...] = tuple(d.value for d in Department)


def is_reviewer(department: Optional[str]) -> bool:
    """Check if a department takes part in the approval sequence."""
    return department in REVIEW_DEPARTMENTS


def is_known_department(department: Optional[str]) -> bool:
    """Check if a department is one of the five known roles."""
    return department in ALL_DEPARTMENTS
