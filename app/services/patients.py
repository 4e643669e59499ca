import math
import re
from typing import Any, List, Optional, Sequence

from app.core.exceptions import PatientNotFound
from app.schemas.base import Pagination
from app.schemas.patient import PatientCriteria, PatientRecord, PatientStats

STATUS_ALL = "all"
STATUS_ASSIGNED = "assigned"
STATUS_UNASSIGNED = "unassigned"

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def _contains(field: Any, needle: str) -> bool:
    return isinstance(field, str) and needle in field.lower()


def filter_patients(records: Sequence[PatientRecord], criteria: PatientCriteria) -> List[PatientRecord]:
    """
    Apply search and status criteria, keeping dataset order.

    - **search**: case-insensitive substring of ``name`` or ``patientId``.
    - **status**: exact match unless empty or ``"all"``.
    """
    filtered = list(records)

    if criteria.search:
        needle = criteria.search.lower()
        filtered = [
            p for p in filtered
            if _contains(p.name, needle) or _contains(p.patientId, needle)
        ]

    if criteria.status and criteria.status != STATUS_ALL:
        filtered = [p for p in filtered if p.status == criteria.status]

    return filtered


def parse_page_param(value: Optional[str], default: int) -> int:
    """Leniently parse a page/limit query value; never below 1, never raises."""
    match = _LEADING_INT.match(value) if value is not None else None
    parsed = int(match.group(1)) if match else 0
    return max(parsed or default, 1)


def paginate(records: Sequence[PatientRecord], page: int, limit: int) -> List[PatientRecord]:
    page, limit = max(page, 1), max(limit, 1)
    start = (page - 1) * limit
    return list(records[start:start + limit])


def compute_stats(all_records: Sequence[PatientRecord], filtered: Sequence[PatientRecord]) -> PatientStats:
    return PatientStats(
        total=len(all_records),
        assigned=sum(1 for p in all_records if p.status == STATUS_ASSIGNED),
        unassigned=sum(1 for p in all_records if p.status == STATUS_UNASSIGNED),
        totalSurgeries=sum(1 for p in all_records if p.hasSurgery is True),
        filteredTotal=len(filtered),
    )


def build_pagination(filtered_count: int, page: int, limit: int) -> Pagination:
    return Pagination(
        currentPage=page,
        totalPages=math.ceil(filtered_count / limit),
        totalItems=filtered_count,
        itemsPerPage=limit,
    )


def find_by_id(records: Sequence[PatientRecord], patient_id: str) -> PatientRecord:
    # If one record's _id equals another's patientId, the earlier record wins.
    for patient in records:
        if patient.id == patient_id or patient.patientId == patient_id:
            return patient
    raise PatientNotFound(patient_id)
