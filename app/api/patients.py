import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query

from app.db.loader import get_patients
from app.schemas import patient as patient_schema
from app.services import patients as patient_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=patient_schema.PatientPaginated,
    response_model_exclude_unset=True,
    summary="List patients",
    responses={500: {"description": "Dataset unavailable"}},
)
def list_patients(
    search: Optional[str] = Query(None, description="Case-insensitive match on name or patientId"),
    status: Optional[str] = Query(None, description="Exact status filter; 'all' disables it"),
    page: Optional[str] = Query(None, description="Page number, starting at 1 (default: 1)"),
    limit: Optional[str] = Query(None, description="Patients per page (default: 10)"),
    patients: List[patient_schema.PatientRecord] = Depends(get_patients),
):
    """
    Retrieve a filtered, paginated list of patients with dashboard stats.

    - **search**: Substring of the patient's name or patientId, any case.
    - **status**: `assigned`, `unassigned`, ... or `all`.
    - **page** / **limit**: Malformed or non-positive values fall back to safe defaults.
    - **stats**: Global counters plus the size of the filtered view.
    """
    criteria = patient_schema.PatientCriteria(search=search, status=status)
    filtered = patient_service.filter_patients(patients, criteria)

    page_num = patient_service.parse_page_param(page, patient_service.DEFAULT_PAGE)
    per_page = patient_service.parse_page_param(limit, patient_service.DEFAULT_LIMIT)

    return patient_schema.PatientPaginated(
        success=True,
        data=patient_service.paginate(filtered, page_num, per_page),
        pagination=patient_service.build_pagination(len(filtered), page_num, per_page),
        stats=patient_service.compute_stats(patients, filtered),
    )


@router.get(
    "/{patient_id}",
    response_model=patient_schema.PatientDetail,
    response_model_exclude_unset=True,
    summary="Get a patient by _id or patientId",
    responses={
        404: {"description": "Patient not found"},
        500: {"description": "Dataset unavailable"},
    },
)
def get_patient(
    patient_id: str = Path(..., description="Patient _id or patientId"),
    patients: List[patient_schema.PatientRecord] = Depends(get_patients),
):
    patient = patient_service.find_by_id(patients, patient_id)
    return patient_schema.PatientDetail(success=True, data=patient)
