from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from app.schemas.base import PaginatedResponse


class PatientRecord(BaseModel):
    # Fields the API reads, kept as stored; anything else is passed through as-is.
    # Values of an unexpected type never match a filter or lookup.
    id: Any = Field(None, alias="_id")
    patientId: Any = None
    name: Any = None
    status: Any = None
    hasSurgery: Any = None

    model_config = ConfigDict(extra="allow", frozen=True)


class PatientCriteria(BaseModel):
    search: Optional[str] = None
    status: Optional[str] = None


class PatientStats(BaseModel):
    total: int
    assigned: int
    unassigned: int
    totalSurgeries: int
    filteredTotal: int


class PatientPaginated(PaginatedResponse):
    data: list[PatientRecord]
    stats: PatientStats


class PatientDetail(BaseModel):
    success: bool = True
    data: PatientRecord
