class PatientAPIError(Exception):
    """Base class for errors surfaced through the JSON error envelope."""

    status_code = 500
    message = "Internal server error"


class DataUnavailable(PatientAPIError):
    """The patients dataset could not be read or is not well-formed."""


class PatientNotFound(PatientAPIError):
    status_code = 404
    message = "Patient not found"

    def __init__(self, patient_id: str):
        super().__init__(f"No patient with _id or patientId {patient_id!r}")
        self.patient_id = patient_id
