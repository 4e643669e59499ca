import json
import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.core.config import settings
from app.schemas.patient import PatientRecord


def _build_patients(count=15, assigned=7, surgeries=0):
    return [
        {
            "_id": f"id-{i:03d}",
            "patientId": f"P{i:03d}",
            "name": f"Patient {i}",
            "status": "assigned" if i < assigned else "unassigned",
            "hasSurgery": i < surgeries,
        }
        for i in range(count)
    ]


@pytest.fixture
def write_dataset(tmp_path, monkeypatch):
    """Write a dataset file and point the API at it."""
    file_path = tmp_path / "patients.json"
    monkeypatch.setattr(settings, "PATIENTS_FILE", file_path)

    def _write(patients=None, raw=None):
        if raw is None:
            raw = json.dumps({"patients": patients if patients is not None else []})
        file_path.write_text(raw, encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def sample_records():
    return [
        PatientRecord(_id="x1", patientId="P1", name="Ann", status="assigned", hasSurgery=True),
        PatientRecord(_id="x2", patientId="P2", name="Bob", status="unassigned", hasSurgery=False),
        PatientRecord(_id="x3", patientId="Q7", name="Cleo", status="Assigned"),
        PatientRecord(_id="x4", status="assigned", hasSurgery=True),
    ]


@pytest.fixture
def make_patients():
    """Build raw patient dicts: the first ``assigned`` are assigned, the rest unassigned."""
    return _build_patients
