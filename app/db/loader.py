import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from app.core.config import settings
from app.core.exceptions import DataUnavailable
from app.schemas.patient import PatientRecord

logger = logging.getLogger(__name__)

_records_adapter = TypeAdapter(List[PatientRecord])


def load_patients(filepath: Union[str, Path]) -> List[PatientRecord]:
    """
    Read the full ``patients`` collection from a JSON dataset file.

    The file is read on every call; nothing is memoized.

    Raises:
        DataUnavailable: the file cannot be read, is not valid JSON, has no
            top-level ``patients`` list, or an element is not an object.

    Field values are kept as stored, whatever their type.
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load patient JSON from {filepath}: {e}")
        raise DataUnavailable(str(e)) from e

    if not isinstance(document, dict) or not isinstance(document.get("patients"), list):
        logger.error(f"Patient JSON {filepath} has no top-level 'patients' list")
        raise DataUnavailable("Dataset must contain a top-level 'patients' list")

    try:
        return _records_adapter.validate_python(document["patients"])
    except ValidationError as e:
        logger.error(f"Malformed patient records in {filepath}: {e}")
        raise DataUnavailable(f"Malformed patient records: {e.error_count()} error(s)") from e


def get_patients() -> List[PatientRecord]:
    return load_patients(settings.PATIENTS_FILE)
