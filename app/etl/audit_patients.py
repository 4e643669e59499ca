import os
import json
import sys
import logging
from typing import Optional
import pandas as pd
from app.core.config import settings
from app.schemas.patient_schema import PatientSchema, KNOWN_STATUSES

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Constants
REJECTED_DIR = "rejected"
REJECTED_FILE = os.path.join(REJECTED_DIR, "patients_invalid.json")
ID_COLUMNS = ["_id", "patientId"]


# ---- Loading ----

def load_patient_data(filepath: str) -> pd.DataFrame:
    try:
        with open(filepath, encoding="utf-8") as f:
            document = json.load(f)
        return pd.DataFrame(document["patients"])
    except Exception as e:
        logger.error(f"Failed to load patient JSON: {e}")
        return pd.DataFrame()


# ---- Validation ----

def validate_patient_row(row: pd.Series) -> (bool, str):
    row_dict = row.dropna().to_dict()
    try:
        PatientSchema.validate(pd.DataFrame([row_dict]))
        return True, ""
    except Exception as e:
        return False, str(e)


def find_identifier_collisions(df: pd.DataFrame) -> dict:
    """
    Map each identifier shared by more than one record to the row indices using it.

    An identifier collides when it appears twice across the ``_id`` and
    ``patientId`` columns combined, so ``_id`` of one record equal to the
    ``patientId`` of another is reported too. Lookups resolve such ids to the
    first record in dataset order.
    """
    columns = [c for c in ID_COLUMNS if c in df.columns]
    if not columns:
        return {}

    owners = {}
    for idx, row in df[columns].iterrows():
        # A record whose _id equals its own patientId is not a collision
        for value in set(row.dropna().astype(str)):
            owners.setdefault(value, []).append(idx)
    return {key: rows for key, rows in owners.items() if len(rows) > 1}


def find_unknown_statuses(df: pd.DataFrame) -> dict:
    """Count records per status outside ``KNOWN_STATUSES``; missing statuses are not counted."""
    if "status" not in df.columns:
        return {}
    statuses = df["status"].dropna().astype(str)
    unknown = statuses[~statuses.isin(KNOWN_STATUSES)]
    return {str(status): int(count) for status, count in unknown.value_counts().items()}


def audit_patients(filepath: str) -> Optional[list]:
    """
    Validate every record and return the rejected ones with a ``validation_error``.

    Returns ``None`` when no patient data could be loaded. Unknown statuses are
    logged as warnings but do not reject a record.
    """
    df = load_patient_data(filepath)
    if df.empty:
        logger.warning("No patient data loaded.")
        return None

    for status, count in find_unknown_statuses(df).items():
        logger.warning(f"{count} patient(s) with unknown status {status!r}")

    invalid_rows = []
    collisions = find_identifier_collisions(df)
    collided_rows = {}
    for key, rows in collisions.items():
        for idx in rows:
            collided_rows.setdefault(idx, []).append(key)

    for idx, row in df.iterrows():
        is_valid, err = validate_patient_row(row)
        if idx in collided_rows:
            dup = ", ".join(collided_rows[idx])
            err = "; ".join(filter(None, [err, f"Identifier shared with another record: {dup}"]))
            is_valid = False
        if not is_valid:
            row_dict = row.dropna().to_dict()
            row_dict["validation_error"] = err
            invalid_rows.append(row_dict)

    logger.info(f"Audited {len(df)} patients: {len(df) - len(invalid_rows)} valid, {len(invalid_rows)} invalid")
    return invalid_rows


def save_invalid_patients(invalid_rows: list):
    if not invalid_rows:
        return
    os.makedirs(REJECTED_DIR, exist_ok=True)
    pd.DataFrame(invalid_rows).to_json(REJECTED_FILE, orient="records", indent=2)
    logger.info(f"Saved {len(invalid_rows)} invalid patient records to {REJECTED_FILE}")


# ---- Main runner ----

def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    filepath = argv[0] if argv else str(settings.PATIENTS_FILE)
    logger.info(f"Auditing patient dataset {filepath}")
    invalid_rows = audit_patients(filepath)
    if invalid_rows is None:
        logger.error(f"Audit failed: no patient data in {filepath}")
        return 2
    save_invalid_patients(invalid_rows)
    logger.info("Audit completed")
    return 1 if invalid_rows else 0


if __name__ == "__main__":
    sys.exit(main())
