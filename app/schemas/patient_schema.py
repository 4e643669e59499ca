import pandera.pandas as pa
from pandera import Column, DataFrameSchema, Check

# Statuses the dashboard counts; others are allowed but reported by the audit
KNOWN_STATUSES = ["assigned", "unassigned"]

PatientSchema = DataFrameSchema({
    "_id": Column(str, nullable=False),
    "patientId": Column(str, nullable=False),
    "name": Column(str, nullable=False, checks=[
        Check.str_length(min_value=1),
    ]),
    "status": Column(str, nullable=False),
    "hasSurgery": Column(bool, nullable=True, required=False),
})
