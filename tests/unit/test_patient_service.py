import pytest
from app.core.exceptions import PatientNotFound
from app.schemas.patient import PatientCriteria, PatientRecord
from app.services.patients import (
    filter_patients,
    parse_page_param,
    paginate,
    compute_stats,
    build_pagination,
    find_by_id,
)


# ---- Filtering ----

def test_filter_without_criteria_returns_copy(sample_records):
    result = filter_patients(sample_records, PatientCriteria())
    assert result == sample_records
    assert result is not sample_records


def test_filter_search_is_case_insensitive(sample_records):
    result = filter_patients(sample_records, PatientCriteria(search="AN"))
    assert [p.name for p in result] == ["Ann"]


def test_filter_search_matches_patient_code(sample_records):
    result = filter_patients(sample_records, PatientCriteria(search="q7"))
    assert [p.id for p in result] == ["x3"]


def test_filter_search_skips_missing_fields(sample_records):
    # x4 has neither name nor patientId
    result = filter_patients(sample_records, PatientCriteria(search="x4"))
    assert result == []


def test_filter_search_keeps_whitespace(sample_records):
    assert filter_patients(sample_records, PatientCriteria(search=" ann")) == []


def test_filter_status_exact_match(sample_records):
    result = filter_patients(sample_records, PatientCriteria(status="assigned"))
    assert [p.id for p in result] == ["x1", "x4"]


def test_filter_status_all_is_noop(sample_records):
    assert filter_patients(sample_records, PatientCriteria(status="all")) == sample_records


def test_filter_combines_with_and(sample_records):
    result = filter_patients(sample_records, PatientCriteria(search="p", status="unassigned"))
    assert [p.id for p in result] == ["x2"]


# ---- Page parameters ----

@pytest.mark.parametrize(
    "value, default, expected",
    [
        (None, 10, 10),
        ("", 10, 10),
        ("abc", 10, 10),
        ("0", 10, 10),
        ("-4", 10, 1),
        ("3", 10, 3),
        (" 7", 1, 7),
        ("3abc", 1, 3),
        ("2.9", 1, 2),
        ("+5", 1, 5),
        ("٣", 1, 1),
        ("٣", 10, 10),
    ],
)
def test_parse_page_param(value, default, expected):
    assert parse_page_param(value, default) == expected


# ---- Pagination ----

def test_paginate_slices_in_order():
    records = [PatientRecord(_id=str(i)) for i in range(12)]
    assert [p.id for p in paginate(records, 2, 5)] == ["5", "6", "7", "8", "9"]
    assert [p.id for p in paginate(records, 3, 5)] == ["10", "11"]


def test_paginate_out_of_range_is_empty():
    records = [PatientRecord(_id=str(i)) for i in range(3)]
    assert paginate(records, 5, 10) == []


def test_paginate_clamps_non_positive_values():
    records = [PatientRecord(_id=str(i)) for i in range(3)]
    assert [p.id for p in paginate(records, 0, 0)] == ["0"]


def test_build_pagination():
    pagination = build_pagination(7, 1, 5)
    assert pagination.model_dump() == {
        "currentPage": 1,
        "totalPages": 2,
        "totalItems": 7,
        "itemsPerPage": 5,
    }


# ---- Stats ----

def test_compute_stats_uses_global_and_filtered_sets(sample_records):
    filtered = filter_patients(sample_records, PatientCriteria(search="bob"))
    stats = compute_stats(sample_records, filtered)
    assert stats.total == 4
    # "Assigned" is not "assigned"
    assert stats.assigned == 2
    assert stats.unassigned == 1
    assert stats.totalSurgeries == 2
    assert stats.filteredTotal == 1


# ---- Lookup ----

def test_find_by_id_matches_either_identifier(sample_records):
    assert find_by_id(sample_records, "x2").name == "Bob"
    assert find_by_id(sample_records, "P2").name == "Bob"


def test_find_by_id_first_match_wins():
    records = [
        PatientRecord(_id="A", patientId="B", name="first"),
        PatientRecord(_id="B", patientId="C", name="second"),
    ]
    assert find_by_id(records, "B").name == "first"


def test_find_by_id_not_found(sample_records):
    with pytest.raises(PatientNotFound) as exc_info:
        find_by_id(sample_records, "zzz")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Patient not found"
