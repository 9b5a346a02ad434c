from emphub.utils.filters import (
    LinkStatus,
    filter_by_role,
    filter_by_text,
    lookup_related,
    matches_text,
    resolve_name,
    search_employees,
)

RECORDS = [
    {"id": 1, "employee_id": "M12345", "name": "Alice", "mobile": "9876500001",
     "job_location": "Mumbai", "user_type": "manager"},
    {"id": 2, "employee_id": "BDM22222", "name": "Bob", "mobile": "9876500002",
     "job_location": "Pune", "user_type": "business_development_manager", "manager_id": 1},
    {"id": 3, "employee_id": "BDE33333", "name": "Carl", "mobile": "9876500003",
     "job_location": "Nagpur", "user_type": "business_development_executive", "bdm_id": 2},
    {"id": 4, "employee_id": "BDE44444", "name": "Dan", "user_type": "business_development_executive",
     "bdm_id": 99, "manager_id": 7},
]


def test_empty_term_returns_input_unchanged():
    assert filter_by_text(RECORDS, "") is RECORDS
    assert filter_by_text(RECORDS, None) is RECORDS


def test_text_filter_matches_any_of_four_fields():
    assert [r["id"] for r in filter_by_text(RECORDS, "ALI")] == [1]
    assert [r["id"] for r in filter_by_text(RECORDS, "bde")] == [3, 4]
    assert [r["id"] for r in filter_by_text(RECORDS, "500002")] == [2]
    assert [r["id"] for r in filter_by_text(RECORDS, "pune")] == [2]


def test_every_text_match_satisfies_a_predicate():
    for term in ("a", "9876", "m", "zz"):
        for record in filter_by_text(RECORDS, term):
            assert matches_text(record, term)


def test_mobile_match_is_case_sensitive():
    records = [{"id": 1, "name": "", "mobile": "ABC123"}]
    assert filter_by_text(records, "ABC") == records
    assert filter_by_text(records, "abc") == []


def test_text_filter_tolerates_missing_fields():
    assert filter_by_text([{"id": 1}], "x") == []


def test_role_filter_all_or_none_returns_input():
    assert filter_by_role(RECORDS, "all") is RECORDS
    assert filter_by_role(RECORDS, None) is RECORDS


def test_role_filter_keeps_only_matching_role():
    result = filter_by_role(RECORDS, "business_development_executive")
    assert [r["id"] for r in result] == [3, 4]
    assert all(r["user_type"] == "business_development_executive" for r in result)


def test_role_filter_accepts_short_role_names():
    assert [r["id"] for r in filter_by_role(RECORDS, "bdm")] == [2]


def test_role_filter_with_unknown_role_is_empty():
    assert filter_by_role(RECORDS, "intern") == []


def test_resolve_name_found():
    assert resolve_name(RECORDS[1], RECORDS, "manager") == "Alice"
    assert resolve_name(RECORDS[2], RECORDS, "bdm") == "Bob"


def test_resolve_name_not_set_and_dangling():
    assert resolve_name(RECORDS[0], RECORDS, "manager") == "None"
    assert resolve_name(RECORDS[3], RECORDS, "manager") == "Unknown"
    assert resolve_name(RECORDS[3], [], "bdm") == "Unknown"


def test_lookup_related_distinguishes_unset_from_broken():
    assert lookup_related(RECORDS[0], RECORDS, "bdm").status is LinkStatus.NOT_SET
    assert lookup_related(RECORDS[3], RECORDS, "bdm").status is LinkStatus.DANGLING
    found = lookup_related(RECORDS[2], RECORDS, "bdm")
    assert found.status is LinkStatus.FOUND
    assert found.name == "Bob"


def test_search_employees_ignores_case_and_location():
    assert [r["id"] for r in search_employees(RECORDS, "m12")] == [1]
    assert search_employees(RECORDS, "mumbai") == []
    assert len(search_employees(RECORDS, "")) == len(RECORDS)
