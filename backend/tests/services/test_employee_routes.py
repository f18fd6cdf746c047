"""Employee Routes — end-to-end behaviour of /api/employees over an in-memory store.

Invariants:
    - Every supplied equality filter holds on every returned record
    - A complete, valid date range is inclusive on both ends
    - An invalid or one-sided range returns the same set as no range
    - Duplicate ids are rejected with 400 and leave the original untouched
    - Updating a missing id is 404 and creates nothing
    - Deleting a missing id still answers success
"""

import pytest
from sqlalchemy import func, select

from employee_directory.models.employee import Employee

BASE = "/api/employees"

NEW_EMPLOYEE = {
    "id": "N100",
    "name": "Nina North",
    "email": "nina@example.com",
    "position": "Designer",
    "department": "Design",
    "gender": "Female",
    "dateOfJoining": "2024-05-02",
}


def _ids(res) -> list[str]:
    return sorted(r["id"] for r in res.json())


# ─── List & filters ──────────────────────────────────────────────

async def test_list_without_filters_returns_everything(client, seed_employees):
    res = await client.get(BASE)
    assert res.status_code == 200
    assert _ids(res) == ["E001", "E002", "E003", "E004", "E005"]


async def test_list_with_trailing_slash(client, seed_employees):
    res = await client.get(f"{BASE}/")
    assert res.status_code == 200
    assert len(res.json()) == 5


async def test_list_serializes_camel_case_and_hides_storage_key(client, seed_employees):
    res = await client.get(BASE, params={"department": "Design"})
    record = res.json()[0]
    assert record["id"] == "E003"
    assert record["dateOfJoining"] == "2024-03-15"
    assert "createdAt" in record and "updatedAt" in record
    assert "pk" not in record
    assert "employee_id" not in record


async def test_department_filter_is_exact_match(client, seed_employees):
    res = await client.get(BASE, params={"department": "HR"})
    assert _ids(res) == ["E001", "E002"]
    assert all(r["department"] == "HR" for r in res.json())


async def test_department_and_gender_filters_combine(client, seed_employees):
    res = await client.get(BASE, params={"department": "Developer", "gender": "Male"})
    assert _ids(res) == ["E004"]


async def test_empty_filter_values_impose_no_constraint(client, seed_employees):
    res = await client.get(
        BASE,
        params={"department": "", "gender": "", "startDate": "", "endDate": ""},
    )
    assert len(res.json()) == 5


async def test_date_range_is_inclusive_on_both_ends(client, seed_employees):
    res = await client.get(
        BASE, params={"startDate": "2023-06-01", "endDate": "2024-12-31"},
    )
    assert _ids(res) == ["E002", "E003", "E004"]


async def test_date_range_accepts_iso_datetimes(client, seed_employees):
    res = await client.get(
        BASE,
        params={"startDate": "2024-01-01T00:00:00.000Z", "endDate": "2024-12-31T00:00:00Z"},
    )
    assert _ids(res) == ["E003", "E004"]


async def test_date_range_combines_with_equality_filters(client, seed_employees):
    res = await client.get(
        BASE,
        params={"department": "Developer", "startDate": "2025-01-01", "endDate": "2025-12-31"},
    )
    assert _ids(res) == ["E005"]


@pytest.mark.parametrize("params", [
    {"startDate": "2024-01-01"},
    {"endDate": "2024-01-01"},
    {"startDate": "not-a-date", "endDate": "2024-12-31"},
    {"startDate": "2024-01-01", "endDate": "2024-13-45"},
])
async def test_invalid_or_one_sided_range_is_ignored(client, seed_employees, params):
    unfiltered = await client.get(BASE)
    res = await client.get(BASE, params=params)
    assert res.status_code == 200
    assert _ids(res) == _ids(unfiltered)


async def test_reversed_range_matches_nothing(client, seed_employees):
    res = await client.get(
        BASE, params={"startDate": "2025-01-01", "endDate": "2023-01-01"},
    )
    assert res.json() == []


async def test_slash_separated_range_bounds_are_accepted(client, seed_employees):
    res = await client.get(BASE, params={"startDate": "2024/01/01", "endDate": "2024/12/31"})
    assert _ids(res) == ["E003", "E004"]


# ─── Create ──────────────────────────────────────────────────────

async def test_add_persists_record(client, test_db):
    res = await client.post(f"{BASE}/add", json=NEW_EMPLOYEE)
    assert res.status_code == 200
    assert res.json() == {"message": "Employee added successfully!"}

    stored = (await client.get(BASE)).json()
    assert len(stored) == 1
    assert stored[0]["name"] == "Nina North"
    assert stored[0]["dateOfJoining"] == "2024-05-02"


async def test_add_trims_text_fields(client):
    body = {**NEW_EMPLOYEE, "name": "  Nina North  ", "email": " nina@example.com "}
    await client.post(f"{BASE}/add", json=body)
    stored = (await client.get(BASE)).json()[0]
    assert stored["name"] == "Nina North"
    assert stored["email"] == "nina@example.com"


async def test_add_keeps_optional_attachments(client):
    body = {
        **NEW_EMPLOYEE,
        "photo": "data:image/png;base64,AAAA",
        "resume": "data:application/pdf;base64,BBBB",
        "resumeName": "cv.pdf",
    }
    await client.post(f"{BASE}/add", json=body)
    stored = (await client.get(BASE)).json()[0]
    assert stored["photo"] == "data:image/png;base64,AAAA"
    assert stored["resumeName"] == "cv.pdf"


async def test_add_duplicate_id_fails_and_keeps_original(client, seed_employees):
    body = {**NEW_EMPLOYEE, "id": "E001", "name": "Impostor"}
    res = await client.post(f"{BASE}/add", json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "DUPLICATE_IDENTIFIER"

    hr = (await client.get(BASE, params={"department": "HR"})).json()
    original = next(r for r in hr if r["id"] == "E001")
    assert original["name"] == "Amy Adams"


@pytest.mark.parametrize("missing", [
    "id", "name", "email", "position", "department", "gender", "dateOfJoining",
])
async def test_add_rejects_missing_required_field(client, missing):
    body = {k: v for k, v in NEW_EMPLOYEE.items() if k != missing}
    res = await client.post(f"{BASE}/add", json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_add_rejects_blank_required_field(client, test_db):
    res = await client.post(f"{BASE}/add", json={**NEW_EMPLOYEE, "position": "   "})
    assert res.status_code == 400
    count = await test_db.scalar(select(func.count()).select_from(Employee))
    assert count == 0


# ─── Update ──────────────────────────────────────────────────────

async def test_partial_update_overwrites_only_supplied_fields(client, seed_employees):
    res = await client.post(
        f"{BASE}/update/E003", json={"position": "Lead Designer", "gender": "Other"},
    )
    assert res.status_code == 200
    assert res.json() == {"message": "Employee updated successfully!"}

    record = (await client.get(BASE, params={"department": "Design"})).json()[0]
    assert record["position"] == "Lead Designer"
    assert record["gender"] == "Other"
    assert record["name"] == "Cara Diaz"
    assert record["dateOfJoining"] == "2024-03-15"


async def test_update_ignores_id_in_body(client, seed_employees):
    res = await client.post(
        f"{BASE}/update/E003", json={"id": "E999", "name": "Cara D."},
    )
    assert res.status_code == 200
    ids = _ids(await client.get(BASE))
    assert "E003" in ids
    assert "E999" not in ids


async def test_update_missing_id_is_404_and_creates_nothing(client, seed_employees, test_db):
    res = await client.post(f"{BASE}/update/NOPE", json={"name": "Nobody"})
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
    count = await test_db.scalar(select(func.count()).select_from(Employee))
    assert count == 5


async def test_update_rejects_blanking_a_required_field(client, seed_employees):
    res = await client.post(f"{BASE}/update/E001", json={"name": ""})
    assert res.status_code == 400
    record = (await client.get(BASE, params={"gender": "Female", "department": "HR"})).json()[0]
    assert record["name"] == "Amy Adams"


async def test_update_accepts_full_form_payload(client, seed_employees):
    body = {**NEW_EMPLOYEE, "id": "E002", "dateOfJoining": "2023-06-01T00:00:00.000Z"}
    res = await client.post(f"{BASE}/update/E002", json=body)
    assert res.status_code == 200
    record = next(r for r in (await client.get(BASE)).json() if r["id"] == "E002")
    assert record["name"] == "Nina North"
    assert record["dateOfJoining"] == "2023-06-01"


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_removes_record(client, seed_employees):
    res = await client.delete(f"{BASE}/E004")
    assert res.status_code == 200
    assert res.json() == {"message": "Employee deleted successfully."}
    assert "E004" not in _ids(await client.get(BASE))


async def test_delete_missing_id_still_succeeds(client, seed_employees):
    res = await client.delete(f"{BASE}/NOPE")
    assert res.status_code == 200
    assert res.json() == {"message": "Employee deleted successfully."}
    assert len((await client.get(BASE)).json()) == 5


# ─── Ids containing "/" ──────────────────────────────────────────

async def test_slash_id_can_be_updated_and_deleted(client, directory_client):
    await client.post(f"{BASE}/add", json={**NEW_EMPLOYEE, "id": "HR/001"})

    await directory_client.update_employee("HR/001", {"name": "Slash Person"})
    record = next(r for r in (await client.get(BASE)).json() if r["id"] == "HR/001")
    assert record["name"] == "Slash Person"

    message = await directory_client.delete_employee("HR/001")
    assert message == "Employee deleted successfully."
    assert (await client.get(BASE)).json() == []


async def test_missing_slash_id_delete_still_succeeds(client, seed_employees):
    res = await client.delete(f"{BASE}/NO%2FSUCH")
    assert res.status_code == 200
    assert len((await client.get(BASE)).json()) == 5
