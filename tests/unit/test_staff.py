import pytest

from autocare.db import crud
from autocare.services import scheduling, staff
from autocare.services.auth import verify_password
from autocare.services.errors import ConflictError, NotFoundError, ValidationError

from conftest import booking, make_customer, worker_data


# ── service types ─────────────────────────────────────────

async def test_create_service_type(db):
    st = await staff.create_service_type(
        db, {"name": "  Tyre Rotation ", "estimated_time": "40", "features": ["Rotate", "Balance"]},
    )
    assert st.name == "Tyre Rotation"
    assert st.estimated_time == 40
    assert st.features == ["Rotate", "Balance"]
    assert st.description == ""


@pytest.mark.parametrize("data", [
    {"name": "", "estimated_time": 10},
    {"name": "Wash"},
])
async def test_create_service_type_requires_name_and_time(db, data):
    with pytest.raises(ValidationError, match="required"):
        await staff.create_service_type(db, data)


@pytest.mark.parametrize("minutes", [-5, "soon"])
async def test_create_service_type_rejects_bad_time(db, minutes):
    with pytest.raises(ValidationError, match="positive integer"):
        await staff.create_service_type(db, {"name": "Wash", "estimated_time": minutes})


async def test_update_service_type_partial(db, service_type):
    st = await staff.update_service_type(db, service_type.id, {"estimated_time": 45, "name": None})
    assert st.estimated_time == 45
    assert st.name == "Oil Change"


async def test_update_service_type_rejects_blank_name(db, service_type):
    with pytest.raises(ValidationError, match="cannot be empty"):
        await staff.update_service_type(db, service_type.id, {"name": "   "})
    assert service_type.name == "Oil Change"


async def test_delete_service_type_in_use_conflicts(db, service_type):
    customer = await make_customer(db)
    await scheduling.create_appointment(db, customer, booking(service_type.id))
    with pytest.raises(ConflictError):
        await staff.delete_service_type(db, service_type.id)


async def test_delete_service_type(db, service_type):
    await staff.delete_service_type(db, service_type.id)
    with pytest.raises(NotFoundError):
        await staff.get_service_type(db, service_type.id)


# ── workers ───────────────────────────────────────────────

async def test_create_worker_normalises_fields(db):
    worker = await staff.create_worker(db, worker_data(
        "Jane Doe", "Jane@Test.com",
        certifications='["ASE A1", "ASE A5"]',
        weekly_availability=["monday", "Wed"],
    ))
    assert worker.email == "jane@test.com"
    assert worker.skills == ["Oil Change", "Tire Rotation"]
    assert worker.certifications == ["ASE A1", "ASE A5"]
    assert worker.weekly_availability == ["Mon", "Wed"]
    assert worker.hire_date.isoformat() == "2022-03-01"
    assert worker.user_id is None
    assert worker.workload == 0
    assert worker.status == "available"


async def test_create_worker_missing_fields(db):
    data = worker_data("Jane Doe", "jane@test.com")
    del data["hourly_rate"]
    with pytest.raises(ValidationError, match="All required fields"):
        await staff.create_worker(db, data)


async def test_create_worker_duplicate_email(db):
    await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com"))
    with pytest.raises(ConflictError):
        await staff.create_worker(db, worker_data("Janet Doe", "JANE@test.com"))


async def test_create_worker_negative_rate(db):
    with pytest.raises(ValidationError, match="negative"):
        await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com", hourly_rate=-1))


async def test_create_worker_with_password_creates_login(db):
    worker = await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com", password="s3cret-pass"))
    user = await crud.get_user(db, worker.user_id)
    assert user.role == "worker"
    assert user.first_name == "Jane"
    assert user.last_name == "Doe"
    assert verify_password("s3cret-pass", user.password_hash)


async def test_create_worker_login_email_taken(db):
    await crud.create_user(db, "Jane", "Doe", "jane@test.com", "x")
    with pytest.raises(ConflictError, match="account"):
        await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com", password="s3cret-pass"))


async def test_update_worker_ignores_derived_fields(db):
    worker = await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com"))
    updated = await staff.update_worker(db, worker.id, {"phone_number": "0000", "workload": 9, "status": "busy"})
    assert updated.phone_number == "0000"
    assert updated.workload == 0
    assert updated.status == "available"


async def test_update_worker_rejects_empty_required(db):
    worker = await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com"))
    with pytest.raises(ValidationError):
        await staff.update_worker(db, worker.id, {"full_name": "  "})


async def test_update_worker_email_conflict(db):
    await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com"))
    john = await staff.create_worker(db, worker_data("John Roe", "john@test.com"))
    with pytest.raises(ConflictError):
        await staff.update_worker(db, john.id, {"email": "jane@test.com"})


async def test_lookup_workers(db):
    await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com"))
    await staff.create_worker(db, worker_data("Janet Smith", "janet@test.com"))
    await staff.create_worker(db, worker_data("John Roe", "john@test.com"))

    found = await staff.lookup_workers(db, "JAN")
    assert [w.full_name for w in found] == ["Jane Doe", "Janet Smith"]

    with pytest.raises(ValidationError):
        await staff.lookup_workers(db, " ")


async def test_delete_worker(db):
    worker = await staff.create_worker(db, worker_data("Jane Doe", "jane@test.com"))
    await staff.delete_worker(db, worker.id)
    with pytest.raises(NotFoundError):
        await staff.get_worker(db, worker.id)
