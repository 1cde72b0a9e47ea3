import os

# Keep the module-level engine off disk; every test builds its own in-memory DB.
os.environ.setdefault("AUTOCARE_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import date, timedelta  # noqa: E402

import pytest_asyncio  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from autocare.db import crud  # noqa: E402
from autocare.models import Base  # noqa: E402
from autocare.services.auth import AuthContext, build_context  # noqa: E402
from autocare.services import staff  # noqa: E402


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


def next_week() -> str:
    return (date.today() + timedelta(days=7)).isoformat()


def booking(service_type_id: str, **overrides) -> dict:
    data = {
        "make": "Toyota",
        "model": "Corolla",
        "year": 2018,
        "car_number_plate": "abc-1234",
        "mileage": 42000,
        "service_type": service_type_id,
        "appointment_date": next_week(),
        "appointment_time": "10:00",
        "notes": "",
    }
    data.update(overrides)
    return data


def worker_data(full_name: str, email: str, **overrides) -> dict:
    data = {
        "full_name": full_name,
        "email": email,
        "phone_number": "0771234567",
        "address": "12 Main Street",
        "primary_specialization": "Engine Specialist",
        "skills": "Oil Change, Tire Rotation",
        "hire_date": "2022-03-01",
        "hourly_rate": 25.0,
    }
    data.update(overrides)
    return data


async def make_customer(db, email: str = "cust@test.com") -> AuthContext:
    user = await crud.create_user(db, "Casey", "Customer", email, "x")
    return await build_context(user, db)


async def make_admin(db, email: str = "admin@test.com") -> AuthContext:
    user = await crud.create_user(db, "Ada", "Admin", email, "x", role="admin")
    return await build_context(user, db)


async def make_worker(db, full_name: str, email: str):
    """A worker with a login. Returns (worker, auth context)."""
    worker = await staff.create_worker(db, worker_data(full_name, email, password="workerpass"))
    user = await crud.get_user(db, worker.user_id)
    return worker, await build_context(user, db)


@pytest_asyncio.fixture
async def service_type(db):
    return await crud.create_service_type(db, "Oil Change", 30, "Engine oil", ["Oil", "Filter"])
