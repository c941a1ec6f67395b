import httpx
import pytest
from sqlalchemy import func, select

from care_api.config import Settings
from care_api.main import create_app
from care_api.models.patient import Patient

TEST_PASSWORD = "s3nha-forte"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        port=4000,
        secret_key="unit-test-secret",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'care.db'}",
        frontend_url="http://localhost:5173",
        environment="test",
        salt_rounds=4,
    )


@pytest.fixture
async def app(settings):
    application = create_app(settings)
    container = application.state.container
    await container.startup()
    yield application
    await container.shutdown()


@pytest.fixture
def container(app):
    return app.state.container


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def password():
    return TEST_PASSWORD


@pytest.fixture
async def registered(container, password):
    """A registered user: AuthResult with token and public user."""
    return await container.auth.register("enfermeira@ubs.test", password, name="Ana Souza")


@pytest.fixture
def auth_headers(registered):
    return {"Authorization": f"Bearer {registered.token}"}


@pytest.fixture
async def patient(container):
    async with container.database.sessions() as session:
        record = Patient(
            full_name="Maria da Silva",
            cpf="123.456.789-00",
            sus_card="898000000000001",
            gender="F",
        )
        session.add(record)
        await session.commit()
        await session.refresh(record)
        return record


@pytest.fixture
def load_patient(container):
    """Read a patient back through a fresh session."""
    async def load(patient_id: int) -> Patient:
        async with container.database.sessions() as session:
            return await session.get(Patient, patient_id)
    return load


@pytest.fixture
def count_rows(container):
    async def count(model) -> int:
        async with container.database.sessions() as session:
            return await session.scalar(select(func.count()).select_from(model))
    return count
