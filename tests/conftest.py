import pytest
from fastapi.testclient import TestClient

from careertrack.core.auth import SessionTokenService
from careertrack.core.config import Settings
from careertrack.db.database import Database
from careertrack.db.repositories import (
    UserRepository, SkillRepository, JobTargetRepository, RequiredSkillRepository,
    LearningGoalRepository, JobApplicationRepository
)
from careertrack.main import create_app
from careertrack.services.credential_service import CredentialVerifier, build_password_context
from careertrack.services.ownership import JobTargetGuard, OwnershipGuard

PASSWORD = "correct-horse"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret_key="test-secret",
        jwt_expire_minutes=15,
        bcrypt_rounds=4,
        log_level="WARNING",
    )


# ============================================================
# COMPONENT FIXTURES
# ============================================================

@pytest.fixture
def database(settings):
    db = Database(settings.sqlalchemy_database_url)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def users(database):
    return UserRepository(database)


@pytest.fixture
def credentials(users):
    return CredentialVerifier(users, build_password_context(rounds=4))


@pytest.fixture
def token_service(settings):
    return SessionTokenService.from_settings(settings)


@pytest.fixture
def skill_guard(database):
    return OwnershipGuard(SkillRepository(database), "skill")


@pytest.fixture
def job_guard(database):
    return JobTargetGuard(JobTargetRepository(database), RequiredSkillRepository(database))


@pytest.fixture
def goal_guard(database):
    return OwnershipGuard(LearningGoalRepository(database), "goal")


@pytest.fixture
def application_guard(database):
    return OwnershipGuard(JobApplicationRepository(database), "application")


@pytest.fixture
def alice(users):
    # hash content is irrelevant for ownership tests
    return users.create("alice@example.com", "not-a-real-hash", "Alice")


@pytest.fixture
def bob(users):
    return users.create("bob@example.com", "not-a-real-hash", "Bob")


# ============================================================
# API FIXTURES
# ============================================================

@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(client, email, password=PASSWORD, name="Test User"):
    response = client.post("/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def bearer(client, email, password=PASSWORD):
    """Register `email` and return Authorization headers for it."""
    register(client, email, password)
    response = client.post("/token", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def make_headers(client):
    return lambda email, password=PASSWORD: bearer(client, email, password)


@pytest.fixture
def alice_headers(client):
    return bearer(client, "alice@example.com")


@pytest.fixture
def bob_headers(client):
    return bearer(client, "bob@example.com")
