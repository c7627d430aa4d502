import sys
import os
import base64
import tempfile
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tests.helpers.auth import TEST_JWT_KEY

TEST_WEBHOOK_SECRET = "whsec_" + base64.b64encode(b"quild-test-webhook-secret-32byte").decode()

# Settings are read at import time, so the environment has to be in place first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_JWT_KEY"] = TEST_JWT_KEY
os.environ["AUTH_JWT_ALGORITHM"] = "HS256"
os.environ["CLERK_WEBHOOK_SECRET"] = TEST_WEBHOOK_SECRET
os.environ["CLERK_SECRET_KEY"] = ""
os.environ["REDIS_URL"] = ""
os.environ["CACHE_ENABLED"] = "true"
os.environ["SEED_ENABLED"] = "true"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "quild-test-logs")

import asyncio
import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

import main
from quild.core.cache import cache
from quild.core.database import Base
from quild.models import course, lesson, phase, progress, user, week  # noqa: F401
from quild.utils import deps as deps_utils
from tests.helpers import factories
from tests.helpers.auth import make_session_token


@pytest.fixture(scope="function")
def database_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture(autouse=True)
def _clear_cache():
    asyncio.run(cache.clear())
    yield
    asyncio.run(cache.clear())

@pytest.fixture(scope="function")
def client(db_session):
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

@pytest.fixture
def auth_headers():
    def _headers(external_id: str = None) -> dict:
        token = make_session_token(external_id or f"user_{uuid.uuid4().hex[:12]}")
        return {"Authorization": f"Bearer {token}"}
    return _headers

@pytest.fixture
def user_factory(db_session):
    def _create(external_id: str = None, **fields):
        return factories.create_user(db_session, external_id=external_id or f"user_{uuid.uuid4().hex[:12]}", **fields)
    return _create

@pytest.fixture
def curriculum_factory(db_session):
    def _create(layout, **lesson_fields):
        return factories.create_curriculum(db_session, layout, **lesson_fields)
    return _create

@pytest.fixture
def course_factory(db_session):
    def _create(**fields):
        return factories.create_course(db_session, **fields)
    return _create
