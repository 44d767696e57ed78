"""
Fixture principali per i test di LogiTrack API
"""
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Any, AsyncGenerator, Dict, Generator, List

# Configurazione di test prima di importare l'applicazione
_DOCUMENT_ROOT = tempfile.mkdtemp(prefix="logitrack-documents-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["CACHE_ENABLED"] = "true"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DOCUMENT_STORAGE_ROOT"] = _DOCUMENT_ROOT
os.environ["DOCUMENT_PUBLIC_BASE_URL"] = "/media/documents"
os.environ["DEFAULT_LOCALE"] = "pt-PT"
os.environ["ALLOW_SIGNUP"] = "true"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Aggiungi il path del progetto
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import logitrack.core.cache as cache_module
from logitrack.core.container_config import get_configured_container
from logitrack.database import Base, get_db
from logitrack.events.event import Event
from logitrack.events.event_bus import EventBus
from logitrack.main import app
from logitrack.models.container_type import DEFAULT_CONTAINER_TYPES
from logitrack.repository.container_type_repository import ContainerTypeRepository
from logitrack.services.auth.session_registry import SessionRegistry, set_session_registry
from logitrack.services.routers.auth_service import get_current_user
from logitrack.services.storage.document_storage import IDocumentStorage, LocalDocumentStorage


# ============================================================================
# Database Test Setup
# ============================================================================

# SQLite in-memory per i test (le foreign key sono attivate dal listener su Engine)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Crea un database pulito per ogni test, con i tipi di container predefiniti.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    ContainerTypeRepository(session).seed_defaults(DEFAULT_CONTAINER_TYPES)

    try:
        yield session
        session.rollback()
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


def override_get_db():
    """Override per get_db dependency"""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


# ============================================================================
# Cache e storage isolati per test
# ============================================================================

@pytest.fixture(autouse=True)
def reset_cache_manager():
    """Ogni test parte con una cache in memoria vuota"""
    cache_module._cache_manager = None
    yield
    cache_module._cache_manager = None


@pytest.fixture(scope="function")
def document_storage() -> Generator[LocalDocumentStorage, None, None]:
    """Storage locale sulla directory servita come static files, svuotata a fine test"""
    storage = LocalDocumentStorage(_DOCUMENT_ROOT, "/media/documents")
    get_configured_container().register_instance(IDocumentStorage, storage)
    yield storage
    for child in Path(_DOCUMENT_ROOT).iterdir():
        if child.is_dir():
            shutil.rmtree(child, ignore_errors=True)
        else:
            child.unlink(missing_ok=True)


# ============================================================================
# EventBus Spy
# ============================================================================

class EventBusSpy(EventBus):
    """EventBus che registra tutti gli eventi pubblicati per i test"""

    def __init__(self):
        super().__init__()
        self.published_events: List[Event] = []

    async def publish(self, event: Event) -> None:
        self.published_events.append(event)
        await super().publish(event)

    def get_events_by_type(self, event_type: str) -> List[Event]:
        """Ritorna tutti gli eventi di un tipo specifico"""
        return [e for e in self.published_events if e.event_type == event_type]


@pytest.fixture(scope="function")
def event_bus_spy() -> Generator[EventBusSpy, None, None]:
    """Registro sessioni collegato a un EventBus spy"""
    spy = EventBusSpy()
    set_session_registry(SessionRegistry(spy))
    yield spy
    set_session_registry(None)


# ============================================================================
# Auth Override
# ============================================================================

ADMIN_ID = "00000000-0000-4000-8000-000000000001"
USER_ID = "00000000-0000-4000-8000-000000000002"


def create_test_user(
    username: str = "user@example.com",
    user_id: str = USER_ID,
    roles: List[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Crea un dict utente come quello restituito da get_current_user"""
    if roles is None:
        roles = [{"name": "USER", "permissions": ["C", "R", "U", "D"]}]

    return {
        "username": username,
        "id": user_id,
        "roles": roles,
        "session_id": "test-session",
    }


# ============================================================================
# App Fixture con Overrides
# ============================================================================

@pytest.fixture(scope="function")
def test_app(db_session: Session, event_bus_spy: EventBusSpy, document_storage: LocalDocumentStorage):
    """
    App FastAPI con database di test e utente autenticato di default.
    """
    app.dependency_overrides[get_db] = override_get_db

    default_user = create_test_user()
    app.dependency_overrides[get_current_user] = lambda: default_user

    try:
        yield app
    finally:
        app.dependency_overrides.clear()


# ============================================================================
# HTTP Clients
# ============================================================================

@pytest.fixture
def client(test_app) -> TestClient:
    """Client senza override di autenticazione: usa i token reali"""
    test_app.dependency_overrides.pop(get_current_user, None)
    return TestClient(test_app)


@pytest.fixture
def admin_user() -> Dict[str, Any]:
    """Utente admin per i test"""
    return create_test_user(
        username="admin@example.com",
        user_id=ADMIN_ID,
        roles=[{"name": "ADMIN", "permissions": ["C", "R", "U", "D"]}]
    )


@pytest.fixture
def user_user() -> Dict[str, Any]:
    """Utente operativo per i test"""
    return create_test_user()


@pytest.fixture
def admin_client(test_app, admin_user) -> TestClient:
    """Client con utente admin"""
    test_app.dependency_overrides[get_current_user] = lambda: admin_user
    return TestClient(test_app)


@pytest.fixture
def user_client(test_app, user_user) -> TestClient:
    """Client con utente base"""
    test_app.dependency_overrides[get_current_user] = lambda: user_user
    return TestClient(test_app)


@pytest_asyncio.fixture
async def admin_client_async(test_app, admin_user) -> AsyncGenerator[AsyncClient, None]:
    """Client async con utente admin"""
    test_app.dependency_overrides[get_current_user] = lambda: admin_user
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def user_client_async(test_app, user_user) -> AsyncGenerator[AsyncClient, None]:
    """Client async con utente base"""
    test_app.dependency_overrides[get_current_user] = lambda: user_user
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac
