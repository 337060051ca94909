"""Shared fixtures: in-memory database, settings, users and an API client."""

import uuid

from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import hash_password
from app.models import Admin, Base, Permission, PermissionLevel, User
from app.services import accounts, app_settings

TEST_PASSWORD = "correct-horse-battery"
TEST_SECRET = "unit-test-secret-0123456789abcdef-0123"


def _prepare_schema(engine: Engine) -> sessionmaker:
    """Enforce foreign keys, create every table and seed the default app settings."""

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = factory()
    try:
        app_settings.ensure_defaults(db)
    finally:
        db.close()
    return factory


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite schema with foreign keys enforced."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return _prepare_schema(engine)


def make_file_session_factory(path: str) -> tuple[Engine, sessionmaker]:
    """File-backed SQLite schema for tests that need one connection per thread."""
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    return engine, _prepare_schema(engine)


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "ENFORCE_EMAIL": False,
        "ADMIN_CREATED": False,
    }
    values.update(overrides)
    return Settings(**values)


def make_user(
    db: Session,
    name: str,
    level: PermissionLevel | None = None,
    admin: bool = False,
    email: str | None = None,
    password: str = TEST_PASSWORD,
) -> User:
    """Insert a user directly, optionally with a permission row and admin role."""
    user = User(
        id=uuid.uuid4(),
        name=name,
        email=email,
        password_hash=hash_password(password, rounds=4),
    )
    db.add(user)
    db.flush()
    if level is not None:
        db.add(Permission(user_id=user.id, permission=level))
    if admin:
        db.add(Admin(user_id=user.id))
    db.commit()
    return user


def bearer(user: User, settings: Settings) -> dict[str, str]:
    return {"Authorization": f"Bearer {accounts.issue_token(user, settings)}"}


def make_client(factory: sessionmaker, settings: Settings) -> TestClient:
    """TestClient with get_db/get_settings pointed at the test database and settings."""
    from app.main import app

    def override_get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app, raise_server_exceptions=False)


def reset_overrides() -> None:
    from app.main import app

    app.dependency_overrides.clear()
