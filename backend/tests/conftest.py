import os
import tempfile
from dataclasses import dataclass

# Keep the app's import-time settings away from the developer's database and media folder
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MEDIA_DIR"] = tempfile.mkdtemp(prefix="carebridge-media-")
os.environ["MAIL_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token, get_password_hash
from app.db.base import Base
from app.db.session import build_engine, get_db
from app.main import app
from app.models import Job, JobCategory, Recruiter, RecruiterType, Role, User, Worker
from app.services.auth import token_claims
from app.services.notifications import NotificationDispatcher, get_notifier
from app.services.storage import LocalImageStorage, get_storage

PASSWORD = "secret123"


@dataclass
class SentMail:
    to: str
    subject: str
    html_body: str


class RecordingTransport:
    """Mail transport that keeps every send attempt; optionally fails each one."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[SentMail] = []

    def send_mail(self, to: str, subject: str, html_body: str) -> None:
        self.sent.append(SentMail(to, subject, html_body))
        if self.fail:
            raise ConnectionError("SMTP server unavailable")

    def to(self, email: str) -> list[SentMail]:
        return [mail for mail in self.sent if mail.to == email]


# ============== Database ==============


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


# ============== Collaborators ==============


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def notifier(transport):
    return NotificationDispatcher(transport, "http://frontend.test", "http://admin.test")


@pytest.fixture
def storage(tmp_path):
    return LocalImageStorage(media_dir=str(tmp_path), media_url="/media", max_bytes=1024)


@pytest.fixture
def client(session_factory, notifier, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============== Factories ==============


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role: Role = Role.WORKER, email: str = None, is_active: bool = True, **fields) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"{role.value.lower()}{counter['n']}@example.com",
            password=get_password_hash(PASSWORD),
            first_name=fields.pop("first_name", role.value.title()),
            last_name=fields.pop("last_name", f"Number{counter['n']}"),
            role=role,
            is_active=is_active,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN, email="admin@example.com")


@pytest.fixture
def recruiter_user(make_user):
    return make_user(Role.RECRUITER, email="recruiter@example.com", first_name="Sarah", last_name="Chen")


@pytest.fixture
def worker_user(make_user):
    return make_user(Role.WORKER, email="worker@example.com", first_name="John", last_name="Doe")


@pytest.fixture
def recruiter_profile(db, recruiter_user):
    recruiter = Recruiter(
        user_id=recruiter_user.id,
        company_name="Acme Care",
        type=RecruiterType.COMPANY,
        location="Kigali",
    )
    db.add(recruiter)
    db.commit()
    db.refresh(recruiter)
    return recruiter


@pytest.fixture
def worker_profile(db, worker_user):
    worker = Worker(user_id=worker_user.id, location="Kigali", skills="Child care")
    db.add(worker)
    db.commit()
    db.refresh(worker)
    return worker


@pytest.fixture
def category(db):
    category = JobCategory(name="Nanny", description="Child care")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def job(db, category, recruiter_user):
    job = Job(
        title="Full-time Nanny",
        description="Two children, weekdays",
        location="Kigali",
        category_id=category.id,
        recruiter_id=recruiter_user.id,
        skills=["Child care"],
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


# ============== Auth ==============


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(token_claims(user))}"}


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def recruiter_headers(recruiter_user):
    return auth_headers(recruiter_user)


@pytest.fixture
def worker_headers(worker_user):
    return auth_headers(worker_user)


@pytest.fixture
def headers_for():
    return auth_headers
