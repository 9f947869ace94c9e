import os
import tempfile

# Point the app at a throwaway SQLite database before db.py is imported
_DB_DIR = tempfile.mkdtemp(prefix="matching-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SUPER_ADMIN_EMAIL"] = "admin@example.com"
os.environ["SUPER_ADMIN_PASSWORD"] = "admin-password"

import pytest
from fastapi.testclient import TestClient

from db import Base, SessionLocal, engine, init_schema
from matching.logic.config import MatchingConfig
from models.models_user import UserRole
from utils import crud_catalog, crud_qualification
from utils.auth_utils import hash_password
from utils.crud_user import create_user


@pytest.fixture(autouse=True)
def clean_database(monkeypatch):
    for name in ("MATCH_MIN_SCORE", "MATCH_GRADE_SCALE", "MATCH_CACHE_TTL_HOURS"):
        monkeypatch.delenv(name, raising=False)
    init_schema()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def config():
    return MatchingConfig(cache_ttl_hours=0)


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def student(db):
    user = create_user(
        db,
        email="ama@example.com",
        name="Ama Mensah",
        role=UserRole.STUDENT.value,
        password_hash=hash_password("secret123"),
    )
    db.commit()
    return user.student


@pytest.fixture
def catalog(db):
    """University of Ghana with a single Computer Science department."""
    university = crud_catalog.create_university(db, name="University of Ghana", location="Accra")
    department = crud_catalog.create_department(db, university_id=university.id, name="Computer Science", code="cs")
    db.commit()
    return department


@pytest.fixture
def make_program(db, catalog):
    def _make(name, requirements, department=None):
        return _add_program(db, department or catalog, name, requirements)
    return _make


@pytest.fixture
def make_qualification(db, student):
    def _make(type, subject, grade, verified=True):
        return _add_qualification(db, student, type, subject, grade, verified)
    return _make


def _add_program(db, department, name, requirements):
    program = crud_catalog.create_program(db, department_id=department.id, name=name)
    for type, subject, min_grade in requirements:
        crud_catalog.create_requirement(
            db,
            program_id=program.id,
            type=type,
            subject=subject,
            min_grade=min_grade,
            description=f"{type} {subject or ''} {min_grade or ''}".strip(),
        )
    db.commit()
    return program


def _add_qualification(db, student, type, subject, grade, verified=True):
    qualification = crud_qualification.create_qualification(
        db, student_id=student.id, type=type, subject=subject, grade=grade
    )
    if verified:
        crud_qualification.verify_qualification(db, qualification)
    db.commit()
    return qualification
