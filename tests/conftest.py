from __future__ import annotations

import os
import uuid
from datetime import date, timedelta
from typing import Callable, Iterator

os.environ.setdefault("ECOLE_DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from ecole.core.database import Base, engine_options, get_db
from ecole.main import app
from ecole.models import Classroom, Gender, Grade, Parent, Student, StudentParentLink, User
from ecole.utils.datetime import utc_now


@pytest.fixture()
def engine(tmp_path):
    url = f"sqlite:///{tmp_path / 'ecole.db'}"
    engine = create_engine(url, **engine_options(url))
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def session(session_factory) -> Iterator[Session]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory) -> Iterator[TestClient]:
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_classroom(session) -> Callable[..., Classroom]:
    def factory(name: str = "6ème A", **overrides) -> Classroom:
        classroom = Classroom(id=uuid.uuid4(), name=name, **overrides)
        session.add(classroom)
        session.commit()
        return classroom

    return factory


@pytest.fixture()
def make_teacher(session) -> Callable[..., User]:
    def factory(email: str = "koffi.yao@example.ci", **overrides) -> User:
        values = {"id": uuid.uuid4(), "email": email, "first_name": "Koffi", "last_name": "Yao"}
        values.update(overrides)
        teacher = User(**values)
        session.add(teacher)
        session.commit()
        return teacher

    return factory


@pytest.fixture()
def make_grade(session) -> Callable[..., Grade]:
    def factory(grade_id: int, name: str, cycle_id: str = "college") -> Grade:
        grade = Grade(id=grade_id, name=name, cycle_id=cycle_id)
        session.add(grade)
        session.commit()
        return grade

    return factory


@pytest.fixture()
def make_parent(session) -> Callable[..., Parent]:
    def factory(email: str = "awa.kone@example.ci", **overrides) -> Parent:
        parent = Parent(id=uuid.uuid4(), email=email, **overrides)
        session.add(parent)
        session.commit()
        return parent

    return factory


@pytest.fixture()
def make_student(session) -> Callable[..., Student]:
    counter = iter(range(1, 10_000))

    def factory(**overrides) -> Student:
        values = {
            "id": uuid.uuid4(),
            "id_number": f"A{next(counter):07d}",
            "first_name": "Jean",
            "last_name": "Kouassi",
            "gender": Gender.M,
            "date_of_birth": date(2012, 3, 14),
        }
        values.update(overrides)
        student = Student(**values)
        session.add(student)
        session.commit()
        return student

    return factory


@pytest.fixture()
def make_link(session) -> Callable[..., StudentParentLink]:
    def factory(student: Student, parent: Parent, otp: str = "482913", **overrides) -> StudentParentLink:
        values = {
            "id": uuid.uuid4(),
            "student_id": student.id,
            "parent_id": parent.id,
            "otp": otp,
            "expired_at": utc_now() + timedelta(hours=1),
        }
        values.update(overrides)
        link = StudentParentLink(**values)
        session.add(link)
        session.commit()
        return link

    return factory
