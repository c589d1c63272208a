import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")

from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models.exams import ExamSchedule, ExamType, Subject
from models.masters import ClassMaster
from models.results import StudentMark
from models.students import Student

ADMIN = {"X-User-Role": "super_admin"}


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def exam_setup(db_session):
    """Class 10 half yearly: Maths on day one, English on day two, Science not examined."""
    db = db_session
    cls = ClassMaster(class_name="Class 10")
    maths = Subject(subject_name="Maths", subject_code="MAT")
    english = Subject(subject_name="English", subject_code="ENG")
    science = Subject(subject_name="Science", subject_code="SCI")
    db.add_all([cls, maths, english, science])
    db.commit()

    ashish = Student(admission_no="ADM-001", first_name="Ashish", last_name="Kumar", class_id=cls.id, roll_no=2)
    rahul = Student(admission_no="ADM-002", first_name="Rahul", last_name="Verma", class_id=cls.id, roll_no=1)
    neha = Student(admission_no="ADM-003", first_name="Neha", last_name="Singh", class_id=cls.id, roll_no=None)
    left = Student(admission_no="ADM-004", first_name="Old", last_name="Boy", class_id=cls.id, roll_no=3, status=False)
    exam = ExamType(exam_name="Half Yearly", academic_year="2025-2026", class_id=cls.id)
    db.add_all([ashish, rahul, neha, left, exam])
    db.commit()

    db.add_all([
        ExamSchedule(exam_id=exam.id, subject_id=english.id, exam_date=date(2025, 1, 2),
                     start_time=time(9, 0), end_time=time(12, 0), max_marks=100, pass_marks=35),
        ExamSchedule(exam_id=exam.id, subject_id=maths.id, exam_date=date(2025, 1, 1),
                     start_time=time(9, 0), end_time=time(12, 0), max_marks=100, pass_marks=35),
    ])
    db.add_all([
        StudentMark(exam_id=exam.id, student_id=ashish.id, subject_id=maths.id, marks_obtained=80, max_marks=100, grade="A"),
        StudentMark(exam_id=exam.id, student_id=ashish.id, subject_id=english.id, marks_obtained=30, max_marks=100, grade="F"),
        StudentMark(exam_id=exam.id, student_id=rahul.id, subject_id=maths.id, marks_obtained=90, max_marks=100, grade="A+"),
        StudentMark(exam_id=exam.id, student_id=rahul.id, subject_id=english.id, marks_obtained=70, max_marks=100, grade="B+"),
    ])
    db.commit()

    return {
        "class_id": cls.id,
        "exam_id": exam.id,
        "maths": maths.id,
        "english": english.id,
        "science": science.id,
        "ashish": ashish.id,
        "rahul": rahul.id,
        "neha": neha.id,
        "left": left.id,
    }
