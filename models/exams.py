from sqlalchemy import Column, Integer, String, ForeignKey, Date, Time
from sqlalchemy.orm import relationship
from database import Base

# 1. SUBJECT MASTER (Hindi, English, Math...)
class Subject(Base):
    __tablename__ = "subjects"
    id = Column(Integer, primary_key=True, index=True)
    subject_name = Column(String(100), unique=True)
    subject_code = Column(String(20), nullable=True)

# 2. EXAM (Half Yearly, Annual...) - one per class
class ExamType(Base):
    __tablename__ = "exams"
    id = Column(Integer, primary_key=True, index=True)
    exam_name = Column(String(100))
    academic_year = Column(String(20), default="2025-2026")
    class_id = Column(Integer, ForeignKey("classes.id"))

    class_val = relationship("models.masters.ClassMaster")

# 3. EXAM SCHEDULE (Date sheet with marks)
class ExamSchedule(Base):
    __tablename__ = "exam_schedule"
    id = Column(Integer, primary_key=True, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"))
    subject_id = Column(Integer, ForeignKey("subjects.id"))

    exam_date = Column(Date)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)

    max_marks = Column(Integer, default=100)
    pass_marks = Column(Integer, default=33)

    exam_val = relationship("ExamType")
    subject_val = relationship("Subject")
