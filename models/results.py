from sqlalchemy import Column, Integer, String, ForeignKey, Float, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base

class StudentMark(Base):
    __tablename__ = "exam_results"
    # One mark per student per subject per exam
    __table_args__ = (UniqueConstraint("exam_id", "student_id", "subject_id", name="uq_exam_student_subject"),)

    id = Column(Integer, primary_key=True, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"))
    student_id = Column(Integer, ForeignKey("students.id"))
    subject_id = Column(Integer, ForeignKey("subjects.id"))

    marks_obtained = Column(Float, default=0.0)
    max_marks = Column(Float, default=100.0)
    grade = Column(String(5), nullable=True)  # Example: "A+"
    remarks = Column(String(255), nullable=True)

    student_val = relationship("models.students.Student")
    subject_val = relationship("models.exams.Subject")
    exam_val = relationship("models.exams.ExamType")
