from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Dict, List, Optional, Union

# Marks may arrive as text from older clients; the aggregator decides what is malformed
Marks = Union[float, str, None]


# 1. INPUT COLLECTIONS
class StudentSchema(BaseModel):
    id: int
    first_name: str = ""
    last_name: str = ""
    roll_no: Optional[int] = None
    admission_no: Optional[str] = None

    # Name columns are nullable in the students table
    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def blank_names(cls, value):
        return "" if value is None else value

    class Config:
        from_attributes = True


class SubjectScheduleSchema(BaseModel):
    id: Optional[int] = None
    subject_id: int
    subject_name: str = ""
    max_marks: float = 100
    pass_marks: float = 33
    exam_date: Optional[date] = None
    start_time: Optional[str] = None  # "HH:MM", compared as text
    end_time: Optional[str] = None


class ResultRecordSchema(BaseModel):
    id: Optional[int] = None
    student_id: int
    subject_id: int
    marks_obtained: Marks = None
    max_marks: Marks = None
    grade: Optional[str] = None
    remarks: Optional[str] = None


# 2. DERIVED ROWS
class SubjectCell(BaseModel):
    marks: float
    max_marks: float
    grade: Optional[str] = None
    is_fail: bool = False


class AggregateRow(BaseModel):
    student: StudentSchema
    subjects: Dict[int, SubjectCell] = Field(default_factory=dict)
    total_obtained: float = 0
    total_max: float = 0
    subject_count: int = 0
    failed_subjects: int = 0
    percentage: float = 0
    result: str = "PASS"


# 3. FULL REPORT
class ExamInfo(BaseModel):
    id: int
    exam_name: str = ""
    academic_year: Optional[str] = None
    class_id: Optional[int] = None
    class_name: str = ""

    @field_validator("exam_name", "class_name", mode="before")
    @classmethod
    def blank_names(cls, value):
        return "" if value is None else value


class Broadsheet(BaseModel):
    exam: ExamInfo
    columns: List[SubjectScheduleSchema]
    rows: List[AggregateRow]
    student_count: int
    subject_count: int
    strict: bool = False
