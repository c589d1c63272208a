import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from database import get_db
from models.exams import ExamType, Subject
from models.results import StudentMark
from schemas.broadsheet import ResultRecordSchema
from services.permissions import require_permission
from pydantic import BaseModel
from typing import List, Optional

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/exams", tags=["Results"])

# ===========================
#      SCHEMAS (MODELS)
# ===========================
class MarkEntrySchema(BaseModel):
    student_id: int
    subject_id: int
    marks_obtained: float
    max_marks: float = 100
    remarks: Optional[str] = None

class MarksSubmitSchema(BaseModel):
    results: List[MarkEntrySchema]

class MarkUpdateSchema(BaseModel):
    marks_obtained: float
    max_marks: float = 100
    remarks: Optional[str] = None

class StudentResultSchema(ResultRecordSchema):
    subject_name: str = ""
    subject_code: Optional[str] = None


def calculate_grade(percentage):
    if percentage >= 90: return "A+"
    elif percentage >= 80: return "A"
    elif percentage >= 70: return "B+"
    elif percentage >= 60: return "B"
    elif percentage >= 50: return "C+"
    elif percentage >= 40: return "C"
    elif percentage >= 33: return "D"
    else: return "F"


def check_marks(student_id, marks_obtained, max_marks):
    if marks_obtained > max_marks:
        raise HTTPException(
            status_code=400,
            detail=f"Marks obtained ({marks_obtained:g}) cannot exceed max marks "
                   f"({max_marks:g}) for student {student_id}",
        )
    if marks_obtained < 0 or max_marks <= 0:
        raise HTTPException(status_code=400, detail=f"Invalid marks for student {student_id}")


def commit_or_500(db: Session):
    try:
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


def load_results(db: Session, exam_id: int, subject_id: Optional[int] = None):
    query = db.query(StudentMark).filter(StudentMark.exam_id == exam_id)
    if subject_id is not None:
        query = query.filter(StudentMark.subject_id == subject_id)

    # id order keeps "last entry wins" stable for duplicates
    return [
        ResultRecordSchema(
            id=m.id,
            student_id=m.student_id,
            subject_id=m.subject_id,
            marks_obtained=m.marks_obtained,
            max_marks=m.max_marks,
            grade=m.grade,
            remarks=m.remarks,
        )
        for m in query.order_by(StudentMark.id).all()
    ]


# 1. API: All results of an exam (optionally one subject)
@router.get("/{exam_id}/results", response_model=List[ResultRecordSchema],
            dependencies=[Depends(require_permission("exams", "read"))])
def get_exam_results(exam_id: int, subject_id: Optional[int] = None, db: Session = Depends(get_db)):
    return load_results(db, exam_id, subject_id)


# 2. API: One student's results for an exam
@router.get("/{exam_id}/students/{student_id}/results", response_model=List[StudentResultSchema],
            dependencies=[Depends(require_permission("exams", "read"))])
def get_student_results(exam_id: int, student_id: int, db: Session = Depends(get_db)):
    rows = db.query(StudentMark, Subject).join(Subject, StudentMark.subject_id == Subject.id).filter(
        StudentMark.exam_id == exam_id,
        StudentMark.student_id == student_id
    ).order_by(Subject.subject_name).all()

    return [
        StudentResultSchema(
            id=m.id,
            student_id=m.student_id,
            subject_id=m.subject_id,
            marks_obtained=m.marks_obtained,
            max_marks=m.max_marks,
            grade=m.grade,
            remarks=m.remarks,
            subject_name=sub.subject_name or "",
            subject_code=sub.subject_code,
        )
        for m, sub in rows
    ]


# 3. API: Bulk enter / update results
@router.post("/{exam_id}/results", dependencies=[Depends(require_permission("exams", "update"))])
def enter_results(exam_id: int, payload: MarksSubmitSchema, db: Session = Depends(get_db)):
    if not payload.results:
        raise HTTPException(status_code=400, detail="Results array is required")

    exam = db.query(ExamType).filter(ExamType.id == exam_id).first()
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")

    # Same (student, subject) twice in one payload: the later entry wins
    entries = {}
    for item in payload.results:
        check_marks(item.student_id, item.marks_obtained, item.max_marks)
        entries[(item.student_id, item.subject_id)] = item

    inserted, updated = 0, 0
    for item in entries.values():
        grade = calculate_grade(item.marks_obtained / item.max_marks * 100)

        existing = db.query(StudentMark).filter(
            StudentMark.exam_id == exam_id,
            StudentMark.student_id == item.student_id,
            StudentMark.subject_id == item.subject_id
        ).first()

        if existing:
            existing.marks_obtained = item.marks_obtained
            existing.max_marks = item.max_marks
            existing.grade = grade
            existing.remarks = item.remarks
            updated += 1
        else:
            db.add(StudentMark(
                exam_id=exam_id,
                student_id=item.student_id,
                subject_id=item.subject_id,
                marks_obtained=item.marks_obtained,
                max_marks=item.max_marks,
                grade=grade,
                remarks=item.remarks,
            ))
            inserted += 1

    commit_or_500(db)

    logger.info("Exam %s results saved: %d inserted, %d updated", exam_id, inserted, updated)
    return {"message": "Results Saved Successfully!", "inserted": inserted, "updated": updated}


# 4. API: Correct a single result
@router.put("/results/{result_id}", response_model=ResultRecordSchema,
            dependencies=[Depends(require_permission("exams", "update"))])
def update_result(result_id: int, payload: MarkUpdateSchema, db: Session = Depends(get_db)):
    mark = db.query(StudentMark).filter(StudentMark.id == result_id).first()
    if not mark:
        raise HTTPException(status_code=404, detail="Result not found")

    check_marks(mark.student_id, payload.marks_obtained, payload.max_marks)

    mark.marks_obtained = payload.marks_obtained
    mark.max_marks = payload.max_marks
    mark.grade = calculate_grade(payload.marks_obtained / payload.max_marks * 100)
    mark.remarks = payload.remarks
    commit_or_500(db)

    logger.info("Result %s updated", result_id)
    return ResultRecordSchema(
        id=mark.id,
        student_id=mark.student_id,
        subject_id=mark.subject_id,
        marks_obtained=mark.marks_obtained,
        max_marks=mark.max_marks,
        grade=mark.grade,
        remarks=mark.remarks,
    )


# 5. API: Remove a result
@router.delete("/results/{result_id}", dependencies=[Depends(require_permission("exams", "delete"))])
def delete_result(result_id: int, db: Session = Depends(get_db)):
    mark = db.query(StudentMark).filter(StudentMark.id == result_id).first()
    if not mark:
        raise HTTPException(status_code=404, detail="Result not found")

    db.delete(mark)
    commit_or_500(db)

    logger.info("Result %s deleted", result_id)
    return {"message": "Result Deleted Successfully", "id": result_id}
