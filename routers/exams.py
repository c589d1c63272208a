from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload
from database import get_db
from models.exams import ExamType
from schemas.broadsheet import ExamInfo
from services.permissions import require_permission

router = APIRouter(prefix="/api/v1/exams", tags=["Exams"])


def load_exam(db: Session, exam_id: int):
    exam = db.query(ExamType).filter(ExamType.id == exam_id).options(joinedload(ExamType.class_val)).first()
    if not exam:
        return None
    return ExamInfo(
        id=exam.id,
        exam_name=exam.exam_name,
        academic_year=exam.academic_year,
        class_id=exam.class_id,
        class_name=exam.class_val.class_name if exam.class_val else "",
    )


@router.get("/{exam_id}", response_model=ExamInfo, dependencies=[Depends(require_permission("exams", "read"))])
def get_exam(exam_id: int, db: Session = Depends(get_db)):
    exam = load_exam(db, exam_id)
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")
    return exam
