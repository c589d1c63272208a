import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, joinedload
from database import get_db
from models.exams import ExamType, ExamSchedule
from schemas.broadsheet import SubjectScheduleSchema
from services.broadsheet import sort_schedules
from services.permissions import require_permission
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/exam-schedules", tags=["Exam Schedule"])

# --- SCHEMAS ---
class ScheduleItem(BaseModel):
    subject_id: int
    exam_date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    max_marks: int = 100
    pass_marks: int = 33

class ScheduleSaveSchema(BaseModel):
    schedules: List[ScheduleItem]

# --- HELPER FUNCTION FOR ROBUST TIME PARSING ---
def parse_flexible_time(t_str: Optional[str]):
    """Handles HH:MM, HH:MM:SS and cleans input"""
    if not t_str or not t_str.strip():
        return None
    t_str = t_str.strip()
    # Browsers sometimes send doubled seconds (09:00:00:00)
    if t_str.count(':') > 2:
        parts = t_str.split(':')
        t_str = f"{parts[0]}:{parts[1]}:{parts[2]}"

    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(t_str, fmt).time()
        except ValueError:
            pass
    raise ValueError(f"Unknown time format: {t_str}")


def _time_text(t):
    return t.strftime("%H:%M") if t else None


def load_schedules(db: Session, exam_id: int):
    rows = db.query(ExamSchedule).filter(
        ExamSchedule.exam_id == exam_id
    ).options(joinedload(ExamSchedule.subject_val)).all()

    schedules = []
    for sch in rows:
        schedules.append(SubjectScheduleSchema(
            id=sch.id,
            subject_id=sch.subject_id,
            subject_name=sch.subject_val.subject_name if sch.subject_val else "",
            max_marks=sch.max_marks,
            pass_marks=sch.pass_marks,
            exam_date=sch.exam_date,
            start_time=_time_text(sch.start_time),
            end_time=_time_text(sch.end_time),
        ))
    return sort_schedules(schedules)


@router.get("/{exam_id}", response_model=List[SubjectScheduleSchema],
            dependencies=[Depends(require_permission("exams", "read"))])
def get_exam_schedules(exam_id: int, db: Session = Depends(get_db)):
    return load_schedules(db, exam_id)


# Replaces the whole date sheet of an exam
@router.post("/{exam_id}", dependencies=[Depends(require_permission("exams", "update"))])
def save_exam_schedule(exam_id: int, payload: ScheduleSaveSchema, db: Session = Depends(get_db)):
    exam = db.query(ExamType).filter(ExamType.id == exam_id).first()
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")

    db.query(ExamSchedule).filter(ExamSchedule.exam_id == exam_id).delete()

    for item in payload.schedules:
        if item.pass_marks > item.max_marks:
            db.rollback()
            raise HTTPException(status_code=400, detail=f"Pass marks exceed max marks for Subject ID {item.subject_id}")
        try:
            new_sch = ExamSchedule(
                exam_id=exam_id,
                subject_id=item.subject_id,
                exam_date=datetime.strptime(item.exam_date, "%Y-%m-%d").date(),
                start_time=parse_flexible_time(item.start_time),
                end_time=parse_flexible_time(item.end_time),
                max_marks=item.max_marks,
                pass_marks=item.pass_marks,
            )
            db.add(new_sch)
        except ValueError as e:
            db.rollback()
            logger.warning("Schedule format error for exam %s: %s", exam_id, e)
            raise HTTPException(status_code=400, detail=f"Invalid Date/Time Format for Subject ID {item.subject_id}")

    try:
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "Schedule Saved Successfully", "count": len(payload.schedules)}
