from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from database import get_db
from models.students import Student
from schemas.broadsheet import StudentSchema
from services.permissions import require_permission
from typing import List, Optional

router = APIRouter(prefix="/api/v1/students", tags=["Students"])

STATUS_FILTER = {"active": True, "inactive": False}


def load_students(db: Session, class_id: Optional[int] = None, status: Optional[str] = None):
    query = db.query(Student)
    if class_id is not None:
        query = query.filter(Student.class_id == class_id)
    if status:
        if status not in STATUS_FILTER:
            raise HTTPException(status_code=400, detail=f"Unknown status '{status}'")
        query = query.filter(Student.status == STATUS_FILTER[status])
    return [StudentSchema.model_validate(s) for s in query.order_by(Student.id).all()]


@router.get("", response_model=List[StudentSchema], dependencies=[Depends(require_permission("students", "read"))])
def list_students(class_id: Optional[int] = None, status: Optional[str] = None, db: Session = Depends(get_db)):
    return load_students(db, class_id, status)
