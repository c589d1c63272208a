import re
from urllib.parse import quote
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session
from database import get_db
import config
from routers.exams import load_exam
from routers.exam_schedule import load_schedules
from routers.results import load_results
from routers.students import load_students
from schemas.broadsheet import Broadsheet
from services.broadsheet import build_broadsheet, broadsheet_csv, format_marks
from services.permissions import require_permission
from typing import Optional

router = APIRouter(
    prefix="/api/v1/reports",
    tags=["Reports"],
    dependencies=[Depends(require_permission("reports", "read"))],
)
templates = Jinja2Templates(directory=f"{config.BASE_DIR}/templates")
templates.env.filters["marks"] = format_marks


# Helper: ASCII filename for old browsers, UTF-8 filename* for the real exam name
def csv_disposition(exam_name, exam_id):
    name = f"Exam_Report_{(exam_name or '').strip() or exam_id}".replace(" ", "_")
    ascii_name = re.sub(r"[^\w.-]", "", name, flags=re.ASCII)
    if ascii_name.rstrip("_") == "Exam_Report":
        ascii_name = f"Exam_Report_{exam_id}"
    return f"attachment; filename=\"{ascii_name}.csv\"; filename*=UTF-8''{quote(name + '.csv', safe='')}"


# Helper: load all four collections, then aggregate
def generate_broadsheet(db: Session, exam_id: int, search: Optional[str] = None, strict: Optional[bool] = None):
    exam = load_exam(db, exam_id)
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")

    schedules = load_schedules(db, exam_id)
    students = load_students(db, class_id=exam.class_id, status="active")
    results = load_results(db, exam_id)

    return build_broadsheet(exam, students, schedules, results, search=search, strict=strict)


# 1. API: Broadsheet JSON
@router.get("/exams/{exam_id}/broadsheet", response_model=Broadsheet)
def get_broadsheet(exam_id: int, search: Optional[str] = None, strict: Optional[bool] = None,
                   db: Session = Depends(get_db)):
    return generate_broadsheet(db, exam_id, search, strict)


# 2. PAGE: Printable broadsheet
@router.get("/exams/{exam_id}/broadsheet/print", response_class=HTMLResponse)
def print_broadsheet(request: Request, exam_id: int, search: Optional[str] = None,
                     strict: Optional[bool] = None, db: Session = Depends(get_db)):
    sheet = generate_broadsheet(db, exam_id, search, strict)
    return templates.TemplateResponse(request, "print_broadsheet.html", {
        "sheet": sheet,
        "school_name": config.SCHOOL_NAME,
    })


# 3. API: CSV download
@router.get("/exams/{exam_id}/broadsheet/export.csv")
def export_broadsheet(exam_id: int, search: Optional[str] = None, strict: Optional[bool] = None,
                      db: Session = Depends(get_db)):
    sheet = generate_broadsheet(db, exam_id, search, strict)
    return Response(
        content=broadsheet_csv(sheet),
        media_type="text/csv",
        headers={"Content-Disposition": csv_disposition(sheet.exam.exam_name, exam_id)},
    )
