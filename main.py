import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import config
from database import engine, Base

# --- IMPORT ROUTERS (APIs) ---
from routers import exams, exam_schedule, results, students, reports, access

# --- IMPORT MODELS (registers tables on Base) ---
from models import masters, exams as exam_models, results as result_models, students as student_models  # noqa: F401
from services.errors import BroadsheetError

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# --- CREATE DATABASE TABLES ---
Base.metadata.create_all(bind=engine)

app = FastAPI(title="School ERP - Exam Reports")

# ==========================================
# ✅ CORS MIDDLEWARE (Admin console + mobile app)
# ==========================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BroadsheetError)
async def broadsheet_error_handler(request: Request, exc: BroadsheetError):
    logger.error("Broadsheet aggregation failed on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": str(exc),
            "error": type(exc).__name__,
            "student_id": exc.student_id,
            "subject_id": exc.subject_id,
        },
    )

# --- REGISTER ROUTERS ---
app.include_router(exams.router)
app.include_router(results.router)
app.include_router(exam_schedule.router)
app.include_router(students.router)
app.include_router(reports.router)
app.include_router(access.router)


@app.get("/health")
def health():
    return {"status": "ok", "env": config.APP_ENV}
