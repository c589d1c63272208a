"""
Exam broadsheet: students as rows, examined subjects as columns.

Everything here is a pure function of the collections passed in. Routers load
the exam, its date sheet, the class roster and the flat result list, then hand
them over; nothing is cached or written back.
"""
import csv
import logging
import math
from datetime import date
from io import StringIO

import config
from schemas.broadsheet import AggregateRow, Broadsheet, SubjectCell
from services.errors import BroadsheetError, MalformedResult, MissingSchedule

logger = logging.getLogger(__name__)


# ===========================
#      ORDERING & SEARCH
# ===========================

def sort_schedules(schedules):
    """Column order: exam date, then start time as text. Undated papers go last."""
    return sorted(
        schedules,
        key=lambda s: (s.exam_date is None, s.exam_date or date.min, s.start_time or ""),
    )


def order_students(students):
    """Row order: roll number ascending, students without one at the end."""
    return sorted(
        students,
        key=lambda s: s.roll_no if s.roll_no is not None else config.ROLL_SENTINEL,
    )


def filter_students(students, search_term):
    """Case-insensitive substring search on name, roll number and admission number."""
    term = (search_term or "").strip().lower()
    if not term:
        return list(students)

    matched = []
    for s in students:
        haystack = [s.first_name or "", s.last_name or "", s.admission_no or ""]
        if s.roll_no is not None:
            haystack.append(str(s.roll_no))
        if any(term in field.lower() for field in haystack):
            matched.append(s)
    return matched


def result_label(row):
    if row.failed_subjects > 0:
        return f"FAIL ({row.failed_subjects})"
    return "PASS"


# ===========================
#        AGGREGATION
# ===========================

def _to_number(value, field, record):
    if isinstance(value, bool):
        value = None
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        number = None
    if number is None or not math.isfinite(number):
        raise MalformedResult(
            f"Result for student {record.student_id}, subject {record.subject_id} "
            f"has non-numeric {field}: {value!r}",
            student_id=record.student_id,
            subject_id=record.subject_id,
        )
    return number


def _report(error: BroadsheetError, on_error: str):
    if on_error == "raise":
        raise error
    logger.warning("Broadsheet: %s", error)


def aggregate(students, schedules, results, strict=None, on_error=None):
    """
    Build one AggregateRow per student, keyed by student id.

    Only subjects present in ``schedules`` count towards totals. A result for a
    student outside the roster is ignored; one for a subject outside the date
    sheet stays visible as a cell but adds nothing. When the same
    (student, subject) pair appears twice, the later record wins.

    strict: a scheduled subject without a result counts as a failed subject.
    on_error: "raise" to raise MalformedResult / MissingSchedule, "drop" to log
    and carry on (malformed records are skipped).
    """
    if strict is None:
        strict = config.STRICT_MISSING_AS_FAIL
    if on_error is None:
        on_error = config.REPORT_ERROR_MODE

    rows = {s.id: AggregateRow(student=s) for s in students}
    scheduled_ids = {sch.subject_id for sch in schedules}

    for record in results:
        row = rows.get(record.student_id)
        if row is None:
            continue

        try:
            marks = _to_number(record.marks_obtained, "marks_obtained", record)
            max_marks = _to_number(record.max_marks, "max_marks", record)
        except MalformedResult as e:
            _report(e, on_error)
            continue

        if record.subject_id not in scheduled_ids:
            _report(
                MissingSchedule(
                    f"Result for student {record.student_id} references subject "
                    f"{record.subject_id} which is not on the date sheet",
                    student_id=record.student_id,
                    subject_id=record.subject_id,
                ),
                on_error,
            )

        row.subjects[record.subject_id] = SubjectCell(
            marks=marks, max_marks=max_marks, grade=record.grade
        )

    for row in rows.values():
        for schedule in schedules:
            cell = row.subjects.get(schedule.subject_id)
            if cell is None:
                # Absent or not entered yet
                if strict:
                    row.failed_subjects += 1
                continue

            row.total_obtained += cell.marks
            row.total_max += cell.max_marks
            row.subject_count += 1
            if cell.marks < schedule.pass_marks:
                cell.is_fail = True
                row.failed_subjects += 1

        row.percentage = round(row.total_obtained / row.total_max * 100, 2) if row.total_max > 0 else 0.0
        row.result = result_label(row)

    return rows


def build_broadsheet(exam, students, schedules, results, search=None, strict=None, on_error=None):
    """Sorted columns, totals over the whole roster, then the visible rows in roll order."""
    if strict is None:
        strict = config.STRICT_MISSING_AS_FAIL

    columns = sort_schedules(schedules)
    by_student = aggregate(students, columns, results, strict=strict, on_error=on_error)
    visible = order_students(filter_students(students, search))

    return Broadsheet(
        exam=exam,
        columns=columns,
        rows=[by_student[s.id] for s in visible],
        student_count=len(students),
        subject_count=len(columns),
        strict=strict,
    )


# ===========================
#          EXPORT
# ===========================

def format_marks(value):
    if value is None:
        return "-"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def broadsheet_csv(broadsheet):
    buffer = StringIO()
    writer = csv.writer(buffer)

    header = ["Roll", "Student Name"]
    header += [col.subject_name or f"Subject {col.subject_id}" for col in broadsheet.columns]
    header += ["Total", "%", "Result"]
    writer.writerow(header)

    for row in broadsheet.rows:
        student = row.student
        line = [
            student.roll_no if student.roll_no is not None else "-",
            f"{student.first_name} {student.last_name}".strip(),
        ]
        for col in broadsheet.columns:
            cell = row.subjects.get(col.subject_id)
            line.append(format_marks(cell.marks) if cell else "-")
        line += [format_marks(row.total_obtained), f"{row.percentage:.2f}", row.result]
        writer.writerow(line)

    return buffer.getvalue()
