import importlib

import pytest

import config
from schemas.broadsheet import ResultRecordSchema, StudentSchema, SubjectScheduleSchema
from services.broadsheet import aggregate


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env):
        for name in ("APP_ENV", "REPORT_ERROR_MODE", "STRICT_MISSING_AS_FAIL"):
            monkeypatch.delenv(name, raising=False)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_error_mode_follows_app_env(reload_config):
    assert reload_config(APP_ENV="development").REPORT_ERROR_MODE == "raise"
    assert reload_config(APP_ENV="test").REPORT_ERROR_MODE == "raise"
    assert reload_config(APP_ENV="production").REPORT_ERROR_MODE == "drop"
    assert reload_config().REPORT_ERROR_MODE == "drop"


def test_error_mode_can_be_set_explicitly(reload_config):
    assert reload_config(APP_ENV="development", REPORT_ERROR_MODE="DROP").REPORT_ERROR_MODE == "drop"
    with pytest.raises(RuntimeError):
        reload_config(REPORT_ERROR_MODE="ignore")


def test_strict_flag_parsing(reload_config):
    assert reload_config().STRICT_MISSING_AS_FAIL is False
    assert reload_config(STRICT_MISSING_AS_FAIL="yes").STRICT_MISSING_AS_FAIL is True
    assert reload_config(STRICT_MISSING_AS_FAIL="1").STRICT_MISSING_AS_FAIL is True
    assert reload_config(STRICT_MISSING_AS_FAIL="off").STRICT_MISSING_AS_FAIL is False


def test_aggregate_uses_configured_defaults(reload_config):
    students = [StudentSchema(id=1, first_name="A")]
    schedules = [SubjectScheduleSchema(subject_id=10), SubjectScheduleSchema(subject_id=11)]
    results = [ResultRecordSchema(student_id=1, subject_id=10, marks_obtained=60, max_marks=100)]

    reload_config(APP_ENV="production", STRICT_MISSING_AS_FAIL="true")
    assert aggregate(students, schedules, results)[1].result == "FAIL (1)"

    reload_config(APP_ENV="production")
    assert aggregate(students, schedules, results)[1].result == "PASS"

    stray = results + [ResultRecordSchema(student_id=1, subject_id=99, marks_obtained="abc", max_marks=100)]
    assert aggregate(students, schedules, stray)[1].subject_count == 1
