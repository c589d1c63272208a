from services.permissions import (
    ROLE_PERMISSIONS,
    can_access,
    get_role_permissions,
    has_permission,
    visible_views,
)


def test_super_admin_can_do_everything_on_exams():
    for action in ("create", "read", "update", "delete"):
        assert has_permission("super_admin", "exams", action)


def test_teacher_enters_results_but_cannot_delete_exams():
    assert has_permission("teacher", "exams", "update")
    assert not has_permission("teacher", "exams", "delete")
    assert not has_permission("teacher", "fees", "update")


def test_unknown_role_or_resource_is_denied():
    assert not has_permission("visitor", "exams", "read")
    assert not has_permission("teacher", "spaceships", "read")
    assert get_role_permissions("visitor") == {}
    assert not can_access("visitor", "exams")


def test_student_has_empty_payroll_set():
    assert "payroll" in get_role_permissions("student")
    assert not can_access("student", "payroll")
    assert can_access("student", "transport")
    assert not can_access("teacher", "transport")


def test_visible_views_follow_read_permission():
    teacher_views = visible_views("teacher")
    assert {"exams", "exam_results", "exam_report", "dashboard"} <= teacher_views
    assert "leaves" not in teacher_views
    assert "hostel" in visible_views("student")
    assert "payroll" not in visible_views("student")
    assert visible_views("nobody") == set()


def test_every_role_can_read_reports():
    for role in ROLE_PERMISSIONS:
        assert has_permission(role, "reports", "read"), role


def test_cleaner_has_no_visitor_access():
    assert not can_access("cleaner", "visitors")
    assert has_permission("guard", "visitors", "delete")
