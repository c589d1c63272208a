"""
Role based access: every role owns a set of actions per resource.

Screens of the admin console are shown when the role can read the resource
behind them, so menu visibility is a plain set lookup too.
"""
import logging

from fastapi import Header, HTTPException

logger = logging.getLogger(__name__)

CRUD = frozenset({"create", "read", "update", "delete"})
READ = frozenset({"read"})
NONE = frozenset()

RESOURCES = (
    "users", "students", "teachers", "staff", "classes", "class_subjects",
    "subjects", "exams", "assignments", "attendance", "fees", "payroll",
    "library", "events", "announcements", "messages", "reports", "settings",
    "dashboard", "admissions", "visitors", "leaves", "transport", "hostel",
)


def _read_only(**overrides):
    perms = {name: READ for name in RESOURCES if name not in ("leaves", "transport", "hostel")}
    perms["messages"] = CRUD
    perms.update({k: frozenset(v) for k, v in overrides.items()})
    return perms


ROLE_PERMISSIONS = {
    # Super Admin - everything
    "super_admin": dict(
        {name: CRUD for name in RESOURCES if name not in ("transport", "hostel")},
        dashboard=READ,
    ),
    "principal": _read_only(
        users={"create", "read", "update"},
        students=CRUD, teachers=CRUD, staff=CRUD, classes=CRUD,
        class_subjects=CRUD, subjects=CRUD, exams=CRUD,
        attendance={"read", "update"},
        fees={"create", "read", "update"},
        payroll=CRUD, library=CRUD, events=CRUD, announcements=CRUD,
        reports={"create", "read"},
        settings={"read", "update"},
        admissions=CRUD,
        visitors={"read", "update"},
        leaves=CRUD,
    ),
    "vice_principal": _read_only(
        students={"create", "read", "update"},
        teachers={"read", "update"},
        staff={"read", "update"},
        classes={"create", "read", "update"},
        class_subjects=CRUD,
        subjects={"create", "read", "update"},
        exams={"create", "read", "update"},
        attendance={"read", "update"},
        fees={"read", "update"},
        library={"create", "read", "update"},
        events=CRUD, announcements=CRUD,
        admissions={"create", "read", "update"},
        visitors={"read", "update"},
        leaves=CRUD,
    ),
    "hod": _read_only(
        classes={"read", "update"},
        class_subjects={"read", "update", "delete"},
        subjects={"read", "update"},
        exams={"create", "read", "update"},
        attendance={"read", "update"},
        events={"create", "read", "update"},
        announcements={"create", "read", "update"},
        leaves={"create", "read", "update"},
    ),
    "teacher": _read_only(
        exams={"create", "read", "update"},
        assignments=CRUD,
        attendance={"create", "read", "update"},
    ),
    "accountant": _read_only(fees=CRUD, payroll=CRUD),
    "librarian": _read_only(library=CRUD),
    "guard": _read_only(visitors=CRUD),
    "cleaner": {k: v for k, v in _read_only().items() if k != "visitors"},
    "student": _read_only(
        assignments={"read", "update"},
        payroll=NONE,
        transport=READ,
        hostel=READ,
    ),
}

# Admin console screens and the resource each one reads
VIEW_RESOURCES = {
    "dashboard": "dashboard",
    "students": "students",
    "teachers": "teachers",
    "staff": "staff",
    "classes": "classes",
    "subjects": "subjects",
    "exams": "exams",
    "exam_results": "exams",
    "exam_report": "reports",
    "attendance": "attendance",
    "fees": "fees",
    "payroll": "payroll",
    "library": "library",
    "events": "events",
    "announcements": "announcements",
    "messages": "messages",
    "admissions": "admissions",
    "visitors": "visitors",
    "leaves": "leaves",
    "transport": "transport",
    "hostel": "hostel",
    "settings": "settings",
}


def get_role_permissions(role):
    return ROLE_PERMISSIONS.get(role, {})


def has_permission(role, resource, action):
    actions = get_role_permissions(role).get(resource)
    if actions is None:
        logger.debug("No %s permissions defined for role %s", resource, role)
        return False
    if action not in actions:
        logger.info("Permission denied: %s cannot %s %s", role, action, resource)
        return False
    return True


def can_access(role, resource):
    """True if the role has any action at all on the resource."""
    return bool(get_role_permissions(role).get(resource))


def visible_views(role):
    return {view for view, resource in VIEW_RESOURCES.items() if has_permission(role, resource, "read")}


# ===========================
#     FASTAPI DEPENDENCY
# ===========================

def require_permission(resource: str, action: str):
    def checker(x_user_role: str = Header(None)):
        if not x_user_role:
            raise HTTPException(status_code=401, detail="Role header missing")
        if not has_permission(x_user_role, resource, action):
            raise HTTPException(status_code=403, detail=f"Role '{x_user_role}' cannot {action} {resource}")
        return x_user_role
    return checker
