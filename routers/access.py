from fastapi import APIRouter, HTTPException
from services.permissions import ROLE_PERMISSIONS, get_role_permissions, visible_views

router = APIRouter(prefix="/api/v1/permissions", tags=["Permissions"])


@router.get("/{role}")
def role_permissions(role: str):
    if role not in ROLE_PERMISSIONS:
        raise HTTPException(status_code=404, detail="Role not found")
    return {
        "role": role,
        "permissions": {res: sorted(actions) for res, actions in get_role_permissions(role).items()},
        "views": sorted(visible_views(role)),
    }
