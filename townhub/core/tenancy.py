# townhub/core/tenancy.py
"""Tenant (school) scoping.

Every tenant-scoped request works on exactly one school. Regular users are
pinned to the school stored on their account; super admins have no school of
their own and must name one explicitly whenever a query targets a single
school.

The rules live in two pure functions so they can be checked without a
request object; the FastAPI dependencies at the bottom only feed them.
"""
from fastapi import Depends, HTTPException, Request

from townhub.core.security import get_current_user
from townhub.models.user import ROLE_SUPER_ADMIN, User

SCHOOL_ID_PARAM = "school_id"


class TenantError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def resolve_tenant(role: str, token_school_id: int | None) -> int | None:
    """School of the caller, or None for an unscoped super admin."""
    if not token_school_id and role != ROLE_SUPER_ADMIN:
        raise TenantError(403, "School context required")
    return token_school_id or None


def resolve_school_id(
    role: str,
    supplied_school_id: str | int | None,
    token_school_id: int | None,
) -> int | None:
    """School a query should target.

    Super admins must supply it (path or query string); everybody else keeps
    the school from their token and anything supplied is ignored.
    """
    if role != ROLE_SUPER_ADMIN:
        return token_school_id

    if supplied_school_id is None or supplied_school_id == "":
        raise TenantError(400, "school_id parameter required for super admin queries")
    try:
        return int(supplied_school_id)
    except (TypeError, ValueError):
        raise TenantError(400, "school_id parameter must be an integer")


def get_tenant_id(current_user: User = Depends(get_current_user)) -> int | None:
    try:
        return resolve_tenant(current_user.role, current_user.school_id)
    except TenantError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


def get_target_school_id(
    request: Request,
    current_user: User = Depends(get_current_user),
) -> int | None:
    supplied = request.path_params.get(SCHOOL_ID_PARAM)
    if supplied is None:
        supplied = request.query_params.get(SCHOOL_ID_PARAM)
    try:
        return resolve_school_id(current_user.role, supplied, current_user.school_id)
    except TenantError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)
