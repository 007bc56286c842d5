"""FastAPI dependencies that enforce RBAC on the resolved principal."""

from fastapi import HTTPException, Request

from agent_console.auth.rbac import Permission, Principal


def require(permission: Permission):
    """Route dependency: the caller must hold ``permission``."""

    def _check(request: Request) -> Principal:
        principal = getattr(request.state, "principal", None)
        if principal is None:
            raise HTTPException(401, "Authentication required.")
        try:
            request.app.state.rbac.require_permission(principal.user_id, permission)
        except PermissionError as e:
            raise HTTPException(403, str(e))
        return principal

    return _check
