"""
RBAC — Role-Based Access Control for the Agent Console.
Editing an agent's prompts compiles operator text into the prompts served to
every tenant, so configuration rights are reserved for platform admins.
"""

from collections import deque
from datetime import datetime
from enum import Enum
from typing import Any, Deque, Dict, List, Optional, Set

from pydantic import BaseModel, Field


class Permission(str, Enum):
    """Fine-grained permissions for console resources."""
    AGENT_READ = "agent:read"
    AGENT_CONFIGURE = "agent:configure"
    AGENT_EXECUTE = "agent:execute"
    AUDIT_READ = "audit:read"
    PLATFORM_ADMIN = "platform:admin"


class Role(BaseModel):
    """A role with a set of permissions."""
    name: str
    description: str = ""
    permissions: Set[Permission] = Field(default_factory=set)
    is_system: bool = False


# ── Built-in Roles ───────────────────────────────────────────────

BUILT_IN_ROLES: Dict[str, Role] = {
    "platform_admin": Role(
        name="platform_admin",
        description="Platform owner — edit agents, overrides, and prompts",
        permissions=set(Permission),
        is_system=True,
    ),
    "agent_operator": Role(
        name="agent_operator",
        description="Run agent actions and preview prompts",
        permissions={Permission.AGENT_READ, Permission.AGENT_EXECUTE},
        is_system=True,
    ),
    "viewer": Role(
        name="viewer",
        description="Read-only access to agents and overrides",
        permissions={Permission.AGENT_READ},
        is_system=True,
    ),
}


class Principal(BaseModel):
    """An authenticated caller."""
    user_id: str
    roles: List[str] = Field(default_factory=list)


AUDIT_LOG_SIZE = 1000


class RBACManager:
    """Manages roles, user-role assignments, and permission checks."""

    def __init__(self, audit_log_size: int = AUDIT_LOG_SIZE):
        self._roles: Dict[str, Role] = dict(BUILT_IN_ROLES)
        self._user_roles: Dict[str, Set[str]] = {}  # user_id -> {role_names}
        self._audit_log: Deque[Dict[str, Any]] = deque(maxlen=audit_log_size)

    # ── Role Management ───────────────────────────────────────────

    def create_role(self, name: str, description: str, permissions: Set[Permission]) -> Role:
        role = Role(name=name, description=description, permissions=permissions)
        self._roles[name] = role
        return role

    def get_role(self, name: str) -> Optional[Role]:
        return self._roles.get(name)

    def list_roles(self) -> List[Role]:
        return list(self._roles.values())

    def delete_role(self, name: str) -> bool:
        role = self._roles.get(name)
        if role and not role.is_system:
            del self._roles[name]
            return True
        return False

    # ── User-Role Assignment ──────────────────────────────────────

    def assign_role(self, user_id: str, role_name: str) -> bool:
        if role_name not in self._roles:
            return False
        roles = self._user_roles.setdefault(user_id, set())
        if role_name not in roles:
            roles.add(role_name)
            self._log_audit(user_id, "role_assigned", {"role": role_name})
        return True

    def revoke_role(self, user_id: str, role_name: str) -> bool:
        if user_id in self._user_roles:
            self._user_roles[user_id].discard(role_name)
            self._log_audit(user_id, "role_revoked", {"role": role_name})
            return True
        return False

    def get_user_roles(self, user_id: str) -> List[str]:
        return sorted(self._user_roles.get(user_id, set()))

    def get_user_permissions(self, user_id: str) -> Set[Permission]:
        perms = set()
        for role_name in self._user_roles.get(user_id, set()):
            role = self._roles.get(role_name)
            if role:
                perms.update(role.permissions)
        return perms

    # ── Permission Checking ───────────────────────────────────────

    def check_permission(self, user_id: str, permission: Permission) -> bool:
        return permission in self.get_user_permissions(user_id)

    def require_permission(self, user_id: str, permission: Permission) -> None:
        """Raise if user lacks permission."""
        if not self.check_permission(user_id, permission):
            raise PermissionError(
                f"User '{user_id}' lacks permission '{permission.value}'"
            )

    # ── Audit Log ─────────────────────────────────────────────────

    def record(self, user_id: str, action: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a privileged action (override saves, resets)."""
        self._log_audit(user_id, action, details)

    def _log_audit(self, user_id: str, action: str, details: Optional[Dict[str, Any]] = None):
        self._audit_log.append({
            "timestamp": datetime.utcnow().isoformat(),
            "user_id": user_id,
            "action": action,
            "details": details or {},
        })

    def get_audit_log(self, limit: int = 50) -> List[Dict[str, Any]]:
        return list(self._audit_log)[-limit:]
