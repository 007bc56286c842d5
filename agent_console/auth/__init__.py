"""Auth & RBAC - bearer tokens, roles, permission checks"""
from .rbac import RBACManager, Role, Permission, Principal, BUILT_IN_ROLES
from .tokens import TokenAuthenticator, DEV_PRINCIPAL
from .dependencies import require

__all__ = [
    "RBACManager", "Role", "Permission", "Principal", "BUILT_IN_ROLES",
    "TokenAuthenticator", "DEV_PRINCIPAL", "require",
]
