"""
Bearer-token authentication. Tokens are configured in ``API_TOKENS`` as
``{"<token>": "<user_id>:<role>"}`` and resolved to a Principal whose role is
registered with the RBAC manager.
"""

import hmac
import logging
from typing import Dict, Optional

from agent_console.auth.rbac import Principal, RBACManager

logger = logging.getLogger(__name__)

DEV_PRINCIPAL = Principal(user_id="dev-admin", roles=["platform_admin"])


class TokenAuthenticator:
    """Maps bearer tokens to principals and registers their roles."""

    def __init__(self, tokens: Dict[str, str], rbac: RBACManager):
        self._rbac = rbac
        self._tokens: Dict[str, Principal] = {}
        for token, entry in tokens.items():
            user_id, _, role = entry.partition(":")
            role = role or "viewer"
            if rbac.get_role(role) is None:
                logger.warning(f"Ignoring API token for '{user_id}': unknown role '{role}'")
                continue
            self._tokens[token] = Principal(user_id=user_id, roles=[role])
            rbac.assign_role(user_id, role)
        rbac.assign_role(DEV_PRINCIPAL.user_id, "platform_admin")

    def authenticate(self, token: str) -> Optional[Principal]:
        for known, principal in self._tokens.items():
            if hmac.compare_digest(known, token):
                return principal
        return None
