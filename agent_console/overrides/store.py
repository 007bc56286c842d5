"""
Override Store - tenant-scoped persistence of override records.

Reads fail soft: a corrupted or unreachable record is logged and treated as
"no override" so the catalog agent is always servable. Writes and deletes
raise ``StorageUnavailableError`` so a failed save is never reported as done.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import MutableMapping, Optional

from .models import OverrideRecord

logger = logging.getLogger(__name__)

OVERRIDE_PREFIX = "aa_agent_override_"
PLATFORM_SCOPE = "platform"


class StorageUnavailableError(RuntimeError):
    """The override medium could not complete a write or delete."""


class OverrideStore(ABC):
    """Contract for override persistence, keyed by agent within one tenant scope."""

    def __init__(self, tenant_id: Optional[str] = None):
        self.tenant_id = tenant_id or PLATFORM_SCOPE

    # ── Medium primitives ─────────────────────────────────────────

    @abstractmethod
    def _read(self, agent_key: str) -> Optional[str]:
        ...

    @abstractmethod
    def _write(self, agent_key: str, payload: str, updated_by: str) -> None:
        ...

    @abstractmethod
    def _delete(self, agent_key: str) -> None:
        ...

    # ── Public API ────────────────────────────────────────────────

    def get(self, agent_key: str) -> Optional[OverrideRecord]:
        try:
            raw = self._read(agent_key)
            if raw is None:
                return None
            return OverrideRecord.from_storage(json.loads(raw))
        except Exception as e:
            logger.warning(f"Ignoring unreadable override for {self.tenant_id}/{agent_key}: {e}")
            return None

    def save(self, agent_key: str, record: OverrideRecord, updated_by: str = "system") -> None:
        payload = json.dumps(record.to_storage())
        try:
            self._write(agent_key, payload, updated_by)
        except StorageUnavailableError:
            raise
        except Exception as e:
            raise StorageUnavailableError(f"Failed to save override for '{agent_key}': {e}") from e
        logger.info(f"Saved override for {self.tenant_id}/{agent_key} by {updated_by}")

    def clear(self, agent_key: str) -> None:
        try:
            self._delete(agent_key)
        except StorageUnavailableError:
            raise
        except Exception as e:
            raise StorageUnavailableError(f"Failed to clear override for '{agent_key}': {e}") from e
        logger.info(f"Cleared override for {self.tenant_id}/{agent_key}")

    def has(self, agent_key: str) -> bool:
        try:
            return self._read(agent_key) is not None
        except Exception as e:
            logger.warning(f"Override lookup failed for {self.tenant_id}/{agent_key}: {e}")
            return False

    def version(self, agent_key: str) -> Optional[int]:
        """Revision of the stored override, for media that track one."""
        return None


class KeyValueOverrideStore(OverrideStore):
    """
    Override store over any string key-value medium (an in-process dict by
    default). Keys are ``aa_agent_override_<agentKey>`` in the platform scope
    and ``aa_agent_override_<tenantId>:<agentKey>`` for a tenant.
    """

    def __init__(
        self,
        medium: Optional[MutableMapping[str, str]] = None,
        tenant_id: Optional[str] = None,
        prefix: str = OVERRIDE_PREFIX,
    ):
        super().__init__(tenant_id)
        self._medium = medium if medium is not None else {}
        self._prefix = prefix

    def storage_key(self, agent_key: str) -> str:
        if self.tenant_id == PLATFORM_SCOPE:
            return f"{self._prefix}{agent_key}"
        return f"{self._prefix}{self.tenant_id}:{agent_key}"

    def _read(self, agent_key: str) -> Optional[str]:
        return self._medium.get(self.storage_key(agent_key))

    def _write(self, agent_key: str, payload: str, updated_by: str) -> None:
        self._medium[self.storage_key(agent_key)] = payload

    def _delete(self, agent_key: str) -> None:
        self._medium.pop(self.storage_key(agent_key), None)
