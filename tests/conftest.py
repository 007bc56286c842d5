"""
Shared fixtures for the Agent Console test suite.
"""
import json
import sys
import os
import pytest

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Set env vars before any imports that read them; ENVIRONMENT=dev bypasses auth
os.environ["ENVIRONMENT"] = "dev"
os.environ["OVERRIDE_STORE"] = "memory"
os.environ.setdefault("LLM_PROXY_URL", "http://llm-proxy.test")
os.environ["API_TOKENS"] = json.dumps({
    "admin-token": "owner@example.com:platform_admin",
    "operator-token": "ops@example.com:agent_operator",
    "viewer-token": "viewer@example.com:viewer",
})


class ExplodingMedium(dict):
    """Key-value medium whose every access fails, like an unreachable backend."""

    def get(self, key, default=None):
        raise OSError("storage medium unavailable")

    def __setitem__(self, key, value):
        raise OSError("storage medium unavailable")

    def pop(self, key, default=None):
        raise OSError("storage medium unavailable")


@pytest.fixture
def medium():
    """Plain dict standing in for the key-value medium."""
    return {}


@pytest.fixture
def override_store(medium):
    """Platform-scope key-value override store over ``medium``."""
    from agent_console.overrides import KeyValueOverrideStore
    return KeyValueOverrideStore(medium)


@pytest.fixture
def agent_registry(override_store):
    """Fresh AgentRegistry over the default catalog (in-memory, no DB)."""
    from agent_console.agent_service.agent_registry import AgentRegistry
    return AgentRegistry(store=override_store)


@pytest.fixture
def broken_registry():
    """AgentRegistry whose override medium throws on every access."""
    from agent_console.agent_service.agent_registry import AgentRegistry
    from agent_console.overrides import KeyValueOverrideStore
    return AgentRegistry(store=KeyValueOverrideStore(ExplodingMedium()))


@pytest.fixture
def rbac_manager():
    """Fresh RBACManager instance."""
    from agent_console.auth.rbac import RBACManager
    return RBACManager()


@pytest.fixture
def hr_source():
    from agent_console.catalog import CATALOG
    return CATALOG.lookup("hr")


@pytest.fixture
def sqlite_url(tmp_path):
    """File-backed SQLite URL; each DB store session opens its own connection."""
    return f"sqlite+aiosqlite:///{tmp_path / 'overrides.db'}"
