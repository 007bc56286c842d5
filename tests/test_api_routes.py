"""
API route integration tests using FastAPI TestClient.
Tests the full HTTP request/response cycle; the LLM proxy is an httpx.MockTransport.
Run: pytest tests/test_api_routes.py -v
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from agent_console.agent_service.agent_registry import AgentRegistry
from agent_console.api.server import create_app
from agent_console.auth import RBACManager
from agent_console.db.override_store import DatabaseOverrideStore
from agent_console.llm.completion_client import CompletionClient
from agent_console.overrides import KeyValueOverrideStore

from conftest import ExplodingMedium

ADMIN = {"Authorization": "Bearer admin-token"}
OPERATOR = {"Authorization": "Bearer operator-token"}
VIEWER = {"Authorization": "Bearer viewer-token"}


def _proxy_handler(captured):
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(json.loads(request.content))
        if captured[-1]["messages"][0]["content"] == "fail":
            return httpx.Response(502, json={"error": "Upstream model unavailable"})
        return httpx.Response(200, json={"content": [{"type": "text", "text": "Drafted."}]})
    return handler


@pytest.fixture
def proxy_calls():
    return []


@pytest.fixture
def make_client(proxy_calls):
    """Build a TestClient over a fresh registry; closes every client it made."""
    clients = []

    def _make(store=None, allow_anonymous=True):
        app = create_app(
            registry=AgentRegistry(store=store or KeyValueOverrideStore()),
            completion_client=CompletionClient(
                base_url="http://llm-proxy.test",
                transport=httpx.MockTransport(_proxy_handler(proxy_calls)),
            ),
            rbac=RBACManager(),
            allow_anonymous=allow_anonymous,
        )
        c = TestClient(app, raise_server_exceptions=False)
        c.__enter__()
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    """Dev-mode client: requests without a token run as the dev admin."""
    return make_client()


@pytest.fixture
def secured(make_client):
    """Client that requires bearer tokens."""
    return make_client(allow_anonymous=False)


# ══════════════════════════════════════════════════════════════════
# SYSTEM
# ══════════════════════════════════════════════════════════════════


class TestSystemRoutes:

    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

    def test_info(self, client):
        r = client.get("/info")
        assert r.status_code == 200
        data = r.json()
        assert data["name"] == "Agent Console"
        assert data["agents"] == 15
        assert data["tenant_scope"] == "platform"

    def test_openapi_tags_present(self, client):
        schema = client.get("/openapi.json").json()
        assert schema["info"]["title"] == "Agent Console"
        tag_names = [t["name"] for t in schema.get("tags", [])]
        assert {"System", "Agents", "Overrides", "Prompts"} <= set(tag_names)


# ══════════════════════════════════════════════════════════════════
# AGENTS
# ══════════════════════════════════════════════════════════════════


class TestAgentRoutes:

    def test_list_agents(self, client):
        r = client.get("/agents")
        assert r.status_code == 200
        data = r.json()
        assert data["count"] == 15
        hr = data["agents"][0]
        assert hr["key"] == "hr"
        assert set(hr) == {"key", "name", "department", "status", "model", "action_count", "has_override"}
        assert hr["has_override"] is False

    def test_get_agent(self, client):
        r = client.get("/agents/hr")
        assert r.status_code == 200
        data = r.json()
        assert data["name"] == "HR Agent"
        assert data["actions"]["askAgent"] == {
            "label": "Ask HR Agent",
            "description": "Open-ended HR operations question",
            "template_type": "passthrough",
            "template_text": "${data.question}",
        }
        assert data["actions"]["runEnrollmentAudit"]["template_type"] == "complex"
        assert data["actions"]["draftReminder"]["template_type"] == "simple"

    def test_get_agent_with_company(self, client):
        r = client.get("/agents/hr", params={"company_name": "Acme Facilities"})
        assert r.json()["system_prompt"].startswith("You are working for Acme Facilities. ")

    def test_unknown_agent(self, client):
        assert client.get("/agents/ghost").status_code == 404
        assert client.get("/agents/ghost/source").status_code == 404
        assert client.get("/agents/ghost/diff").status_code == 404
        assert client.get("/agents/ghost/override").status_code == 404

    def test_stats(self, client):
        r = client.get("/agents/stats")
        assert r.status_code == 200
        assert r.json()["total_agents"] == 15


# ══════════════════════════════════════════════════════════════════
# OVERRIDES
# ══════════════════════════════════════════════════════════════════


class TestOverrideRoutes:

    def test_save_and_read_back(self, client):
        r = client.put("/agents/hr/override", json={
            "name": "People Ops Agent",
            "maxTokens": 2048,
            "actions": {"draftReminder": {"promptTemplateText": "URGENT: ${data.employeeName}"}},
        })
        assert r.status_code == 200
        saved = r.json()
        assert saved["status"] == "saved"
        assert saved["override"] == {
            "name": "People Ops Agent",
            "maxTokens": 2048,
            "actions": {"draftReminder": {"promptTemplateText": "URGENT: ${data.employeeName}"}},
        }
        assert saved["agent"]["name"] == "People Ops Agent"

        effective = client.get("/agents/hr").json()
        assert effective["max_tokens"] == 2048
        assert effective["has_override"] is True
        assert effective["actions"]["draftReminder"]["template_text"] == "URGENT: ${data.employeeName}"

        source = client.get("/agents/hr/source").json()
        assert source["name"] == "HR Agent"

        ovr = client.get("/agents/hr/override").json()
        assert ovr["has_override"] is True
        assert ovr["override"]["name"] == "People Ops Agent"

        fields = {c["field"] for c in client.get("/agents/hr/diff").json()["changes"]}
        assert fields == {"name", "max_tokens", "actions.draftReminder"}

    def test_syntax_error(self, client):
        r = client.put("/agents/hr/override", json={
            "actions": {"draftReminder": {"promptTemplateText": "Hi ${data.employeeName"}},
        })
        assert r.status_code == 422
        assert r.json()["detail"] == {
            "error": "Unterminated placeholder",
            "action_key": "draftReminder",
            "position": 3,
        }
        assert client.get("/agents/hr/override").json()["has_override"] is False

    def test_unknown_action(self, client):
        r = client.put("/agents/hr/override", json={
            "actions": {"inventNewAction": {"promptTemplateText": "x"}},
        })
        assert r.status_code == 422
        assert r.json()["detail"]["action_key"] == "inventNewAction"

    def test_invalid_body(self, client):
        r = client.put("/agents/hr/override", json={"maxTokens": 0})
        assert r.status_code == 422

    def test_unknown_agent(self, client):
        r = client.put("/agents/ghost/override", json={"name": "X"})
        assert r.status_code == 404
        assert client.delete("/agents/ghost/override").status_code == 404

    def test_reset(self, client):
        client.put("/agents/hr/override", json={"name": "People Ops Agent"})
        r = client.delete("/agents/hr/override")
        assert r.status_code == 200
        assert r.json()["status"] == "cleared"
        assert client.get("/agents/hr").json() == client.get("/agents/hr/source").json()

    def test_version_from_database_store(self, make_client, sqlite_url):
        c = make_client(store=DatabaseOverrideStore(database_url=sqlite_url))
        assert c.get("/agents/hr/override").json()["version"] is None
        c.put("/agents/hr/override", json={"name": "A"})
        c.put("/agents/hr/override", json={"name": "B"})
        ovr = c.get("/agents/hr/override").json()
        assert ovr["version"] == 2
        assert ovr["override"] == {"name": "B"}

    def test_key_value_store_has_no_version(self, client):
        client.put("/agents/hr/override", json={"name": "A"})
        assert client.get("/agents/hr/override").json()["version"] is None

    def test_storage_failure(self, make_client):
        c = make_client(store=KeyValueOverrideStore(ExplodingMedium()))
        assert c.get("/agents/hr").status_code == 200
        assert c.put("/agents/hr/override", json={"name": "X"}).status_code == 503
        assert c.delete("/agents/hr/override").status_code == 503


# ══════════════════════════════════════════════════════════════════
# PROMPTS
# ══════════════════════════════════════════════════════════════════


class TestPromptRoutes:

    def test_template_classification(self, client):
        r = client.get("/agents/hr/actions/draftReminder/template")
        assert r.status_code == 200
        data = r.json()
        assert data["type"] == "simple"
        assert data["editable"] is True
        assert "${data.employeeName}" in data["text"]
        assert data["fields"] == ["employeeName", "hireDate", "daysRemaining"]
        assert client.get("/agents/hr/actions/runEnrollmentAudit/template").json()["fields"] == []
        assert client.get("/agents/hr/actions/nope/template").status_code == 404

    def test_preview_uses_effective_template(self, client):
        client.put("/agents/hr/override", json={
            "actions": {"draftReminder": {"promptTemplateText": "URGENT: ${data.employeeName}"}},
        })
        r = client.post("/agents/hr/actions/draftReminder/preview", json={"data": {"employeeName": "Jane"}})
        assert r.status_code == 200
        data = r.json()
        assert data["prompt"] == "URGENT: Jane"
        assert data["max_tokens"] == 4096

    def test_preview_procedural_with_empty_record(self, client):
        r = client.post("/agents/hr/actions/runEnrollmentAudit/preview", json={"data": {}})
        assert r.status_code == 200
        assert "[No open enrollments provided]" in r.json()["prompt"]

    def test_preview_malformed_record(self, client):
        r = client.post(
            "/agents/hr/actions/runEnrollmentAudit/preview", json={"data": {"enrollments": [42]}},
        )
        assert r.status_code == 422
        assert r.json()["detail"]["action_key"] == "runEnrollmentAudit"

    def test_invoke_malformed_record(self, client, proxy_calls):
        r = client.post(
            "/agents/hr/actions/runEnrollmentAudit/invoke", json={"data": {"enrollments": [42]}},
        )
        assert r.status_code == 422
        assert r.json()["detail"]["action_key"] == "runEnrollmentAudit"
        assert proxy_calls == []

    def test_preview_unknown(self, client):
        r = client.post("/agents/hr/actions/nope/preview", json={"data": {}})
        assert r.status_code == 404

    def test_invoke(self, client, proxy_calls):
        r = client.post(
            "/agents/hr/actions/askAgent/invoke",
            json={"data": {"question": "PTO policy?"}, "tenant_id": "acme"},
        )
        assert r.status_code == 200
        assert r.json()["response"] == "Drafted."
        assert proxy_calls[-1]["tenant_id"] == "acme"
        assert proxy_calls[-1]["messages"] == [{"role": "user", "content": "PTO policy?"}]

    def test_invoke_proxy_error(self, client):
        r = client.post("/agents/hr/actions/askAgent/invoke", json={"data": {"question": "fail"}})
        assert r.status_code == 502
        assert r.json()["detail"] == "Upstream model unavailable"

    def test_invoke_unknown(self, client):
        r = client.post("/agents/ghost/actions/askAgent/invoke", json={"data": {}})
        assert r.status_code == 404

    def test_chat(self, client, proxy_calls):
        r = client.post("/agents/hr/chat", json={"messages": [{"role": "user", "content": "Hello"}]})
        assert r.status_code == 200
        assert proxy_calls[-1]["max_tokens"] == 1024


# ══════════════════════════════════════════════════════════════════
# AUTH
# ══════════════════════════════════════════════════════════════════


class TestAuth:

    def test_public_paths(self, secured):
        assert secured.get("/health").status_code == 200
        assert secured.get("/info").status_code == 200

    def test_missing_token(self, secured):
        assert secured.get("/agents").status_code == 401

    def test_invalid_token(self, secured):
        r = secured.get("/agents", headers={"Authorization": "Bearer nope"})
        assert r.status_code == 401

    def test_viewer_reads_only(self, secured):
        assert secured.get("/agents/hr", headers=VIEWER).status_code == 200
        assert secured.put("/agents/hr/override", json={"name": "X"}, headers=VIEWER).status_code == 403
        r = secured.post("/agents/hr/actions/askAgent/preview", json={"data": {}}, headers=VIEWER)
        assert r.status_code == 403

    def test_operator_executes_but_cannot_configure(self, secured):
        r = secured.post("/agents/hr/actions/askAgent/preview", json={"data": {"question": "?"}}, headers=OPERATOR)
        assert r.status_code == 200
        assert secured.put("/agents/hr/override", json={"name": "X"}, headers=OPERATOR).status_code == 403
        assert secured.delete("/agents/hr/override", headers=OPERATOR).status_code == 403

    def test_admin_configures_and_is_audited(self, secured):
        r = secured.put("/agents/hr/override", json={"name": "X"}, headers=ADMIN)
        assert r.status_code == 200
        audit = secured.get("/auth/audit", headers=ADMIN).json()["entries"]
        assert audit[-1]["action"] == "override_saved"
        assert audit[-1]["user_id"] == "owner@example.com"
        assert audit[-1]["details"] == {"agent_key": "hr"}

    def test_audit_requires_admin(self, secured):
        assert secured.get("/auth/audit", headers=OPERATOR).status_code == 403

    def test_dev_mode_runs_as_admin(self, client):
        assert client.put("/agents/hr/override", json={"name": "X"}).status_code == 200

    def test_roles_listing(self, secured):
        r = secured.get("/auth/roles", headers=VIEWER)
        assert r.status_code == 200
        names = {role["name"] for role in r.json()["roles"]}
        assert {"platform_admin", "agent_operator", "viewer"} <= names
