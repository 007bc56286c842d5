"""
Agent Console — Agent & Override Routes
Effective/source agent reads, override edit and reset, prompt classification,
preview, and invocation through the completion proxy.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from fastapi import Depends, HTTPException, Query
from pydantic import BaseModel, Field

from agent_console.agent_service.agent_registry import (
    AgentNotFoundError, AgentRegistry, OverrideTemplateError, TenantContext, UnknownActionError,
)
from agent_console.auth import Permission, Principal, RBACManager, require
from agent_console.catalog.models import ActionDefinition, AgentDefinition
from agent_console.llm.completion_client import (
    AgentInvoker, CompletionError, PromptRenderError, build_completion_request,
)
from agent_console.overrides import OverrideRecord, StorageUnavailableError
from agent_console.templates import TemplateType, build_template, classify

logger = logging.getLogger(__name__)


# ── Request Models ────────────────────────────────────────────────

class ActionRunRequest(BaseModel):
    data: Dict[str, Any] = Field(default_factory=dict)
    tenant_id: Optional[str] = None
    company_name: Optional[str] = None


class ChatTurn(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatTurn]
    tenant_id: Optional[str] = None
    company_name: Optional[str] = None


# ── Serialisation ─────────────────────────────────────────────────

def _action_to_dict(action: ActionDefinition) -> dict:
    c = classify(action.prompt_template)
    return {
        "label": action.label,
        "description": action.description,
        "template_type": c.type.value,
        "template_text": c.text,
    }


def _agent_to_dict(agent: AgentDefinition, has_override: bool) -> dict:
    return {
        "key": agent.key,
        "name": agent.name,
        "department": agent.department,
        "status": agent.status.value,
        "model": agent.model,
        "max_tokens": agent.max_tokens,
        "system_prompt": agent.system_prompt,
        "knowledge_modules": list(agent.knowledge_modules),
        "has_override": has_override,
        "actions": {k: _action_to_dict(a) for k, a in agent.actions.items()},
    }


def _agent_summary(agent: AgentDefinition, has_override: bool) -> dict:
    return {
        "key": agent.key,
        "name": agent.name,
        "department": agent.department,
        "status": agent.status.value,
        "model": agent.model,
        "action_count": len(agent.actions),
        "has_override": has_override,
    }


def _context(tenant_id: Optional[str], company_name: Optional[str]) -> Optional[TenantContext]:
    if not tenant_id and not company_name:
        return None
    return TenantContext(tenant_id=tenant_id, company_name=company_name)


def _template_fields(c) -> List[str]:
    """Data fields an editable or passthrough template reads."""
    if c.type not in (TemplateType.SIMPLE, TemplateType.PASSTHROUGH):
        return []
    return list(build_template(c.text).fields)


def _render_error(e: PromptRenderError) -> Dict[str, Any]:
    return {"error": str(e), "action_key": e.action_key}


# ── Route Registration ───────────────────────────────────────────

def register_agent_routes(app_router, registry: AgentRegistry, invoker: AgentInvoker, rbac: RBACManager):
    """Register agent, override, and prompt routes onto the FastAPI app."""

    # ══════════════════════════════════════════════════════════════
    # AGENTS (effective + source)
    # ══════════════════════════════════════════════════════════════

    @app_router.get("/agents", tags=["Agents"])
    def list_agents(principal: Principal = Depends(require(Permission.AGENT_READ))):
        agents = [_agent_summary(a, registry.has_override(k)) for k, a in registry.get_all_agents()]
        return {"count": len(agents), "agents": agents}

    @app_router.get("/agents/stats", tags=["Agents"])
    def agent_stats(principal: Principal = Depends(require(Permission.AGENT_READ))):
        return registry.get_stats()

    @app_router.get("/agents/{agent_key}", tags=["Agents"])
    def get_agent(
        agent_key: str,
        company_name: Optional[str] = Query(None),
        principal: Principal = Depends(require(Permission.AGENT_READ)),
    ):
        """Effective agent: catalog entry with the stored override applied."""
        agent = registry.get_agent(agent_key, _context(None, company_name))
        if not agent:
            raise HTTPException(404, "Agent not found")
        return _agent_to_dict(agent, registry.has_override(agent_key))

    @app_router.get("/agents/{agent_key}/source", tags=["Agents"])
    def get_source_agent(agent_key: str, principal: Principal = Depends(require(Permission.AGENT_READ))):
        agent = registry.get_source_agent_config(agent_key)
        if not agent:
            raise HTTPException(404, "Agent not found")
        return _agent_to_dict(agent, registry.has_override(agent_key))

    @app_router.get("/agents/{agent_key}/diff", tags=["Agents"])
    def get_agent_diff(agent_key: str, principal: Principal = Depends(require(Permission.AGENT_READ))):
        changes = registry.get_agent_diff(agent_key)
        if changes is None:
            raise HTTPException(404, "Agent not found")
        return {"agent_key": agent_key, "count": len(changes), "changes": changes}

    # ══════════════════════════════════════════════════════════════
    # OVERRIDES
    # ══════════════════════════════════════════════════════════════

    @app_router.get("/agents/{agent_key}/override", tags=["Overrides"])
    def get_override(agent_key: str, principal: Principal = Depends(require(Permission.AGENT_READ))):
        if registry.get_source_agent_config(agent_key) is None:
            raise HTTPException(404, "Agent not found")
        record = registry.get_override(agent_key)
        return {
            "agent_key": agent_key,
            "has_override": registry.has_override(agent_key),
            "version": registry.get_override_version(agent_key),
            "override": record.to_storage() if record else None,
        }

    @app_router.put("/agents/{agent_key}/override", tags=["Overrides"])
    def save_override(
        agent_key: str,
        record: OverrideRecord,
        principal: Principal = Depends(require(Permission.AGENT_CONFIGURE)),
    ):
        """Replace the agent's override. Prompt texts are compiled before anything is stored."""
        try:
            agent = registry.save_override(agent_key, record, updated_by=principal.user_id)
        except AgentNotFoundError:
            raise HTTPException(404, "Agent not found")
        except OverrideTemplateError as e:
            raise HTTPException(422, {"error": e.message, "action_key": e.action_key, "position": e.position})
        except UnknownActionError as e:
            raise HTTPException(422, {"error": str(e), "action_key": e.action_key, "position": None})
        except StorageUnavailableError as e:
            logger.error(f"Override save failed for {agent_key}: {e}")
            raise HTTPException(503, str(e))
        rbac.record(principal.user_id, "override_saved", {"agent_key": agent_key})
        return {
            "status": "saved",
            "agent_key": agent_key,
            "override": record.to_storage(),
            "agent": _agent_to_dict(agent, True),
        }

    @app_router.delete("/agents/{agent_key}/override", tags=["Overrides"])
    def clear_override(agent_key: str, principal: Principal = Depends(require(Permission.AGENT_CONFIGURE))):
        """Reset to the catalog definition."""
        try:
            registry.clear_override(agent_key)
        except AgentNotFoundError:
            raise HTTPException(404, "Agent not found")
        except StorageUnavailableError as e:
            logger.error(f"Override reset failed for {agent_key}: {e}")
            raise HTTPException(503, str(e))
        rbac.record(principal.user_id, "override_cleared", {"agent_key": agent_key})
        return {"status": "cleared", "agent_key": agent_key}

    # ══════════════════════════════════════════════════════════════
    # PROMPTS
    # ══════════════════════════════════════════════════════════════

    @app_router.get("/agents/{agent_key}/actions/{action_key}/template", tags=["Prompts"])
    def get_action_template(
        agent_key: str, action_key: str,
        principal: Principal = Depends(require(Permission.AGENT_READ)),
    ):
        """Classification of the effective prompt template (editable or not)."""
        c = registry.classify_action(agent_key, action_key)
        if c is None:
            raise HTTPException(404, "Agent or action not found")
        return {
            "agent_key": agent_key,
            "action_key": action_key,
            "type": c.type.value,
            "text": c.text,
            "editable": c.editable,
            "fields": _template_fields(c),
        }

    @app_router.post("/agents/{agent_key}/actions/{action_key}/preview", tags=["Prompts"])
    def preview_action(
        agent_key: str, action_key: str, req: ActionRunRequest,
        principal: Principal = Depends(require(Permission.AGENT_EXECUTE)),
    ):
        """Render the effective prompt for a data record without calling the model."""
        agent = registry.get_agent(agent_key, _context(req.tenant_id, req.company_name))
        if agent is None or agent.get_action(action_key) is None:
            raise HTTPException(404, "Agent or action not found")
        try:
            request = build_completion_request(agent, action_key, req.data, tenant_id=req.tenant_id)
        except PromptRenderError as e:
            raise HTTPException(422, _render_error(e))
        return {
            "agent_key": agent_key,
            "action_key": action_key,
            "model": request.model,
            "max_tokens": request.max_tokens,
            "system": request.system,
            "prompt": request.messages[0].content,
        }

    @app_router.post("/agents/{agent_key}/actions/{action_key}/invoke", tags=["Prompts"])
    async def invoke_action(
        agent_key: str, action_key: str, req: ActionRunRequest,
        principal: Principal = Depends(require(Permission.AGENT_EXECUTE)),
    ):
        try:
            text = await invoker.call_agent(agent_key, action_key, req.data, _context(req.tenant_id, req.company_name))
        except AgentNotFoundError as e:
            raise HTTPException(404, str(e))
        except PromptRenderError as e:
            raise HTTPException(422, _render_error(e))
        except CompletionError as e:
            raise HTTPException(502, str(e))
        except httpx.HTTPError as e:
            logger.error(f"LLM proxy unreachable for {agent_key}/{action_key}: {e}")
            raise HTTPException(502, f"LLM proxy unreachable: {e}")
        return {"agent_key": agent_key, "action_key": action_key, "response": text}

    @app_router.post("/agents/{agent_key}/chat", tags=["Prompts"])
    async def chat_with_agent(
        agent_key: str, req: ChatRequest,
        principal: Principal = Depends(require(Permission.AGENT_EXECUTE)),
    ):
        try:
            text = await invoker.chat_with_agent(
                agent_key, [m.model_dump() for m in req.messages], _context(req.tenant_id, req.company_name),
            )
        except AgentNotFoundError as e:
            raise HTTPException(404, str(e))
        except CompletionError as e:
            raise HTTPException(502, str(e))
        except httpx.HTTPError as e:
            logger.error(f"LLM proxy unreachable for {agent_key} chat: {e}")
            raise HTTPException(502, f"LLM proxy unreachable: {e}")
        return {"agent_key": agent_key, "response": text}
