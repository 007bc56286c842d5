"""
Completion Client — sends effective agent prompts to the LLM proxy.
The proxy speaks the Anthropic messages shape: ``{model, max_tokens, system,
messages}`` in, ``{content: [{text}]}`` out.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from agent_console.agent_service.agent_registry import AgentNotFoundError, AgentRegistry, TenantContext
from agent_console.catalog.models import AgentDefinition
from agent_console.config.settings import settings

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response generated."
CHAT_MAX_TOKENS = 1024


class CompletionError(RuntimeError):
    """The LLM proxy returned a non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PromptRenderError(ValueError):
    """An action's prompt template could not render the given data record."""

    def __init__(self, message: str, action_key: str):
        super().__init__(message)
        self.action_key = action_key


class ChatMessage(BaseModel):
    role: str
    content: str


class CompletionRequest(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model: str
    max_tokens: int
    system: str = ""
    messages: List[ChatMessage] = Field(default_factory=list)
    agent_key: Optional[str] = None
    tenant_id: Optional[str] = None


def build_completion_request(
    agent: AgentDefinition,
    action_key: str,
    data: Any,
    agent_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> CompletionRequest:
    """Render one action of an effective agent into a single-turn request."""
    action = agent.get_action(action_key)
    if action is None:
        raise AgentNotFoundError(f"Agent or action not found: {agent.key}/{action_key}")
    try:
        prompt = action.render(data)
    except Exception as e:
        logger.warning(f"Prompt render failed for {agent.key}/{action_key}: {e!r}")
        raise PromptRenderError(f"Could not render prompt for {action_key}: {e!r}", action_key) from e
    return CompletionRequest(
        model=agent.model,
        max_tokens=agent.max_tokens or settings.default_max_tokens,
        system=agent.system_prompt,
        messages=[ChatMessage(role="user", content=prompt)],
        agent_key=agent_key or agent.key,
        tenant_id=tenant_id,
    )


class CompletionClient:
    """Async client for the ``/api/claude`` proxy endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.llm_proxy_url).rstrip("/")
        self._token = token if token is not None else settings.llm_proxy_token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.llm_timeout_seconds,
            transport=transport,
        )
        logger.info(f"[Completion Client] Initialized with base_url={self.base_url}")

    async def complete(self, request: CompletionRequest) -> str:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        resp = await self._client.post("/api/claude", json=request.model_dump(), headers=headers)
        if resp.status_code < 200 or resp.status_code >= 300:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            message = body.get("error") if isinstance(body, dict) else None
            logger.error(f"[Completion Client] Proxy error {resp.status_code} for agent {request.agent_key}")
            raise CompletionError(message or f"API error: {resp.status_code}", resp.status_code)
        return _first_text(resp.json())

    async def close(self):
        await self._client.aclose()


def _first_text(result: Dict[str, Any]) -> str:
    content = result.get("content") or []
    if content and isinstance(content[0], dict) and content[0].get("text"):
        return content[0]["text"]
    return NO_RESPONSE


class AgentInvoker:
    """Resolves effective agents through the registry and runs them."""

    def __init__(self, registry: AgentRegistry, client: CompletionClient):
        self.registry = registry
        self.client = client

    async def call_agent(
        self,
        agent_key: str,
        action_key: str,
        data: Any,
        tenant_context: Optional[TenantContext] = None,
    ) -> str:
        agent = await asyncio.to_thread(self.registry.get_agent, agent_key, tenant_context)
        if agent is None or agent.get_action(action_key) is None:
            raise AgentNotFoundError(f"Agent or action not found: {agent_key}/{action_key}")
        tenant_id = tenant_context.tenant_id if tenant_context else None
        request = build_completion_request(agent, action_key, data, agent_key=agent_key, tenant_id=tenant_id)
        logger.info(f"Invoking {agent_key}/{action_key} on {agent.model}")
        return await self.client.complete(request)

    async def chat_with_agent(
        self,
        agent_key: str,
        messages: List[Dict[str, str]],
        tenant_context: Optional[TenantContext] = None,
    ) -> str:
        agent = await asyncio.to_thread(self.registry.get_agent, agent_key, tenant_context)
        if agent is None:
            raise AgentNotFoundError(f"Agent not found: {agent_key}")
        request = CompletionRequest(
            model=agent.model,
            max_tokens=CHAT_MAX_TOKENS,
            system=agent.system_prompt,
            messages=[ChatMessage(**m) for m in messages],
            agent_key=agent_key,
            tenant_id=tenant_context.tenant_id if tenant_context else None,
        )
        return await self.client.complete(request)
