"""
Agent Console — FastAPI Server
Admin API over the agent registry: read effective and source agents, edit and
reset tenant overrides, classify and preview prompts, and invoke actions.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from agent_console import __version__
from agent_console.agent_service.agent_registry import AgentRegistry
from agent_console.api.routes_agents import register_agent_routes
from agent_console.auth import DEV_PRINCIPAL, Permission, Principal, RBACManager, TokenAuthenticator, require
from agent_console.config.settings import settings
from agent_console.db.override_store import DatabaseOverrideStore
from agent_console.llm.completion_client import AgentInvoker, CompletionClient

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


_PUBLIC_PATHS = {"/info", "/health", "/docs", "/openapi.json", "/redoc"}


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolve the bearer token to a principal on ``request.state``."""

    def __init__(self, app, authenticator: TokenAuthenticator, allow_anonymous: bool):
        super().__init__(app)
        self.authenticator = authenticator
        self.allow_anonymous = allow_anonymous

    async def dispatch(self, request: Request, call_next):
        path = request.url.path.rstrip("/")
        if (request.method == "OPTIONS"
                or path in _PUBLIC_PATHS
                or path.startswith("/docs")
                or path.startswith("/openapi")):
            return await call_next(request)

        auth_header = request.headers.get("authorization", "")
        if auth_header.startswith("Bearer "):
            principal = self.authenticator.authenticate(auth_header[7:])
            if principal:
                request.state.principal = principal
                return await call_next(request)

        # No valid token: run as the dev admin in dev mode, reject otherwise
        if self.allow_anonymous:
            request.state.principal = DEV_PRINCIPAL
            return await call_next(request)

        return JSONResponse(status_code=401, content={"detail": "Authentication required."})


def create_app(
    registry: Optional[AgentRegistry] = None,
    completion_client: Optional[CompletionClient] = None,
    rbac: Optional[RBACManager] = None,
    allow_anonymous: Optional[bool] = None,
) -> FastAPI:
    registry = registry or AgentRegistry()
    completion_client = completion_client or CompletionClient()
    rbac = rbac or RBACManager()
    authenticator = TokenAuthenticator(settings.api_tokens, rbac)
    invoker = AgentInvoker(registry, completion_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"[AGENT CONSOLE] Starting v{__version__} ({settings.environment})")
        if isinstance(registry.store, DatabaseOverrideStore):
            await asyncio.to_thread(registry.store.create_tables)
        logger.info(
            f"[AGENT CONSOLE] {len(registry.catalog)} catalog agents, "
            f"override store '{type(registry.store).__name__}' scope '{registry.store.tenant_id}'"
        )
        yield
        logger.info("[AGENT CONSOLE] Shutting down...")
        await completion_client.close()
        if isinstance(registry.store, DatabaseOverrideStore):
            await asyncio.to_thread(registry.store.close)

    app = FastAPI(
        title="Agent Console",
        description="Catalog agents, tenant overrides, and prompt templates.",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "System", "description": "Health checks and platform info"},
            {"name": "Agents", "description": "Effective and source agent definitions"},
            {"name": "Overrides", "description": "Tenant override edit and reset"},
            {"name": "Prompts", "description": "Template classification, preview, invoke"},
            {"name": "Auth", "description": "RBAC roles and audit log"},
        ],
    )
    app.state.registry = registry
    app.state.rbac = rbac

    app.add_middleware(AuthMiddleware, authenticator=authenticator,
                       allow_anonymous=settings.is_dev if allow_anonymous is None else allow_anonymous)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["System"])
    async def health():
        return {"status": "ok"}

    @app.get("/info", tags=["System"])
    async def info():
        return {
            "name": "Agent Console",
            "version": __version__,
            "environment": settings.environment,
            "override_store": settings.override_store,
            "tenant_scope": registry.store.tenant_id,
            "agents": len(registry.catalog),
        }

    @app.get("/auth/roles", tags=["Auth"])
    def list_roles(principal: Principal = Depends(require(Permission.AGENT_READ))):
        return {
            "roles": [
                {"name": r.name, "description": r.description,
                 "permissions": sorted(p.value for p in r.permissions)}
                for r in rbac.list_roles()
            ],
        }

    @app.get("/auth/audit", tags=["Auth"])
    def audit_log(limit: int = 50, principal: Principal = Depends(require(Permission.AUDIT_READ))):
        entries = rbac.get_audit_log(limit)
        return {"count": len(entries), "entries": entries}

    register_agent_routes(app, registry, invoker, rbac)
    return app


app = create_app()
