"""Pantry FastAPI application.

Web server that processes pantry commands synchronously via HTTP. Every
request that targets a pantry route runs inside the pantry domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - unset / "test" → in-memory database
#   - "production"   → PostgreSQL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pantry.domain import pantry  # noqa: E402
from pantry.utils.logging import bind_request, unbind_request

pantry.init()

_DOMAIN_ROUTE_PREFIXES = ("/items", "/carts", "/orders", "/pantries")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Pantry API",
    description="Community pantry: carts, checkout and order pickup",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Run pantry routes inside the domain context, with the caller bound to the log context."""
    if not request.url.path.startswith(_DOMAIN_ROUTE_PREFIXES):
        return await call_next(request)

    bind_request(
        method=request.method,
        path=request.url.path,
        user_id=request.headers.get("x-user-id"),
        role=request.headers.get("x-user-role", "user"),
    )
    try:
        with pantry.domain_context():
            return await call_next(request)
    finally:
        unbind_request()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from pantry.api import (  # noqa: E402
    cart_router,
    item_router,
    order_router,
    pantry_router,
    register_error_handlers,
)

app.include_router(item_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(pantry_router)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": pantry.name}})
