"""AgriGo FastAPI application.

Usage:
    uvicorn agrigo.app:app --host 0.0.0.0 --port 8000 --reload

PROTEAN_ENV selects the domain.toml overlay (``test``, ``production``).
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from agrigo.config import get_settings
from agrigo.domain import agrigo
from agrigo.error_handlers import register_error_handlers
from agrigo.utils.db import setup_db
from agrigo.utils.logging import add_context, clear_context, get_logger

logger = get_logger(__name__)


def create_app(init_domain: bool = True) -> FastAPI:
    """Build the application.

    With ``init_domain`` the lifespan initializes the domain and creates the
    schema on SQL providers. Tests that already initialized it pass False.
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_domain:
            agrigo.init()
            setup_db(agrigo)
            logger.info("Domain initialized", domain=agrigo.name)
        yield

    app = FastAPI(title=settings.app_name, description=settings.app_description, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the domain context and bind request details to log lines."""
        add_context(method=request.method, path=request.url.path)
        try:
            with agrigo.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    from agrigo.catalogue.api import router as product_router
    from agrigo.identity.api import router as auth_router
    from agrigo.ordering.api import router as order_router

    app.include_router(auth_router)
    app.include_router(product_router)
    app.include_router(order_router)

    register_error_handlers(app)

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    async def welcome():
        return "Welcome to agriGo."

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": agrigo.name})

    return app


app = create_app()
