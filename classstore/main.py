# classstore/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.sessions import SessionMiddleware
import uvicorn

# import all models before create_all
import classstore.data.models  # noqa: F401
from classstore.api.routers import admin, customers, health, orders, products, sellers
from classstore.data.database import Base, SessionLocal, engine
from classstore.data.seed import seed_demo_products
from classstore.repos.admin_repo import AdminRepo
from classstore.repos.memory import memory_store, InMemoryAdminRepo, InMemoryProductRepo
from classstore.repos.product_repo import ProductRepo
from classstore.services.auth_service import AuthService
from classstore.services.rate_limit_service import RateLimitService
from classstore.utils import settings
from classstore.utils.logging import get_logger

logger = get_logger(__name__)


def init_storage():
    """Creates tables, the bootstrap admin and (optionally) the demo catalogue."""
    if settings.STORAGE_BACKEND == "memory":
        _bootstrap(InMemoryProductRepo(memory_store), InMemoryAdminRepo(memory_store), seed=True)
        return

    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        _bootstrap(ProductRepo(db), AdminRepo(db), seed=settings.SEED_DEMO_DATA)
    finally:
        db.close()


def _bootstrap(product_store, admin_store, seed: bool):
    if settings.ADMIN_PASSWORD:
        AuthService(admin_store).ensure_admin(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    else:
        logger.warning("ADMIN_PASSWORD not set, no bootstrap admin account created")

    if seed:
        seed_demo_products(product_store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_storage()
    yield


def create_app(rate_limiter: RateLimitService | None = None) -> FastAPI:
    app = FastAPI(
        title="ClassStore",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
        https_only=settings.SITE_URL.startswith("https"),
    )

    limiter = rate_limiter or RateLimitService()
    if limiter.enabled:
        @app.middleware("http")
        async def rate_limit(request: Request, call_next):
            client_id = request.client.host if request.client else "unknown"
            allowed, retry_after = await run_in_threadpool(limiter.check, client_id)
            if not allowed:
                return JSONResponse(
                    status_code=429,
                    content={"message": "Rate limit exceeded. Try again later.", "retryAfter": retry_after},
                    headers={"Retry-After": str(retry_after)},
                )
            return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # malformed bodies are client errors like any other validation failure
        return JSONResponse(status_code=400, content={"detail": jsonable_errors(exc)})

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(sellers.router)
    app.include_router(orders.router)
    app.include_router(customers.router)
    app.include_router(admin.router)

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
