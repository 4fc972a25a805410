import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.concurrency import run_in_threadpool

from paperbook_backend.api.api_builder import CrudRouter
from paperbook_backend.api.rate_limit import limiter
from paperbook_backend.api.users import user_router
from paperbook_backend.business_logic.services import build_services
from paperbook_backend.database import SessionLocal, get_engine
from paperbook_backend.exceptions import register_exception_handlers
from paperbook_backend.interfaces import (
    AddressInterface,
    OrderInterface,
    ProductGroupInterface,
    ProductInterface,
    RatingInterface,
    ShoppingCartInterface,
    UserInterface,
)
from paperbook_backend.interfaces.roles import CATALOG_MANAGERS, Role
from paperbook_backend.model import Base
from paperbook_backend.settings import settings

logger = logging.getLogger(__name__)


def init_admin_user():
    """Create the bootstrap admin from ADMIN_EMAIL/ADMIN_PASSWORD if configured."""

    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.info("No bootstrap admin configured")
        return

    db = SessionLocal()
    try:
        build_services(db).users.ensure_admin("Admin", settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        db.commit()
    except Exception:
        db.rollback()
        logger.critical("Admin user could not be created", exc_info=True)
        raise
    finally:
        db.close()


def startup_logic():
    Base.metadata.create_all(get_engine())
    init_admin_user()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await run_in_threadpool(startup_logic)
    yield


app = FastAPI(title="Paperbook API", lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Register custom exception handlers for structured error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

# Must precede the users CRUD routes
app.include_router(user_router)

CrudRouter(
    UserInterface,
    public=["create"],
    rate_limits={"create": settings.SIGNUP_RATE_LIMIT},
) \
    .add_related("addresses", AddressInterface) \
    .add_related("orders", OrderInterface) \
    .add_related("products", ProductInterface, public=True) \
    .add_related("ratings", RatingInterface) \
    .add_related("shopping-carts", ShoppingCartInterface) \
    .register_routes(app)

CrudRouter(AddressInterface).register_routes(app)

CrudRouter(OrderInterface).register_routes(app)

CrudRouter(
    ProductInterface,
    public=["get", "list"],
    roles={name: CATALOG_MANAGERS for name in ("create", "update", "delete", "disable", "enable")},
) \
    .add_related("ratings", RatingInterface, public=True) \
    .register_routes(app)

CrudRouter(RatingInterface, public=["list"]).register_routes(app)

CrudRouter(
    ShoppingCartInterface,
    roles={name: (Role.admin,) for name in ("update", "disable", "enable")},
) \
    .add_related("product-groups", ProductGroupInterface) \
    .register_routes(app)

CrudRouter(ProductGroupInterface).register_routes(app)


@app.head("/", status_code=204)
def get_status_head():
    return
