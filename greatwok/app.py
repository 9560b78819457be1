# app.py
import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from greatwok.core import config
from greatwok.core.db import Base, engine, get_db
from greatwok.core.errors import register_error_handlers
from greatwok.core.logger import configure_logging
from greatwok.core.rate_limiter import FixedWindowRateLimiter, rate_limit_middleware, security_headers_middleware

# Import all models FIRST to ensure SQLAlchemy relationships are registered
from greatwok.models.user import User
from greatwok.models.category import Category
from greatwok.models.dish import Dish
from greatwok.models.inventory import Inventory
from greatwok.models.cart import CartItem
from greatwok.models.address import Address
from greatwok.models.order import Order, OrderItem
from greatwok.models.review import Review
from greatwok.models.audit_log import AuditLog

from greatwok.routes import users, categories, dishes, inventory, cart, addresses, orders, reviews, uploads, audit

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check failed")
        return JSONResponse(status_code=500, content={"status": "DOWN", "dbConnected": False})
    return {"status": "UP", "dbConnected": True}


def create_app(create_tables: bool = True) -> FastAPI:
    if not config.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not set; refusing to start")

    configure_logging()

    app = FastAPI(title="The Great Wok API")
    app.state.rate_limiter = FixedWindowRateLimiter(config.RATE_LIMIT_MAX, config.RATE_LIMIT_WINDOW_SECONDS)

    # registered innermost first; CORS ends up outermost so 429s still carry CORS headers
    app.middleware("http")(security_headers_middleware)
    app.middleware("http")(rate_limit_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    for module in (users, categories, dishes, inventory, cart, addresses, orders, reviews, uploads, audit):
        app.include_router(module.router, prefix=API_PREFIX)

    app.add_api_route("/health", health, methods=["GET"], tags=["health"])
    app.add_api_route(f"{API_PREFIX}/health", health, methods=["GET"], tags=["health"])

    if create_tables:
        Base.metadata.create_all(bind=engine)

    logger.info("API ready, CORS origins: %s", ", ".join(config.CORS_ORIGINS))
    return app
