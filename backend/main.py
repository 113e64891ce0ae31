from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from contextlib import asynccontextmanager
from init_db import init_database
from api import categories, products, customer_details, shopping_carts, product_orders
from api.headers import alert_header_names
from config.settings import get_app_name, get_log_dir, get_log_level, is_cascade_delete_enabled
from constants import HTTPStatus
from utils.logging_utils import configure_logging, set_logging_context, clear_logging_context
import logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "Storefront API"
SERVICE_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    log_file = configure_logging(get_log_dir(), get_log_level())
    logger.info(f"Logging initialized: {log_file}")

    init_database()
    logger.info(f"Delete policy: {'cascade' if is_cascade_delete_enabled() else 'refuse while referenced'}")
    logger.info(f"{SERVICE_NAME} started")

    yield

    logger.info(f"{SERVICE_NAME} shutting down")


app = FastAPI(
    title=SERVICE_NAME,
    description="Customers, shopping carts, product orders and the product catalogue",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

# Configure CORS - allow all origins for network accessibility
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count", "Link", "Location", *alert_header_names(get_app_name())],
)


@app.middleware("http")
async def logging_context_middleware(request: Request, call_next):
    """Scope the logging context to one request."""
    clear_logging_context()
    set_logging_context(method=request.method, path=request.url.path)
    try:
        return await call_next(request)
    finally:
        clear_logging_context()


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query parameters are caller errors (400)."""
    logger.warning(f"{request.method} {request.url.path} - Invalid request: {exc.errors()}")
    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content=jsonable_encoder({"detail": {"message": "Invalid request", "reason": "invalid", "errors": exc.errors()}}),
    )


# Include API routers
app.include_router(categories.router, prefix="/api", tags=["categories"])
app.include_router(products.router, prefix="/api", tags=["products"])
app.include_router(customer_details.router, prefix="/api", tags=["customer-details"])
app.include_router(shopping_carts.router, prefix="/api", tags=["shopping-carts"])
app.include_router(product_orders.router, prefix="/api", tags=["product-orders"])


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION
    }


if __name__ == "__main__":
    import uvicorn
    from config.settings import get_server_host, get_server_port

    host = get_server_host()
    port = get_server_port()
    logger.info(f"Starting {SERVICE_NAME} on http://{host}:{port}...")
    uvicorn.run(app, host=host, port=port)
