"""
FastAPI Application Entry Point

Restaurant Ordering API - restaurant menus and server-priced orders.

Endpoints:
    - GET  /restaurants: List restaurants
    - POST /restaurants: Create a restaurant with its menu
    - POST /orders: Price and place an order
    - GET  /orders: List orders with their restaurant joined in
    - GET  /health: System health check

Run:
    uvicorn app.main:app --port 5000
    python -m app.main

Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings, setup_logging
from app.core.errors import OrderingError
from app.database import Database, get_database
from app.schemas import (
    ErrorResponse,
    HealthResponse,
    OrderCreate,
    OrderDetailResponse,
    OrderResponse,
    RestaurantCreate,
    RestaurantResponse,
)
from app.services import (
    OrderPricer,
    OrderStore,
    RestaurantStore,
    get_order_pricer,
    get_order_store,
    get_restaurant_store,
)
from app.validation import format_errors

setup_logging()
logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    database = Database.from_settings(settings)
    database.connect()
    await database.init_models()
    app.state.database = database
    logger.info("✅ Datastore initialized")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    await database.dispose()
    logger.info("✅ Cleanup complete")


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@router.get("/", tags=["Root"])
async def root(request: Request) -> dict[str, str]:
    """API root with navigation links."""
    settings: Settings = request.app.state.settings
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(database: Database = Depends(get_database)) -> HealthResponse:
    """Verify the datastore is reachable."""
    db_status = "healthy" if await database.ping() else "unhealthy"

    return HealthResponse(
        status="operational" if db_status == "healthy" else "degraded",
        database=db_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# RESTAURANT ENDPOINTS
# =============================================================================

@router.get(
    "/restaurants",
    response_model=list[RestaurantResponse],
    responses={500: {"model": ErrorResponse}},
    tags=["Restaurants"],
    summary="List Restaurants",
)
async def list_restaurants(
    store: RestaurantStore = Depends(get_restaurant_store),
) -> list[RestaurantResponse]:
    """Retrieve every restaurant with its menu."""
    restaurants = await store.list_all()
    return [RestaurantResponse.from_model(r) for r in restaurants]


@router.post(
    "/restaurants",
    response_model=RestaurantResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Restaurants"],
    summary="Create Restaurant",
)
async def create_restaurant(
    payload: RestaurantCreate,
    store: RestaurantStore = Depends(get_restaurant_store),
) -> RestaurantResponse:
    """Create a restaurant with an optional menu of priced items."""
    restaurant = await store.create(payload)
    return RestaurantResponse.from_model(restaurant)


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@router.post(
    "/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Place Order",
)
async def place_order(
    payload: OrderCreate,
    pricer: OrderPricer = Depends(get_order_pricer),
    orders: OrderStore = Depends(get_order_store),
) -> OrderResponse:
    """
    Price an order against the restaurant's current menu and store it.

    Any total sent by the client is ignored. Nothing is stored unless every
    line matches a menu item.
    """
    logger.info(
        f"Placing order for restaurant #{payload.restaurant_id} "
        f"({len(payload.items)} lines)"
    )

    priced = await pricer.price(payload.restaurant_id, payload.items)
    order = await orders.create(payload.restaurant_id, payload.items, priced.total)

    return OrderResponse.from_model(order)


@router.get(
    "/orders",
    response_model=list[OrderDetailResponse],
    responses={500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(
    orders: OrderStore = Depends(get_order_store),
) -> list[OrderDetailResponse]:
    """Retrieve every order with restaurantId resolved to the full restaurant."""
    stored = await orders.list_all()
    return [OrderDetailResponse.from_model(o) for o in stored]


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    """Convert domain errors to {message} with their mapped status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 rather than FastAPI's 422."""
    message = format_errors("Request", exc.errors())
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")

    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")
    settings: Settings = request.app.state.settings

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": str(exc) if settings.debug else "An unexpected error occurred",
        },
    )


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings

    Returns:
        Configured FastAPI instance; the datastore opens when its lifespan starts
    """
    settings = settings or get_settings()

    application = FastAPI(
        title=settings.app_name,
        description=(
            "Restaurant menu management and order placement. "
            "Order totals are always computed server-side from menu prices."
        ),
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    application.state.settings = settings

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(router)

    application.add_exception_handler(OrderingError, ordering_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(Exception, global_exception_handler)

    return application


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Server is running on http://{settings.api_host}:{settings.api_port}")
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
