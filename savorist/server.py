"""FastAPI server exposing the restaurant discovery API."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from savorist.config import Config, get_config, setup_logging
from savorist.errors import InvalidFilterError, StoreError
from savorist.models import Restaurant, Review, ReviewCreate
from savorist.services import EntityStore, QueryService, ensure_seed_data

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def build_query_service(cfg: Config) -> QueryService:
    """Create the store, make sure its schema and seed data exist, wrap it."""
    store = EntityStore(cfg.database_path)
    store.init_schema()
    if cfg.seed_on_startup:
        ensure_seed_data(store)
    return QueryService(store, nearby_limit=cfg.nearby_limit)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan manager."""
    config = get_config()
    logger.info(f"Starting Savorist API on {config.server_host}:{config.server_port}")

    if getattr(_app.state, "query_service", None) is None:
        _app.state.query_service = build_query_service(config)
        logger.info("✓ Query service initialized")

    yield

    logger.info("Shutting down Savorist API")


def get_query_service(request: Request) -> QueryService:
    """Dependency to get the query service from app state.

    Raises:
        HTTPException: If the service is not initialized
    """
    service = getattr(request.app.state, "query_service", None)
    if service is None:
        from fastapi import HTTPException

        raise HTTPException(status_code=503, detail="Service not initialized yet")
    return service


router = APIRouter(prefix="/api/restaurants")


@router.get("", response_model=list[Restaurant])
def list_restaurants(service: QueryService = Depends(get_query_service)):
    try:
        return service.list_restaurants()
    except StoreError:
        logger.exception("Error listing restaurants")
        return _error(500, "Failed to fetch restaurants")


@router.get("/trending", response_model=list[Restaurant])
def trending_restaurants(service: QueryService = Depends(get_query_service)):
    try:
        return service.trending()
    except StoreError:
        logger.exception("Error listing trending restaurants")
        return _error(500, "Failed to fetch trending restaurants")


@router.get("/nearby", response_model=list[Restaurant])
def nearby_restaurants(service: QueryService = Depends(get_query_service)):
    try:
        return service.nearby()
    except StoreError:
        logger.exception("Error listing nearby restaurants")
        return _error(500, "Failed to fetch nearby restaurants")


@router.get("/search", response_model=list[Restaurant])
def search_restaurants(
    q: str = Query("", description="Text matched against name and cuisine"),
    service: QueryService = Depends(get_query_service),
):
    try:
        return service.search(q)
    except StoreError:
        logger.exception("Error searching restaurants")
        return _error(500, "Failed to search restaurants")


@router.get("/filter", response_model=list[Restaurant])
def filter_restaurants(
    cuisine_type: str | None = Query(None, alias="cuisineType"),
    min_rating: str | None = Query(None, alias="minRating"),
    price_range: str | None = Query(None, alias="priceRange"),
    service: QueryService = Depends(get_query_service),
):
    """Filter restaurants by cuisine, minimum rating and price tier.

    ``minRating`` is taken as text so that a non-numeric value produces a
    400 with an ``error`` body rather than FastAPI's default response.
    """
    try:
        return service.filter(
            cuisine_type=cuisine_type,
            min_rating=min_rating,
            price_range=price_range,
        )
    except InvalidFilterError as e:
        logger.info(f"Rejected filter request: {e}")
        return _error(400, "minRating must be a number")
    except StoreError:
        logger.exception("Error filtering restaurants")
        return _error(500, "Failed to filter restaurants")


@router.get("/{restaurant_id}", response_model=Restaurant)
def get_restaurant(
    restaurant_id: str, service: QueryService = Depends(get_query_service)
):
    try:
        restaurant = service.get_restaurant(restaurant_id)
    except StoreError:
        logger.exception(f"Error fetching restaurant {restaurant_id}")
        return _error(500, "Failed to fetch restaurant")

    if restaurant is None:
        return _error(404, "Restaurant not found")
    return restaurant


@router.get("/{restaurant_id}/reviews", response_model=list[Review])
def list_reviews(
    restaurant_id: str, service: QueryService = Depends(get_query_service)
):
    try:
        return service.reviews_for(restaurant_id)
    except StoreError:
        logger.exception(f"Error fetching reviews for {restaurant_id}")
        return _error(500, "Failed to fetch reviews")


@router.post("/{restaurant_id}/reviews", response_model=Review)
def create_review(
    restaurant_id: str,
    review: ReviewCreate,
    service: QueryService = Depends(get_query_service),
):
    try:
        created = service.add_review(restaurant_id, review)
    except StoreError:
        logger.exception(f"Error creating review for {restaurant_id}")
        return _error(500, "Failed to create review")

    if created is None:
        return _error(404, "Restaurant not found")
    return created


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = ", ".join(
        ".".join(str(part) for part in error["loc"] if part != "body")
        for error in exc.errors()
    )
    return _error(400, f"Invalid request: {fields}" if fields else "Invalid request")


async def _http_error_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _error(500, "Internal server error")


def create_app(query_service: QueryService | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        query_service: Pre-built service to use; when None, one is created
            from the configuration during startup

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Savorist API",
        description="Restaurant discovery API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.query_service = query_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy", "service": "savorist-api"}

    app.include_router(router)
    return app


app = create_app()


def run_server():
    """Run the FastAPI server using uvicorn.

    This is the main entry point for the server.
    """
    setup_logging()
    config = get_config()

    uvicorn.run(
        "savorist.server:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run_server()
