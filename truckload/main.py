import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from truckload.api.routers.csv_upload import router as csv_upload_router
from truckload.api.routers.optimization import router as optimization_router
from truckload.api.routers.shipments import router as shipments_router
from truckload.core.config import settings
from truckload.core.errors import ShipmentError
from truckload.core.flow_logging import configure_logging
from truckload.crud.shipment_store import InMemoryShipmentStore, ShipmentStore, SqlShipmentStore
from truckload.db.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)


def build_store(backend: str | None = None) -> ShipmentStore:
    backend = (backend or settings.SHIPMENT_STORE_BACKEND).strip().lower()
    if backend == "memory":
        return InMemoryShipmentStore()
    if backend == "sql":
        return SqlShipmentStore(build_session_factory(build_engine()))
    raise ValueError(f"Unknown SHIPMENT_STORE_BACKEND '{backend}' (expected memory or sql).")


async def _shipment_error_handler(request: Request, exc: ShipmentError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_detail()))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def _unhandled_errors(request: Request, call_next):
    # Registered before CORSMiddleware so the 500 still carries CORS headers.
    try:
        return await call_next(request)
    except Exception:
        logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(store: ShipmentStore | None = None) -> FastAPI:
    """
    Build the API around one explicitly owned shipment store.

    Each call gets its own store unless one is passed in, so separate apps
    never share state.
    """
    configure_logging()

    app = FastAPI(title="Truckload Shipment Review API")
    app.state.shipment_store = store if store is not None else build_store()

    app.middleware("http")(_unhandled_errors)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    app.add_exception_handler(ShipmentError, _shipment_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    prefix = settings.API_PREFIX
    app.include_router(shipments_router, prefix=prefix)
    app.include_router(csv_upload_router, prefix=prefix)
    app.include_router(optimization_router, prefix=prefix)

    @app.get("/health")
    def health():
        return {"status": "up"}

    return app


app = create_app()
