import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.core.config import settings
from storefront.application.commerce_store import CommerceStore
from storefront.domain.errors import StoreError
from storefront.interfaces import api
from storefront.interfaces.ICommerceStore import ICommerceStore

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")


def create_app(store: Optional[ICommerceStore] = None) -> FastAPI:
    """
    Composition root. Tests pass their own store; the served app builds one
    from settings.
    """
    configure_logging()
    app = FastAPI(title=settings.PROJECT_NAME)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store if store is not None else CommerceStore()
    app.include_router(api.router)

    # ---------------------------------------------------------
    # ERROR TRANSLATION
    # ---------------------------------------------------------
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.warning(f"⚠️ {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning(f"⚠️ {request.method} {request.url.path} -> 400: {message}")
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"❌ {request.method} {request.url.path} failed: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Unexpected error"})

    @app.get("/")
    def health_check():
        return {"status": "active", "system": settings.PROJECT_NAME}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
