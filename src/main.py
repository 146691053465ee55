"""
Variant attribute service entrypoint.

Startup order:
1. Load environment variables (done by src.config)
2. Configure structured logging
3. Register middleware, error handlers and routers
"""

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api import (
    attributes_router,
    field_types_router,
    health_router,
    variants_router,
)
from src.config import config
from src.core.errors import (
    ErrorResponse,
    error_response_handler,
    http_exception_handler,
)
from src.core.logger import logger
from src.middlewares import CorrelationIdMiddleware

app = FastAPI(
    title="Variant Attribute Service",
    version=config.service_version,
)

# Add correlation ID middleware first
app.add_middleware(CorrelationIdMiddleware)

# Register centralized error handlers
app.add_exception_handler(ErrorResponse, error_response_handler)
app.add_exception_handler(HTTPException, http_exception_handler)


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.error(
        f"Validation error: {errors}",
        metadata={"businessEvent": "VALIDATION_ERROR", "url": str(request.url)},
    )
    return JSONResponse(
        status_code=422,
        content={"error": "Validation error", "details": jsonable_errors(errors)},
    )


def jsonable_errors(errors):
    """Validation errors with their exception contexts stringified"""
    cleaned = []
    for error in errors:
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        error.pop("url", None)
        cleaned.append(error)
    return cleaned


# Include routers
app.include_router(health_router)
app.include_router(field_types_router)
app.include_router(attributes_router)
app.include_router(variants_router)


if __name__ == "__main__":
    logger.info(
        "Service configuration",
        metadata={
            "service": {
                "name": config.service_name,
                "version": config.service_version,
                "environment": config.environment,
                "port": config.port,
            },
            "catalog_api_url": config.catalog_api_url,
        },
    )

    uvicorn.run("src.main:app", host=config.host, port=config.port, reload=config.is_development)
