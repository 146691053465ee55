from starlette.middleware.base import BaseHTTPMiddleware

from src.utils.correlation_id import (
    CORRELATION_ID_HEADER,
    extract_correlation_id_from_headers,
    set_correlation_id,
)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to extract or generate correlation IDs for requests.
    Sets the correlation ID in the context for use throughout the request lifecycle.
    """

    async def dispatch(self, request, call_next):
        correlation_id = extract_correlation_id_from_headers(dict(request.headers))

        set_correlation_id(correlation_id)

        response = await call_next(request)

        response.headers[CORRELATION_ID_HEADER] = correlation_id

        return response
