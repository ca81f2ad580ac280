"""Document Insights API layer: routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    status_for_error,
)
from src.api.routes import router
from src.api.schemas import (
    ConfluenceRequest,
    DocumentDetailResponse,
    DocumentSummaryResponse,
    ErrorResponse,
    HealthResponse,
    InsightsRequest,
    InsightsResponse,
    SummaryResponse,
    TopicsRequest,
    TopicsResponse,
    UploadResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "status_for_error",
    "router",
    "ConfluenceRequest",
    "DocumentDetailResponse",
    "DocumentSummaryResponse",
    "ErrorResponse",
    "HealthResponse",
    "InsightsRequest",
    "InsightsResponse",
    "SummaryResponse",
    "TopicsRequest",
    "TopicsResponse",
    "UploadResponse",
]
