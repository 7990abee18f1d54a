import json
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, Response, Request, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from message_service.config import settings
from message_service.storage import init_db, check_db_health
from message_service.logging_utils import setup_logging, RequestLoggingMiddleware, log_message_data
from message_service.metrics import record_message_outcome, get_metrics, get_metrics_content_type
from message_service.models import Message
from message_service.service import MessageService, get_message_service
from message_service.schemas import (
    ErrorResponse,
    HealthResponse,
    MessageCreate,
    MessageResponse,
)


setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    - Startup: apply the schema script so the messages table exists
    """
    init_db()
    yield


app = FastAPI(
    title="Message Service",
    description="Persisted message service: post a message, list all messages",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)


# =============================================================================
# Health Check Routes
# =============================================================================

@app.get("/health/live", response_model=HealthResponse)
async def health_live() -> HealthResponse:
    """Liveness probe - always returns 200 once the app is running."""
    return HealthResponse(status="ok")


@app.get("/health/ready", response_model=HealthResponse)
async def health_ready(response: Response) -> HealthResponse:
    """
    Readiness probe - returns 200 only if the DB is reachable and the
    messages table exists, otherwise 503 (Service Unavailable).
    """
    if not check_db_health():
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="not_ready",
            reason="Database not reachable or schema not applied"
        )

    return HealthResponse(status="ready")


# =============================================================================
# Message Routes
# =============================================================================

@app.get(
    "/",
    response_model=List[MessageResponse],
    responses={500: {"model": ErrorResponse, "description": "Store failure"}},
)
async def list_messages(
    service: MessageService = Depends(get_message_service),
) -> List[Message]:
    """
    List every stored message as a JSON array of {"id", "text"}.

    Order is whatever the store returns; there is no pagination.
    """
    logger.info("GET /: listing messages")

    try:
        messages = service.find_messages()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load messages: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load messages"
        )

    logger.info(f"GET /: returned {len(messages)} messages")
    return messages


@app.post(
    "/",
    response_class=Response,
    responses={
        200: {"description": "Message stored, empty body"},
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
async def post_message(
    request: Request,
    service: MessageService = Depends(get_message_service),
) -> Response:
    """
    Store a new message.

    Body: {"text": "<string>"} with an optional "id". The id is generated
    server-side when omitted. Responds 200 with an empty body.
    """
    raw_body = await request.body()
    logger.debug(f"Request body size: {len(raw_body)} bytes")

    try:
        payload = MessageCreate.model_validate(json.loads(raw_body))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Invalid JSON: {e}")
        record_message_outcome("validation_error")
        log_message_data(request=request, result="validation_error")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid JSON: {str(e)}"
        )
    except ValidationError as e:
        logger.error(f"Validation error: {e}")
        record_message_outcome("validation_error")
        log_message_data(request=request, result="validation_error")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )

    message = Message(**payload.model_dump(exclude_none=True))

    try:
        service.post(message)
    except SQLAlchemyError:
        record_message_outcome("error")
        log_message_data(request=request, message_id=payload.id, result="error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store message"
        )

    logger.info(f"Message stored: {message.id}")
    record_message_outcome("created")
    log_message_data(request=request, message_id=message.id, result="created")

    return Response(status_code=status.HTTP_200_OK)


# =============================================================================
# Metrics Route
# =============================================================================

@app.get("/metrics")
async def metrics() -> Response:
    """
    Expose Prometheus-style metrics:
    - http_requests_total: Total HTTP requests by method, path, status
    - messages_posted_total: POST / outcomes by result
    - request_latency_seconds: Request latency histogram
    """
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type()
    )
