"""
Middleware per il logging centralizzato di richieste, tempi ed eventi di sicurezza
"""
import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


def _client_ip(request: Request):
    return request.client.host if request.client else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logga ogni richiesta e aggiunge gli header X-Request-ID e X-Process-Time.

    Un X-Request-ID inviato dal client viene riutilizzato.
    """

    def __init__(self, app, log_requests: bool = True, log_responses: bool = False):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        if self.log_requests:
            logger.info(
                f"Request started: {request.method} {request.url.path}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "query_params": str(request.query_params),
                    "client_ip": _client_ip(request),
                    "user_agent": request.headers.get("user-agent"),
                }
            )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request failed: {request.method} {request.url.path} - {type(exc).__name__}: {exc}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "error_type": type(exc).__name__,
                    "process_time": time.perf_counter() - start_time,
                },
                exc_info=True
            )
            raise

        process_time = time.perf_counter() - start_time
        if self.log_responses:
            logger.info(
                f"Request completed: {request.method} {request.url.path} - {response.status_code}",
                extra={
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "process_time": process_time,
                }
            )

        response.headers[PROCESS_TIME_HEADER] = f"{process_time:.6f}"
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class PerformanceLoggingMiddleware(BaseHTTPMiddleware):
    """Segnala le richieste più lente della soglia configurata"""

    def __init__(self, app, slow_request_threshold: float = 1.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        if process_time > self.slow_request_threshold:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "process_time": process_time,
                    "threshold": self.slow_request_threshold,
                    "status_code": response.status_code,
                }
            )
        return response


class SecurityLoggingMiddleware(BaseHTTPMiddleware):
    """Logga gli accessi agli endpoint sensibili e le risposte di errore di autenticazione"""

    sensitive_paths = ("/api/v1/auth/", "/api/v1/users")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.startswith(self.sensitive_paths):
            logger.info(
                f"Access to sensitive endpoint: {request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "client_ip": _client_ip(request),
                    "user_agent": request.headers.get("user-agent"),
                }
            )

        response = await call_next(request)

        if response.status_code in (401, 403):
            logger.warning(
                f"Access denied: {request.method} {request.url.path} - {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "client_ip": _client_ip(request),
                }
            )
        return response
