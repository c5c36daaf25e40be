"""
Middleware para logging de requisições
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import time
import logging

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware para logar todas as requisições

    Rotas de health check são logadas em DEBUG para não poluir o log.
    """

    SILENCIOSAS = ("/health", "/ping")

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        nivel = logging.DEBUG if request.url.path in self.SILENCIOSAS else logging.INFO

        logger.log(nivel, f"➡️  {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.perf_counter() - start_time

        logger.log(
            nivel,
            f"⬅️  {request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Tempo: {process_time * 1000:.1f}ms"
        )

        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        return response
