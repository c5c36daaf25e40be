# ========== routes/health.py ==========
"""
Rota de Health Check
"""

from fastapi import APIRouter, Request
from datetime import datetime

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Verifica status da aplicação e do armazenamento
    """
    settings = request.app.state.settings
    db_manager = getattr(request.app.state, "db_manager", None)

    if db_manager is None:
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "storage": "memory",
            "version": settings.APP_VERSION,
        }

    conectado = await db_manager.ping()
    return {
        "status": "healthy" if conectado else "unhealthy",
        "timestamp": datetime.now().isoformat(),
        "storage": "mongo",
        "database": "connected" if conectado else "disconnected",
        "version": settings.APP_VERSION,
    }


@router.get("/ping")
async def ping():
    """
    Ping simples
    """
    return {"message": "pong", "timestamp": datetime.now().isoformat()}
