"""
main.py - Aplicação Principal da API Strategy Builder Engine

Arquitetura:
    - Motor puro (core/, condicoes/) sem I/O
    - Repositório de estratégias injetado em app.state
    - Configurações centralizadas
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging
import sys
from datetime import datetime

# Importar configurações
from config.settings import Settings
from config.database import DatabaseManager

# Importar motor
from condicoes import subtipos_suportados
from core.repositorio import InMemoryStrategyRepository, MongoStrategyRepository

# Importar rotas
from routes import estrategias, templates, health

# Importar middleware customizado
from middleware.logging_middleware import LoggingMiddleware
from middleware.error_handler import error_handler_middleware

# ========== CARREGAR CONFIGURAÇÕES ==========
settings = Settings()

# ========== CONFIGURAÇÃO DE LOGGING ==========
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(settings.LOG_FILE)
    ]
)
logger = logging.getLogger(__name__)


# ========== LIFESPAN (STARTUP/SHUTDOWN) ==========
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Gerencia o ciclo de vida da aplicação
    - Startup: escolhe o repositório (memória ou MongoDB)
    - Shutdown: fecha conexões
    """
    # ===== STARTUP =====
    logger.info("=" * 60)
    logger.info(f"  {settings.APP_NAME.upper()}")
    logger.info("=" * 60)
    logger.info(f"  Versão: {settings.APP_VERSION}")
    logger.info(f"  Ambiente: {settings.ENVIRONMENT}")
    logger.info(f"  Armazenamento: {settings.STORAGE_BACKEND}")
    logger.info(f"  Condições: {len(subtipos_suportados())}")
    logger.info("=" * 60)

    app.state.settings = settings
    app.state.db_manager = None

    try:
        if settings.usa_mongo:
            db_manager = DatabaseManager(settings)
            await db_manager.connect()

            if await db_manager.ping():
                logger.info("✅ MongoDB conectado com sucesso")
            else:
                logger.error("❌ Falha na conexão com MongoDB")
                raise ConnectionError("Não foi possível conectar ao MongoDB")

            await db_manager.create_indexes()

            app.state.db_manager = db_manager
            app.state.repositorio = MongoStrategyRepository(db_manager.get_collection())
        else:
            app.state.repositorio = InMemoryStrategyRepository()
            logger.info("✅ Repositório em memória")

        logger.info(f"✅ Aplicação iniciada na porta {settings.API_PORT}")

    except Exception as e:
        logger.error(f"❌ Erro ao iniciar aplicação: {e}")
        raise

    yield

    # ===== SHUTDOWN =====
    logger.info("🔄 Encerrando aplicação...")

    if app.state.db_manager is not None:
        try:
            await app.state.db_manager.disconnect()
            logger.info("✅ MongoDB desconectado com sucesso")
        except Exception as e:
            logger.error(f"❌ Erro ao desconectar MongoDB: {e}")

    logger.info("👋 Aplicação encerrada")


# ========== CRIAR APLICAÇÃO FASTAPI ==========
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="""
    API do construtor de estratégias: grafos de nós (gatilho, condição,
    lógica, sinal) avaliados contra o histórico da roleta.

    ## Endpoints Principais:
    - `/api/estrategias/avaliar` - Avaliar um grafo em edição
    - `/api/estrategias/compilar` - Compilar e salvar uma estratégia
    - `/api/estrategias/{slug}/sinal` - Executar uma estratégia compilada
    - `/api/templates` - Catálogo oficial
    - `/health` - Status da aplicação
    """,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None,
)

# ========== CONFIGURAR CORS ==========
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== MIDDLEWARE CUSTOMIZADO ==========
app.add_middleware(LoggingMiddleware)
app.middleware("http")(error_handler_middleware)

# ========== INCLUIR ROTAS ==========
app.include_router(
    estrategias.router,
    prefix="/api/estrategias",
    tags=["Estratégias"],
)

app.include_router(
    templates.router,
    prefix="/api/templates",
    tags=["Templates"],
)

app.include_router(
    health.router,
    prefix="",
    tags=["Health"],
)


# ========== ROTA RAIZ ==========
@app.get("/", tags=["Root"])
async def root():
    """
    Endpoint raiz - Informações da API
    """
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "online",
        "timestamp": datetime.now().isoformat(),
        "environment": settings.ENVIRONMENT,
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "avaliar": "/api/estrategias/avaliar",
            "compilar": "/api/estrategias/compilar",
            "estrategias": "/api/estrategias",
            "sinal": "/api/estrategias/{slug}/sinal",
            "templates": "/api/templates",
        },
        "condicoes_disponiveis": subtipos_suportados(),
    }


# ========== TRATAMENTO DE EXCEÇÕES GLOBAIS ==========
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Tratador global de exceções
    """
    logger.error(f"❌ Erro não tratado: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": str(exc) if settings.ENVIRONMENT != "production" else "Erro interno do servidor",
            "timestamp": datetime.now().isoformat(),
        }
    )


# ========== MAIN (para execução direta) ==========
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
