"""
Gerenciador de conexão com MongoDB
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Gerencia conexão com MongoDB
    Collection: strategies (estratégias compiladas)
    """

    def __init__(self, settings):
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """Conectar ao MongoDB"""
        try:
            self.client = AsyncIOMotorClient(
                self.settings.mongodb_url,
                maxPoolSize=self.settings.MONGODB_MAX_POOL_SIZE,
                minPoolSize=self.settings.MONGODB_MIN_POOL_SIZE,
            )
            self.db = self.client[self.settings.MONGODB_DATABASE]
            logger.info(f"✅ Conectado ao MongoDB: {self.settings.MONGODB_DATABASE}")
        except Exception as e:
            logger.error(f"❌ Erro ao conectar MongoDB: {e}")
            raise

    async def disconnect(self):
        """Desconectar do MongoDB"""
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB desconectado")

    async def ping(self) -> bool:
        """Verificar conexão"""
        try:
            if self.client is None:
                return False
            await self.client.admin.command('ping')
            return True
        except Exception as e:
            logger.error(f"Erro no ping MongoDB: {e}")
            return False

    def get_database(self) -> AsyncIOMotorDatabase:
        """Retorna instância do database"""
        if self.db is None:
            raise RuntimeError("Database não está conectado")
        return self.db

    def get_collection(self) -> AsyncIOMotorCollection:
        """Collection das estratégias"""
        return self.get_database()[self.settings.MONGODB_COLLECTION]

    async def create_indexes(self):
        """Criar índices necessários"""
        try:
            collection = self.get_collection()

            # listagem ordenada e filtros do catálogo
            await collection.create_index([("slug", 1)], name="idx_slug", unique=True)
            await collection.create_index([("metadata.category", 1)], name="idx_category")

            logger.info("✅ Índices MongoDB criados/verificados")

        except Exception as e:
            logger.error(f"❌ Erro ao criar índices: {e}")
            raise
