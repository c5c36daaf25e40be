"""
Configurações centralizadas da aplicação

Somente o que é do serviço (host, banco, logs) vem do ambiente.
Constantes que mudam o resultado das estratégias ficam em utils/constants.py.
"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """
    Configurações da aplicação usando Pydantic Settings
    """

    # ===== APLICAÇÃO =====
    APP_NAME: str = "Strategy Builder Engine"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # development, staging, production
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # ===== ARMAZENAMENTO =====
    STORAGE_BACKEND: str = "memory"  # memory, mongo

    # ===== MONGODB =====
    MONGODB_HOST: str = "localhost"
    MONGODB_PORT: int = 27017
    MONGODB_USER: str = ""
    MONGODB_PASSWORD: str = ""
    MONGODB_DATABASE: str = "roleta_db"
    MONGODB_COLLECTION: str = "strategies"
    MONGODB_MAX_POOL_SIZE: int = 10
    MONGODB_MIN_POOL_SIZE: int = 1

    # ===== CORS =====
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
    ]

    # ===== LIMITES =====
    MAX_HISTORY_SIZE: int = 500

    # ===== LOGGING =====
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "api.log"

    @property
    def mongodb_url(self) -> str:
        """Gera URL de conexão MongoDB"""
        if self.MONGODB_USER and self.MONGODB_PASSWORD:
            return (
                f"mongodb+srv://{self.MONGODB_USER}:{self.MONGODB_PASSWORD}"
                f"@{self.MONGODB_HOST}/?retryWrites=true&w=majority"
            )
        return f"mongodb://{self.MONGODB_HOST}:{self.MONGODB_PORT}/{self.MONGODB_DATABASE}"

    @property
    def usa_mongo(self) -> bool:
        return self.STORAGE_BACKEND.strip().lower() == "mongo"

    class Config:
        env_file = ".env"
        case_sensitive = True
