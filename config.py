"""
accounts-api/config.py
Configuration de l'application, lue depuis les variables d'environnement
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """
    Paramètres de l'application.

    Chaque paramètre peut être surchargé par la variable d'environnement
    du même nom en majuscules (ex: DATABASE_URL).
    """

    # Service
    app_name: str = "accounts-api"
    host: str = "0.0.0.0"
    port: int = 8000

    # Base de données
    database_url: str = "sqlite:///./accounts.db"
    db_statement_timeout_ms: int = 5000
    db_pool_timeout: int = 10

    # Logging
    log_level: str = "INFO"
    log_colored: bool = False
    log_file_enabled: bool = False
    log_file_path: str = "logs/accounts-api.log"

    # CORS (liste séparée par des virgules)
    cors_allowed_origins: str = "*"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        """Origines CORS sous forme de liste"""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]
