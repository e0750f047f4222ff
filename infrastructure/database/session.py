"""
Configuration de la session de base de données SQLAlchemy
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from config import Config

config = Config()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite n'applique les clés étrangères (et ON DELETE CASCADE) que sur demande"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(
    database_url: str,
    statement_timeout_ms: int = 5000,
    pool_timeout: int = 10,
    **kwargs
) -> Engine:
    """Crée le moteur avec un délai maximal par requête"""
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": max(statement_timeout_ms / 1000, 1)}
        engine = create_engine(database_url, connect_args=connect_args, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    connect_args = {}
    if database_url.startswith("postgresql"):
        connect_args["options"] = f"-c statement_timeout={statement_timeout_ms}"

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_timeout=pool_timeout,
        connect_args=connect_args,
        **kwargs
    )


# Créer le moteur de base de données
engine = create_db_engine(
    config.database_url,
    statement_timeout_ms=config.db_statement_timeout_ms,
    pool_timeout=config.db_pool_timeout
)

# Créer la session factory
SessionLocal = sessionmaker(autoflush=False, bind=engine)

