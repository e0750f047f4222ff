"""
Initialisation de la base de données
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine

from infrastructure.database.models import Base

logger = logging.getLogger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """Crée les tables si elles n'existent pas"""
    if bind is None:
        from infrastructure.database.session import engine as bind

    Base.metadata.create_all(bind=bind)
    logger.info("✅ Tables de base de données créées")
