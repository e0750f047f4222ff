"""
Fixtures partagées : base SQLite en mémoire, isolée par test.
"""

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from infrastructure.database.init_db import init_db
from infrastructure.database.models import Base
from infrastructure.database.session import create_db_engine


@pytest.fixture()
def db_engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session_factory(db_engine):
    return sessionmaker(autoflush=False, bind=db_engine)


@pytest.fixture()
def db_session(db_session_factory):
    session = db_session_factory()
    yield session
    session.close()
