"""Database engine and session factory"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from lifedash.infrastructure.database.models import Base


def make_session_factory(database_url: str, create_tables: bool = True) -> sessionmaker:
    """Engine + session factory for a database URL; SQLite connections may cross threads"""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)
    if create_tables:
        Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
