from contextlib import contextmanager
import os
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///data/storefront.db")


def build_engine(database_url: str = DATABASE_URL, **kwargs):
    # Ensure sqlite file parent directory exists to avoid 'unable to open database file'
    if database_url.startswith("sqlite:///") and ":memory:" not in database_url:
        db_path = database_url.split("sqlite:///")[-1]
        Path(db_path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, future=True, **kwargs)


def make_session_factory(bind):
    """Return a ``get_session``-style context manager bound to ``bind``."""
    maker = sessionmaker(bind=bind, autoflush=False, expire_on_commit=False, future=True)

    @contextmanager
    def _session_scope():
        session = maker()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return _session_scope


engine = None
_default_factory = None


def get_session():
    global engine, _default_factory
    if _default_factory is None:
        engine = build_engine(DATABASE_URL)
        _default_factory = make_session_factory(engine)
    return _default_factory()
