from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base


Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC with microseconds; ``func.now()`` in SQLite stops at whole seconds."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
