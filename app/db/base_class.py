# /app/db/base_class.py

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base, declared_attr


def utcnow() -> datetime:
    """Timezone-aware 'now' used for every Python-side timestamp default."""
    return datetime.now(timezone.utc)


class _Base:
    # Table names default to the pluralised, lower-cased class name
    # (Course -> courses). Models override it where that reads badly.
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s"


Base = declarative_base(cls=_Base)
