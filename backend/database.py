from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Query, Session, declarative_base, sessionmaker

from backend.core.config import DATABASE_URL


engine = create_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Commit everything written inside the block, or nothing.

    Any exception raised inside the block (including ``AppException`` from a
    failed pre-condition) rolls the session back before propagating.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def paginate(query: Query, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> tuple[list, int]:
    page = max(page, 0)
    size = min(max(size, 1), MAX_PAGE_SIZE)

    total = query.order_by(None).count()
    items = query.offset(page * size).limit(size).all()
    return items, total
