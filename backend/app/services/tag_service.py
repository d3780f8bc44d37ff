"""
Company / keyword vocabulary - look up or create tags by name.
Inserts run in savepoints and retry on unique violations so concurrent uploads
naming the same tag never create duplicates or fail the outer transaction.
"""
from typing import Iterable, List, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.core.config import settings
from backend.app.core.logging_config import get_logger
from backend.app.models.company import Company
from backend.app.models.keyword import Keyword

logger = get_logger("services.tags")

TagModel = TypeVar("TagModel", Company, Keyword)


class TagConflictError(RuntimeError):
    """Tag could not be created or found after all retry attempts."""


def _lookup(db: Session, model: Type[TagModel], name: str, case_insensitive: bool):
    query = db.query(model)
    if case_insensitive:
        return query.filter(func.lower(model.name) == name.lower()).first()
    return query.filter(model.name == name).first()


def get_or_create_tag(
    db: Session,
    model: Type[TagModel],
    name: str,
    case_insensitive: bool = False,
    attempts: int | None = None,
) -> TagModel:
    max_attempts = attempts or settings.tag_upsert_attempts
    for attempt in range(1, max_attempts + 1):
        tag = _lookup(db, model, name, case_insensitive)
        if tag is not None:
            return tag
        try:
            with db.begin_nested():
                tag = model(name=name)
                db.add(tag)
                db.flush()
            return tag
        except IntegrityError:
            logger.info(
                "Tag insert lost a race table=%s name=%s attempt=%d/%d",
                model.__tablename__,
                name,
                attempt,
                max_attempts,
            )
    raise TagConflictError(f"Could not create {model.__tablename__} entry {name!r} after {max_attempts} attempts")


def _unique(tags: Iterable[TagModel]) -> List[TagModel]:
    seen = set()
    out = []
    for tag in tags:
        if tag.id in seen:
            continue
        seen.add(tag.id)
        out.append(tag)
    return out


def get_or_create_companies(db: Session, names: Iterable[str]) -> List[Company]:
    """Names must already be case-normalized; matching is exact."""
    return _unique(get_or_create_tag(db, Company, name) for name in names)


def get_or_create_keywords(db: Session, names: Iterable[str]) -> List[Keyword]:
    """Keywords keep their first spelling; matching ignores case."""
    return _unique(get_or_create_tag(db, Keyword, name, case_insensitive=True) for name in names)
