from typing import Any, List, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import StoreUnavailable
from app.core.logging import get_logger
from app.domains.content.pagination import Seek

logger = get_logger(__name__)


class PagedRepository:
    """
    Time-ordered table access shared by content and comments.

    Subclasses set ``model`` and implement ``_conditions`` (criteria to
    WHERE clauses) and ``_to_domain``.
    """

    model = None

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(
        self,
        criteria: Any,
        descending: bool = True,
        skip: int = 0,
        limit: Optional[int] = None,
        seek: Optional[Seek] = None
    ) -> List[Any]:
        """Rows matching ``criteria`` in (created_at, id) order, past ``seek`` if given"""
        query = self._select().where(*self._conditions(criteria))
        if seek is not None:
            query = query.where(self._past(seek))

        query = self._ordered(query, descending)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        result = await self._run(query)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def count(self, criteria: Any) -> int:
        result = await self._run(
            select(func.count(self.model.id)).where(*self._conditions(criteria))
        )
        return result.scalar_one()

    def _select(self):
        # Reads always reflect the row, not a stale object from the identity map
        return select(self.model).execution_options(populate_existing=True)

    def _ordered(self, query, descending: bool):
        if descending:
            return query.order_by(self.model.created_at.desc(), self.model.id.desc())
        return query.order_by(self.model.created_at.asc(), self.model.id.asc())

    def _past(self, seek: Seek):
        """Strict compound inequality on (created_at, id)"""
        created_at, row_id = self.model.created_at, self.model.id
        if seek.descending:
            return or_(
                created_at < seek.created_at,
                and_(created_at == seek.created_at, row_id < seek.id)
            )
        return or_(
            created_at > seek.created_at,
            and_(created_at == seek.created_at, row_id > seek.id)
        )

    async def _run(self, statement):
        """Execute a statement; I/O failures become StoreUnavailable"""
        try:
            return await self.session.execute(statement)
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Store query failed", table=self.model.__tablename__, error=str(exc))
            raise StoreUnavailable("Content store is unavailable") from exc

    def _conditions(self, criteria: Any) -> list:
        raise NotImplementedError

    def _to_domain(self, row: Any) -> Any:
        raise NotImplementedError
