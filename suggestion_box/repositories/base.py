"""기본 CRUD 레포지토리 — SQL 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for SQLAlchemy-backed repositories.
Holds the request-scoped session and provides generic Create, Read, Update,
Delete operations keyed by string identifiers.

Usage:
    class SuggestionRepository(BaseRepository[Suggestion]):
        def __init__(self, db: AsyncSession) -> None:
            super().__init__(Suggestion, db)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from suggestion_box.database import Base

# 제네릭 타입 변수: SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
        db: 요청 범위 비동기 세션 (Request-scoped async session)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession) -> None:
        self.model: type[ModelType] = model
        self.db: AsyncSession = db

    async def get_by_id(self, record_id: str) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Args:
            record_id: 조회할 레코드 ID (Identifier of the record)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_all(self, order_by: Any | None = None) -> Sequence[ModelType]:
        """모든 레코드를 조회합니다.

        Args:
            order_by: 정렬 기준 컬럼 표현식 (Column expression to order by)
        """
        query: Select = select(self.model)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def create(self, obj_data: dict[str, Any]) -> ModelType:
        """새 레코드를 생성합니다 (flush만 수행, 커밋은 호출자 책임).

        Create a new record. Flushes only; committing is up to the caller.
        """
        db_obj: ModelType = self.model(**obj_data)
        self.db.add(db_obj)
        await self.db.flush()
        await self.db.refresh(db_obj)
        return db_obj

    async def update(self, record_id: str, update_data: dict[str, Any]) -> ModelType | None:
        """기존 레코드를 업데이트합니다.

        Update an existing record. Only the given fields are touched.

        Returns:
            ModelType | None: 업데이트된 레코드 또는 None (Updated record or None)
        """
        db_obj: ModelType | None = await self.get_by_id(record_id)
        if db_obj is None:
            return None

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        await self.db.flush()
        await self.db.refresh(db_obj)
        return db_obj

    async def delete(self, record_id: str) -> bool:
        """레코드를 삭제합니다.

        Returns:
            bool: 삭제 성공 여부 (Whether a record was deleted)
        """
        db_obj: ModelType | None = await self.get_by_id(record_id)
        if db_obj is None:
            return False

        await self.db.delete(db_obj)
        await self.db.flush()
        return True

    async def delete_all(self) -> None:
        await self.db.execute(delete(self.model))
        await self.db.flush()
