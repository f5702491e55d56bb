from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Any, Dict, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, inspect

ModelType = TypeVar('ModelType')


class IRepository(ABC, Generic[ModelType]):
    """Keyed-table interface every entity repository implements"""

    @abstractmethod
    async def get(self, id: Any) -> Optional[ModelType]:
        """Get entity by ID"""
        pass

    @abstractmethod
    async def fetch_all(self) -> List[ModelType]:
        """Get every row ordered by the display key"""
        pass

    @abstractmethod
    async def insert(self, *, obj_in: Dict[str, Any]) -> ModelType:
        """Create new entity; the store assigns the id"""
        pass

    @abstractmethod
    async def replace(self, *, id: Any, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """Replace every writable column of an existing entity"""
        pass

    @abstractmethod
    async def delete(self, *, id: Any) -> bool:
        """Delete entity"""
        pass


class BaseRepository(IRepository[ModelType], Generic[ModelType]):
    """Base repository implementation with common CRUD operations"""

    # Columns a full replace never touches
    protected_columns: Sequence[str] = ("id", "created_at")

    def __init__(self, model: type[ModelType], session: AsyncSession, order_by: Sequence[Any] = ()):
        self.model = model
        self.session = session
        self.order_by = tuple(order_by)

    async def get(self, id: Any) -> Optional[ModelType]:
        """Get entity by ID"""
        return await self.session.get(self.model, id)

    async def fetch_all(self) -> List[ModelType]:
        """Get every row ordered by the display key"""
        query = select(self.model)
        if self.order_by:
            query = query.order_by(*self.order_by)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def insert(self, *, obj_in: Dict[str, Any]) -> ModelType:
        """Create new entity"""
        data = {k: v for k, v in obj_in.items() if k != "id" or v is not None}
        db_obj = self.model(**data)
        self.session.add(db_obj)
        await self.session.flush()
        return db_obj

    async def replace(self, *, id: Any, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """Full replace by id: writable columns absent from obj_in are cleared"""
        db_obj = await self.get(id)
        if not db_obj:
            return None

        for column in self.writable_columns():
            setattr(db_obj, column, obj_in.get(column))

        await self.session.flush()
        return db_obj

    async def delete(self, *, id: Any) -> bool:
        """Delete entity"""
        db_obj = await self.get(id)
        if not db_obj:
            return False

        await self.session.delete(db_obj)
        await self.session.flush()
        return True

    def writable_columns(self) -> List[str]:
        return [
            attr.key for attr in inspect(self.model).column_attrs
            if attr.key not in self.protected_columns
        ]

    def to_row(self, db_obj: ModelType) -> Dict[str, Any]:
        """Plain snake_case dict of the entity's columns"""
        return {attr.key: getattr(db_obj, attr.key) for attr in inspect(self.model).column_attrs}


class IService(ABC):
    """Base service interface"""
    pass


class BaseService(IService):
    """Base service implementation with common dependencies"""

    def __init__(self, session: AsyncSession):
        self.session = session
