"""Base repository for rows addressed by a single primary key."""

from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from apiassist.db.base import Base

T = TypeVar("T", bound=Base)


class KeyedRepository(Generic[T]):
    """Async get/upsert/delete by primary key. Callers own the transaction."""

    model_class: type[T]
    key_field: str

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> T | None:
        return await self.session.get(self.model_class, key)

    async def upsert(self, key: str, **values: Any) -> T:
        """Create the row if missing, otherwise overwrite the given columns."""
        row = await self.get(key)
        if row is None:
            row = self.model_class(**{self.key_field: key}, **values)
            self.session.add(row)
        else:
            for name, value in values.items():
                setattr(row, name, value)
        await self.session.flush()
        return row

    async def delete(self, key: str) -> bool:
        row = await self.get(key)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True
