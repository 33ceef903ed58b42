"""Item catalog storage."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.models.item import Item


class ItemRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, item_id: int, *, for_update: bool = False) -> Item | None:
        """Fetch an item by id.

        With ``for_update=True`` the row is locked until the surrounding
        transaction ends, which serializes booking writes for the same item.
        """
        query = select(Item).where(Item.id == item_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def find_owned_ids(self, owner_id: int) -> list[int]:
        result = await self.db.execute(select(Item.id).where(Item.owner_id == owner_id).order_by(Item.id))
        return list(result.scalars().all())

    async def find_by_owner(self, owner_id: int) -> list[Item]:
        result = await self.db.execute(select(Item).where(Item.owner_id == owner_id).order_by(Item.id))
        return list(result.scalars().all())

    async def search_available(self, text: str, offset: int = 0, limit: int | None = None) -> list[Item]:
        """Available items whose name or description contains ``text`` (case-insensitive).

        ``%`` and ``_`` in ``text`` match literally.
        """
        needle = text.lower()
        query = (
            select(Item)
            .where(
                Item.available.is_(True),
                or_(
                    func.lower(Item.name).contains(needle, autoescape=True),
                    func.lower(Item.description).contains(needle, autoescape=True),
                ),
            )
            .order_by(Item.id)
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add(self, item: Item) -> Item:
        self.db.add(item)
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def save(self, item: Item) -> Item:
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def delete(self, item: Item) -> None:
        await self.db.delete(item)
        await self.db.flush()
