"""Item comment storage."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.models.comment import Comment


class CommentRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def add(self, comment: Comment) -> Comment:
        self.db.add(comment)
        await self.db.flush()
        return comment

    async def find_by_items(self, item_ids: Sequence[int]) -> dict[int, list[Comment]]:
        """Comments per item, oldest first. Items without comments are absent."""
        result = await self.db.execute(
            select(Comment).where(Comment.item_id.in_(item_ids)).order_by(Comment.created, Comment.id)
        )
        by_item: dict[int, list[Comment]] = {}
        for comment in result.scalars():
            by_item.setdefault(comment.item_id, []).append(comment)
        return by_item
