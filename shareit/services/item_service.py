"""Item service: the catalog of lendable items.

Owners see the surrounding approved bookings (last finished, next upcoming)
when they look at their own items; everybody else sees the item and its
comments only. A comment can only be left by someone whose approved booking
of the item has already ended.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import ErrorReason, ShareItError
from shareit.models.booking import Booking
from shareit.models.comment import Comment
from shareit.models.item import Item
from shareit.repositories import BookingRepository, CommentRepository, ItemRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class ItemDetails:
    item: Item
    last_booking: Booking | None = None
    next_booking: Booking | None = None
    comments: list[Comment] = field(default_factory=list)


async def _get_owned_item(items: ItemRepository, item_id: int, user_id: int) -> Item:
    item = await items.get(item_id)
    if item is None:
        raise ShareItError.not_found(ErrorReason.ITEM, f"Item {item_id} not found")
    if item.owner_id != user_id:
        raise ShareItError.forbidden(ErrorReason.NOT_OWNER, "User is not the owner of the item")
    return item


async def create_item(
    db: AsyncSession,
    owner_id: int,
    name: str,
    description: str,
    available: bool,
) -> Item:
    if not await UserRepository(db).exists(owner_id):
        raise ShareItError.not_found(ErrorReason.USER, f"User {owner_id} not found")

    item = await ItemRepository(db).add(
        Item(name=name, description=description, available=available, owner_id=owner_id)
    )
    logger.info("User %s listed item %s", owner_id, item.id)
    return item


async def get_item(db: AsyncSession, item_id: int, user_id: int, now: datetime | None = None) -> ItemDetails:
    item = await ItemRepository(db).get(item_id)
    if item is None:
        raise ShareItError.not_found(ErrorReason.ITEM, f"Item {item_id} not found")

    comments = (await CommentRepository(db).find_by_items([item.id])).get(item.id, [])
    if item.owner_id != user_id:
        return ItemDetails(item, comments=comments)

    now = now or datetime.now()
    bookings = BookingRepository(db)
    last = await bookings.find_last_approved([item.id], now)
    upcoming = await bookings.find_next_approved([item.id], now)
    return ItemDetails(item, last.get(item.id), upcoming.get(item.id), comments)


async def list_owner_items(db: AsyncSession, owner_id: int, now: datetime | None = None) -> list[ItemDetails]:
    if not await UserRepository(db).exists(owner_id):
        raise ShareItError.not_found(ErrorReason.USER, f"User {owner_id} not found")

    items = await ItemRepository(db).find_by_owner(owner_id)
    if not items:
        return []

    now = now or datetime.now()
    item_ids = [item.id for item in items]
    bookings = BookingRepository(db)
    last = await bookings.find_last_approved(item_ids, now)
    upcoming = await bookings.find_next_approved(item_ids, now)
    comments = await CommentRepository(db).find_by_items(item_ids)
    return [
        ItemDetails(item, last.get(item.id), upcoming.get(item.id), comments.get(item.id, []))
        for item in items
    ]


async def search_items(db: AsyncSession, text: str | None, offset: int = 0, limit: int | None = None) -> list[Item]:
    if not text or not text.strip():
        return []
    return await ItemRepository(db).search_available(text, offset=offset, limit=limit)


async def update_item(
    db: AsyncSession,
    item_id: int,
    user_id: int,
    name: str | None = None,
    description: str | None = None,
    available: bool | None = None,
) -> Item:
    """Partially update an item. Only its owner may do so."""
    items = ItemRepository(db)
    item = await _get_owned_item(items, item_id, user_id)

    if name and name.strip():
        item.name = name
    if description and description.strip():
        item.description = description
    if available is not None:
        item.available = available

    return await items.save(item)


async def delete_item(db: AsyncSession, item_id: int, user_id: int) -> None:
    items = ItemRepository(db)
    item = await _get_owned_item(items, item_id, user_id)
    await items.delete(item)
    logger.info("User %s removed item %s", user_id, item_id)


async def add_comment(
    db: AsyncSession,
    item_id: int,
    user_id: int,
    text: str,
    now: datetime | None = None,
) -> Comment:
    author = await UserRepository(db).get(user_id)
    if author is None:
        raise ShareItError.not_found(ErrorReason.USER, f"User {user_id} not found")
    item = await ItemRepository(db).get(item_id)
    if item is None:
        raise ShareItError.not_found(ErrorReason.ITEM, f"Item {item_id} not found")

    now = now or datetime.now()
    if not await BookingRepository(db).has_finished_approved(user_id, item_id, now):
        raise ShareItError.invalid(
            ErrorReason.NOT_BORROWED, "Only users who have finished an approved booking of the item may comment"
        )

    comment = await CommentRepository(db).add(Comment(text=text, item_id=item.id, author=author, created=now))
    logger.info("User %s commented on item %s", user_id, item_id)
    return comment
