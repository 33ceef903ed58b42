"""Items API router: listing, editing, searching and commenting on lendable items."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.api.deps import get_current_user_id, get_db
from shareit.models.comment import Comment
from shareit.models.item import Item
from shareit.schemas.item import CommentCreate, CommentResponse, ItemCreate, ItemResponse, ItemUpdate
from shareit.services import item_service

router = APIRouter(prefix="/items", tags=["items"])


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="List a new item",
)
async def create_item(
    body: ItemCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Item:
    return await item_service.create_item(db, user_id, body.name, body.description, body.available)


@router.get("", response_model=list[ItemResponse], summary="List the acting user's items")
async def list_items(
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> list[ItemResponse]:
    """Each item carries its last finished and next upcoming approved booking."""
    details = await item_service.list_owner_items(db, user_id)
    return [ItemResponse.from_details(d) for d in details]


@router.get("/search", response_model=list[ItemResponse], summary="Search available items")
async def search_items(
    text: str | None = Query(None, description="Case-insensitive match on name or description"),
    from_: int = Query(0, alias="from", ge=0, description="Pagination offset"),
    size: int | None = Query(None, ge=1, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
) -> list[Item]:
    return await item_service.search_items(db, text, offset=from_, limit=size)


@router.get("/{item_id}", response_model=ItemResponse, summary="Get an item")
async def get_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> ItemResponse:
    """Booking details are only included when the acting user owns the item."""
    return ItemResponse.from_details(await item_service.get_item(db, item_id, user_id))


@router.patch("/{item_id}", response_model=ItemResponse, summary="Update an item")
async def update_item(
    item_id: int,
    body: ItemUpdate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Item:
    return await item_service.update_item(
        db,
        item_id,
        user_id,
        name=body.name,
        description=body.description,
        available=body.available,
    )


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an item")
async def delete_item(
    item_id: int,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Response:
    await item_service.delete_item(db, item_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{item_id}/comment", response_model=CommentResponse, summary="Comment on a borrowed item")
async def add_comment(
    item_id: int,
    body: CommentCreate,
    db: AsyncSession = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
) -> Comment:
    """Allowed once the acting user has an approved booking of the item that has ended."""
    return await item_service.add_comment(db, item_id, user_id, body.text)
