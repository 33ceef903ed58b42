"""Users API router: the user directory."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.api.deps import get_db
from shareit.models.user import User
from shareit.schemas.user import UserCreate, UserResponse, UserUpdate
from shareit.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
async def create_user(body: UserCreate, db: AsyncSession = Depends(get_db)) -> User:
    """Raises 409 if the email is already registered."""
    return await user_service.create_user(db, body.name, body.email)


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(db: AsyncSession = Depends(get_db)) -> list[User]:
    return await user_service.list_users(db)


@router.get("/{user_id}", response_model=UserResponse, summary="Get a user")
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)) -> User:
    return await user_service.get_user(db, user_id)


@router.patch("/{user_id}", response_model=UserResponse, summary="Update a user")
async def update_user(user_id: int, body: UserUpdate, db: AsyncSession = Depends(get_db)) -> User:
    return await user_service.update_user(db, user_id, name=body.name, email=body.email)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a user")
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db)) -> Response:
    await user_service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
