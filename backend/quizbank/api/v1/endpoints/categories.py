"""Category endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from quizbank.core.dependencies import get_current_user, get_db
from quizbank.models.content import Category
from quizbank.models.user import User
from quizbank.schemas.content import CategoryCreate, CategoryOut, CategoryUpdate
from quizbank.services import catalog

router = APIRouter()


@router.get("", response_model=list[CategoryOut])
async def list_categories(db: Annotated[Session, Depends(get_db)]):
    return catalog.list_categories(db)


@router.get("/{category_id}", response_model=CategoryOut)
async def get_category(category_id: UUID, db: Annotated[Session, Depends(get_db)]):
    return catalog.get_or_404(db, Category, category_id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
async def create_category(
    params: CategoryCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.create_category(db, params.model_dump())


@router.patch("/{category_id}", response_model=CategoryOut)
async def update_category(
    category_id: UUID,
    params: CategoryUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.update_category(db, category_id, params.model_dump(exclude_unset=True))


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    catalog.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
