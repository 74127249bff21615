from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_session
from app.models.auth_session import AuthSession
from app.services.category_service import CategoryService
from app.schemas.category_schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
)

router = APIRouter()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Create a new category for the authenticated user"""
    service = CategoryService(db)
    return service.create_category(data, session)


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)
):
    service = CategoryService(db)
    categories = service.get_user_categories(session)
    return CategoryListResponse(categories=categories, total=len(categories))


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    service = CategoryService(db)
    return service.get_category(category_id, session)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    service = CategoryService(db)
    return service.update_category(category_id, data, session)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Delete a category.

    - Referencing transactions keep existing with category set to null
    - The category is removed from every budget's category set
    """
    service = CategoryService(db)
    service.delete_category(category_id, session)
    return None
