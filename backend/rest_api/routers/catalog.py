"""
Categories and ingredients. Shared by all tenants; reading is public.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Category, Ingredient
from shared.infrastructure.db import get_db, safe_commit
from shared.security.auth import current_user_context as current_user
from shared.utils.schemas import CategoryOutput, IngredientOutput, NameInput

router = APIRouter(tags=["catalog"])


@router.get("/api/categories", response_model=list[CategoryOutput])
def list_categories(db: Session = Depends(get_db)):
    return db.scalars(select(Category).order_by(Category.name_en)).all()


@router.post("/api/categories", response_model=CategoryOutput)
def create_category(
    body: NameInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
):
    category = Category(name_en=body.name_en, name_ar=body.name_ar)
    db.add(category)
    safe_commit(db)
    db.refresh(category)
    return category


@router.get("/api/ingredients", response_model=list[IngredientOutput])
def list_ingredients(db: Session = Depends(get_db)):
    return db.scalars(select(Ingredient).order_by(Ingredient.name_en)).all()


@router.post("/api/ingredients", response_model=IngredientOutput)
def create_ingredient(
    body: NameInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
):
    ingredient = Ingredient(name_en=body.name_en, name_ar=body.name_ar)
    db.add(ingredient)
    safe_commit(db)
    db.refresh(ingredient)
    return ingredient
