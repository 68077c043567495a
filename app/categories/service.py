from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from loguru import logger

from app.database import commit
from app.errors import DuplicateCategory, MissingField, NotFound
from app.expenses import models as expense_models
from app.users.models import User
from . import models, schemas


def get_owned_category(db: Session, caller: User, name: str):
    return (
        db.query(models.Category)
        .filter(
            models.Category.name == name,
            models.Category.owner_id == caller.id
        )
        .first()
    )


# ================= CREATE =================
def create_category(db: Session, caller: User, category: schemas.CategoryCreate):
    name = (category.name or "").strip()
    if not name:
        raise MissingField("Category name is required")

    if get_owned_category(db, caller, name):
        raise DuplicateCategory(f"Category '{name}' already exists")

    db_category = models.Category(name=name, owner_id=caller.id)

    try:
        db.add(db_category)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateCategory(f"Category '{name}' already exists") from exc

    db.refresh(db_category)
    logger.info(f"Category '{name}' created by user {caller.id}")
    return db_category


# ================= LIST =================
def list_categories(db: Session, caller: User):
    return (
        db.query(models.Category)
        .filter(models.Category.owner_id == caller.id)
        .order_by(models.Category.id)
        .all()
    )


# ================= DELETE =================
def delete_category(db: Session, caller: User, name: str):
    """
    Delete one of the caller's categories together with every expense the
    caller filed under it. Both go out in a single commit; other owners'
    expenses with the same category name are left alone.
    """
    db_category = get_owned_category(db, caller, name)

    if not db_category:
        raise NotFound("Category not found")

    db.delete(db_category)
    deleted_expenses = (
        db.query(expense_models.Expense)
        .filter(
            expense_models.Expense.category == name,
            expense_models.Expense.owner_id == caller.id
        )
        .delete(synchronize_session=False)
    )

    commit(db)

    logger.info(
        f"Category '{name}' deleted by user {caller.id} "
        f"with {deleted_expenses} expense(s)"
    )
    return {
        "message": "Category and associated expenses deleted",
        "deleted_expenses": deleted_expenses,
    }
