from sqlalchemy.orm import Session
from loguru import logger

from app.categories.service import get_owned_category
from app.database import commit
from app.errors import CategoryNotFound, Forbidden, MissingField, NotFound
from app.users.models import User
from . import models, schemas


# =========================
# Helpers
# =========================
def ensure_category_exists(db: Session, caller: User, name: str):
    if not get_owned_category(db, caller, name):
        raise CategoryNotFound(f"Category '{name}' does not exist")


def get_owned_expense(db: Session, caller: User, expense_id: int) -> models.Expense:
    expense = db.get(models.Expense, expense_id)

    if not expense:
        raise NotFound("Expense not found")

    if expense.owner_id != caller.id:
        logger.warning(
            f"User {caller.id} tried to access expense {expense_id} "
            f"owned by user {expense.owner_id}"
        )
        raise Forbidden("Not allowed to modify this expense")

    return expense


# =========================
# List Expenses
# =========================
def list_expenses(db: Session, caller: User):
    return (
        db.query(models.Expense)
        .filter(models.Expense.owner_id == caller.id)
        .order_by(models.Expense.id)
        .all()
    )


# =========================
# Create Expense
# =========================
def create_expense(db: Session, caller: User, expense: schemas.ExpenseCreate):
    category = (expense.category or "").strip()
    if expense.amount is None or not category:
        raise MissingField("Amount and category are required")

    ensure_category_exists(db, caller, category)

    new_expense = models.Expense(
        amount=expense.amount,
        category=category,
        note=expense.note,
        owner_id=caller.id,
    )

    db.add(new_expense)
    commit(db)
    db.refresh(new_expense)

    logger.info(f"Expense {new_expense.id} created by user {caller.id}")
    return new_expense


# =========================
# Update Expense
# =========================
def update_expense(
    db: Session,
    caller: User,
    expense_id: int,
    expense_data: schemas.ExpenseUpdate
):
    expense = get_owned_expense(db, caller, expense_id)

    data = expense_data.model_dump(exclude_unset=True)

    # Explicit nulls would blank required columns
    if "amount" in data and data["amount"] is None:
        raise MissingField("Amount cannot be empty")

    if "category" in data:
        data["category"] = (data["category"] or "").strip()
        if not data["category"]:
            raise MissingField("Category cannot be empty")
        ensure_category_exists(db, caller, data["category"])

    for field, value in data.items():
        setattr(expense, field, value)

    commit(db)
    db.refresh(expense)

    return expense


# =========================
# Delete Expense
# =========================
def delete_expense(db: Session, caller: User, expense_id: int):
    expense = get_owned_expense(db, caller, expense_id)

    db.delete(expense)
    commit(db)

    logger.info(f"Expense {expense_id} deleted by user {caller.id}")
    return {
        "id": expense_id,
        "detail": "Expense successfully deleted"
    }
