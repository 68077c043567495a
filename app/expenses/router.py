from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.users.auth import get_current_user
from app.users.models import User
from . import schemas, service


router = APIRouter()


@router.get("/", response_model=List[schemas.ExpenseOut])
def list_expenses(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return service.list_expenses(db, current_user)


@router.post(
    "/",
    response_model=schemas.ExpenseOut,
    status_code=status.HTTP_201_CREATED
)
def create_expense(
    expense: schemas.ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return service.create_expense(db, current_user, expense)


@router.put("/{expense_id}", response_model=schemas.ExpenseOut)
def update_expense(
    expense_id: int,
    expense: schemas.ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return service.update_expense(db, current_user, expense_id, expense)


@router.delete("/{expense_id}", response_model=schemas.ExpenseDeleted)
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return service.delete_expense(db, current_user, expense_id)
