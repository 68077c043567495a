from app.database import Base
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship



class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    categories = relationship(
        "Category",
        back_populates="owner"
    )
    expenses = relationship(
        "Expense",
        back_populates="owner"
    )
