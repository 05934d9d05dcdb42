from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from store_api.database.base import Base


class Customer(Base):
    """
    SQLAlchemy model for Customer.

    The email column carries the only uniqueness rule of the schema. Emails are
    stored trimmed and lower-cased, so the constraint is effectively case-insensitive.
    """
    __tablename__ = "clientes"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        "nome",
        String,
        nullable=False
    )

    # Email address (must be unique and non-null)
    email: Mapped[str] = mapped_column(
        "email",
        String,
        unique=True,
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        "data_criacao",
        DateTime,
        server_default=func.current_timestamp()
    )

    def __repr__(self) -> str:
        # Helpful for debugging/logging
        return f"<Customer(id={self.id!r}, name={self.name!r}, email={self.email!r})>"
