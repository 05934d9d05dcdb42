from sqlalchemy import Integer, String, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from store_api.database.base import Base


class Product(Base):
    """
    SQLAlchemy model for Product.

    Attribute names are English; the underlying columns keep the table's
    Portuguese names (nome, preco, estoque, data_criacao).
    """
    __tablename__ = "produtos"
    # AUTOINCREMENT: ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    # Storage-assigned identifier, never written by callers
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

    # Rounded to 2 decimals before every write (see validators/product_validator.py)
    price: Mapped[float] = mapped_column(
        "preco",
        Float,
        nullable=False
    )

    stock: Mapped[int] = mapped_column(
        "estoque",
        Integer,
        nullable=False,
        default=0,
        server_default="0"
    )

    # Set once by the database on insert
    created_at: Mapped[datetime] = mapped_column(
        "data_criacao",
        DateTime,
        server_default=func.current_timestamp()
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id!r}, name={self.name!r}, price={self.price!r}, stock={self.stock!r})>"
