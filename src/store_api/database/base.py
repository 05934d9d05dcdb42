"""
Declarative base shared by the `produtos` and `clientes` models.

Every model module imports `Base` from here, so `Base.metadata` ends up holding the
full schema that `Database.init_schema()` creates.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes.
# The unique constraint on clientes.email is therefore named "uq_clientes_email".
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}
