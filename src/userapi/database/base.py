"""
Declarative base for all SQLAlchemy ORM models of the service.

The naming convention keeps constraint names stable between the ORM metadata
and the alembic revisions (e.g. the email constraint is `uq_users_email`).
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
