"""Base class and column helpers for domain entities"""

import uuid
from sqlalchemy import BigInteger, Column, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns
BigIntId = BigInteger().with_variant(Integer, "sqlite")


def generate_uuid() -> str:
    return str(uuid.uuid4())


def id_column() -> Column:
    """Auto-increment primary key column (one instance per table)"""
    return Column(BigIntId, primary_key=True, autoincrement=True)


class BaseModel(SQLModel):
    """Shared base for all table models"""
    pass
