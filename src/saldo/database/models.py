"""SQLAlchemy models for the saldo record store.

Date configurations are stored in their raw form (date, month-only flag,
indefinite flag) and normalized by the mappers when read back.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    label = Column(String, nullable=False)
    kind = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "label", name="uq_user_label"),)


class Record(Base):
    """Financial record model.

    ``account_id`` is a plain reference, not a foreign key: deleting an
    account leaves its records in place.
    """

    __tablename__ = "records"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    kind = Column(String, nullable=False)
    flow = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=True)
    account_id = Column(Integer, nullable=True, index=True)

    is_recurring = Column(Boolean, default=False, nullable=False)
    start_date = Column(Date, nullable=True)
    start_month_only = Column(Boolean, default=False, nullable=False)
    start_indefinite = Column(Boolean, default=False, nullable=False)
    end_date = Column(Date, nullable=True)
    end_month_only = Column(Boolean, default=False, nullable=False)
    end_indefinite = Column(Boolean, default=True, nullable=False)

    execution_date = Column(Date, nullable=True)
    execution_month_only = Column(Boolean, default=False, nullable=False)

    probability = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
