"""SQLAlchemy models for ledgerbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Company(Base):
    """Company model. Owns a chart of accounts and its transactions.

    Dependents are removed explicitly by SQLAlchemyDatabase.delete_company.
    """

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    tax_id = Column(String, nullable=True)
    fiscal_year_start = Column(Date, nullable=True)
    fiscal_year_end = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Account(Base):
    """Chart-of-accounts model. The code is unique per company."""

    __tablename__ = "accounts"

    company_id = Column(Integer, ForeignKey("companies.id"), primary_key=True)
    code = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    normal_balance = Column(String, nullable=False)
    beginning_balance = Column(Numeric(18, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    company = relationship("Company")


class Transaction(Base):
    """Ledger line model.

    ``account_code`` is not a foreign key: the ledger engine tolerates lines
    that point at a missing account, and services check references on write.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    entry_id = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    account_code = Column(String, nullable=False)
    type = Column(String, nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    company = relationship("Company")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
