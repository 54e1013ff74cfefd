"""SQLAlchemy models for ledgerdesk database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    LargeBinary,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(12, 2)


class IncomeMethod(Base):
    """Income method catalog model."""

    __tablename__ = "income_methods"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=999, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class ExpenseCategory(Base):
    """Expense category catalog model."""

    __tablename__ = "expense_categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class ExpenseType(Base):
    """Expense payment type catalog model."""

    __tablename__ = "expense_types"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Account(Base):
    """Account catalog model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="Bank")
    currency = Column(String, nullable=False, default="EUR")
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class IncomeEntry(Base):
    """Income entry header model."""

    __tablename__ = "income_entries"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    notes = Column(String, nullable=False, default="")
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    lines = relationship(
        "IncomeEntryLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="IncomeEntryLine.id",
    )


class IncomeEntryLine(Base):
    """One method/amount line of an income entry."""

    __tablename__ = "income_entry_lines"

    id = Column(Integer, primary_key=True)
    entry_id = Column(
        Integer, ForeignKey("income_entries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    method_id = Column(Integer, ForeignKey("income_methods.id"), nullable=False)
    amount = Column(MONEY, nullable=False)

    # Relationships
    entry = relationship("IncomeEntry", back_populates="lines")


class ExpenseEntry(Base):
    """Expense entry model."""

    __tablename__ = "expense_entries"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    vendor = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False)
    payment_type_id = Column(Integer, ForeignKey("expense_types.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("expense_categories.id"), nullable=False)
    cheque_no = Column(String, nullable=True)
    reason = Column(String, nullable=True)
    attachment = Column(LargeBinary, nullable=True)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class AccountSnapshot(Base):
    """Monthly account snapshot header model."""

    __tablename__ = "account_snapshots"

    id = Column(Integer, primary_key=True)
    month = Column(Date, nullable=False)
    is_locked = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # One snapshot per month
    __table_args__ = (UniqueConstraint("month", name="uq_snapshot_month"),)

    # Relationships
    balances = relationship(
        "SnapshotBalance",
        back_populates="snapshot",
        cascade="all, delete-orphan",
        order_by="SnapshotBalance.id",
    )


class SnapshotBalance(Base):
    """Balance of one account inside a snapshot."""

    __tablename__ = "snapshot_balances"

    id = Column(Integer, primary_key=True)
    snapshot_id = Column(
        Integer, ForeignKey("account_snapshots.id", ondelete="CASCADE"), nullable=False, index=True
    )
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    balance = Column(MONEY, nullable=False)

    __table_args__ = (
        UniqueConstraint("snapshot_id", "account_id", name="uq_snapshot_account"),
    )

    # Relationships
    snapshot = relationship("AccountSnapshot", back_populates="balances")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
