"""SQLAlchemy ORM models for users and quotes"""

from datetime import datetime, timezone
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import declarative_base, relationship
from solar_quotes.utils.ids import generate_epoch_id

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Account provisioned by the identity provider"""

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_epoch_id)
    full_name = Column(String(255), nullable=False)
    role_name = Column(String(255), nullable=False, default="USER")
    email = Column(String(255), nullable=False, unique=True)
    address = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    quotes = relationship("Quote", back_populates="author", cascade="all, delete-orphan", passive_deletes=True)


class Quote(Base):
    """Priced financing proposal, immutable once written"""

    __tablename__ = "quotes"

    id = Column(String(32), primary_key=True, default=generate_epoch_id)
    user_id = Column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )
    system_size_kw = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    monthly_consumption_kwh = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    down_payment = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    system_price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    principal_amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    risk_band = Column(String(1), nullable=False)
    base_apr = Column(Numeric(5, 2, asdecimal=False), nullable=False)
    offers = Column(JSON, nullable=False)
    # Client-side default: sub-second precision on every backend
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    author = relationship("User", back_populates="quotes")
