"""Data access layer for users and quotes"""

from dataclasses import asdict
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session, contains_eager, joinedload
from solar_quotes.infrastructure.database.models import User, Quote
from solar_quotes.domain.models import QuoteRequest, QuotePricing


class UserRepository:
    """Repository for users"""

    def __init__(self, db: Session):
        self.db = db

    def create_user(
        self,
        full_name: str,
        email: str,
        address: Optional[str] = None,
        role_name: str = "USER",
    ) -> User:
        """Persist a user record"""
        db_user = User(
            full_name=full_name,
            email=email,
            address=address,
            role_name=role_name,
        )
        self.db.add(db_user)
        self.db.flush()
        return db_user

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Fetch a user by primary key"""
        return self.db.get(User, user_id)


class QuoteRepository:
    """Repository for quotes"""

    def __init__(self, db: Session):
        self.db = db

    def create_quote(self, user_id: str, request: QuoteRequest, pricing: QuotePricing) -> Quote:
        """Persist a priced quote"""
        db_quote = Quote(
            user_id=user_id,
            system_size_kw=request.system_size_kw,
            monthly_consumption_kwh=request.monthly_consumption_kwh,
            down_payment=request.down_payment,
            currency=request.currency,
            system_price=pricing.system_price,
            principal_amount=pricing.principal_amount,
            risk_band=pricing.risk_band,
            base_apr=pricing.base_apr,
            offers=[asdict(offer) for offer in pricing.offers],
        )
        self.db.add(db_quote)
        self.db.flush()  # Get ID without committing
        return db_quote

    def get_quote_for_owner(self, quote_id: str, user_id: str) -> Optional[Quote]:
        """Fetch a quote with its author, only if owned by user_id"""
        return (
            self.db.query(Quote)
            .options(joinedload(Quote.author))
            .filter(Quote.id == quote_id, Quote.user_id == user_id)
            .first()
        )

    def find_and_count_quotes(
        self,
        user_id: Optional[str],
        limit: int,
        offset: int,
    ) -> Tuple[int, List[Quote]]:
        """
        Count matching quotes and fetch one page, newest first.

        user_id=None matches quotes of every owner. Count and page are two
        separate queries and may observe different snapshots.
        """
        query = self.db.query(Quote)
        if user_id is not None:
            query = query.filter(Quote.user_id == user_id)

        count = query.count()
        rows = (
            query.join(Quote.author)
            .options(contains_eager(Quote.author))
            .order_by(Quote.created_at.desc(), Quote.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )
        return count, rows
