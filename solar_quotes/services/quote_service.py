"""Quote access service - creation and owner/role-scoped retrieval of quotes"""

import logging
import math
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from solar_quotes.domain.exceptions import InvalidInputError, OwnerNotFoundError, StoreError
from solar_quotes.domain.models import Author, PricingOffer, QuotePage, QuoteRequest, QuoteView, Role
from solar_quotes.domain.pricing import calculate_quote_pricing
from solar_quotes.infrastructure.database.models import Quote, User
from solar_quotes.infrastructure.database.repositories import QuoteRepository, UserRepository
from solar_quotes.infrastructure.observability.metrics import (
    quote_lookup_counter,
    record_quote_created,
    store_failures_counter,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


def calculate_total_pages(total_count: int, limit: int) -> int:
    """ceil(total_count / limit); zero when there is nothing to page through"""
    return math.ceil(total_count / limit)


def validate_pagination(page: int, limit: int) -> None:
    """Reject page < 1 and limit outside [1, MAX_PAGE_SIZE]"""
    if page < 1:
        raise InvalidInputError("Page must be greater than 0")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise InvalidInputError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")


def _offers_from_row(offers: List[dict]) -> List[PricingOffer]:
    return [PricingOffer(**offer) for offer in offers]


def build_quote_view(quote: Quote, owner: User, include_author: bool = False) -> QuoteView:
    """Merge quote fields with the owner's denormalized profile"""
    return QuoteView(
        id=quote.id,
        user_id=quote.user_id,
        system_size_kw=quote.system_size_kw,
        monthly_consumption_kwh=quote.monthly_consumption_kwh,
        down_payment=quote.down_payment,
        currency=quote.currency,
        system_price=quote.system_price,
        principal_amount=quote.principal_amount,
        risk_band=quote.risk_band,
        base_apr=quote.base_apr,
        offers=_offers_from_row(quote.offers),
        full_name=owner.full_name,
        email=owner.email,
        address=owner.address,
        created_at=quote.created_at,
        updated_at=quote.updated_at,
        author=Author(id=owner.id, full_name=owner.full_name, email=owner.email) if include_author else None,
    )


class QuoteService:
    """
    Creates quotes and serves them under per-caller visibility rules.

    Visibility:
    - get_quote_by_id: owner only, regardless of role
    - get_all_quotes: ADMIN sees every owner's quotes, others only their own
    """

    def __init__(self, db: Session):
        self.db = db
        self.quotes = QuoteRepository(db)
        self.users = UserRepository(db)

    def create_quote(self, request: QuoteRequest, owner_user_id: str) -> QuoteView:
        """
        Price and persist a quote, then build its view from the owner's profile.

        Two phases with no transaction spanning them:
        1. write and commit the quote row
        2. read the owner profile

        If the owner vanished in between, OwnerNotFoundError is raised and the
        committed row from phase 1 remains.

        Raises:
            OwnerNotFoundError: owner missing at profile read
            StoreError: any persistence failure
        """
        pricing = calculate_quote_pricing(
            request.system_size_kw,
            request.monthly_consumption_kwh,
            request.down_payment,
            request.currency,
        )

        try:
            quote = self.quotes.create_quote(owner_user_id, request, pricing)
            quote_id = quote.id
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            store_failures_counter.labels(operation="create_quote").inc()
            logger.error(
                f"Error creating quote: {e}",
                extra={"operation": "create_quote", "user_id": owner_user_id},
            )
            raise StoreError("Failed to persist quote") from e

        try:
            owner = self.users.get_user_by_id(owner_user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            store_failures_counter.labels(operation="create_quote").inc()
            logger.error(
                f"Error loading quote owner: {e}",
                extra={"operation": "create_quote", "user_id": owner_user_id, "quote_id": quote_id},
            )
            raise StoreError("Failed to load quote owner") from e

        if owner is None:
            logger.error(
                "Quote owner not found after quote was persisted",
                extra={"operation": "create_quote", "user_id": owner_user_id, "quote_id": quote_id},
            )
            raise OwnerNotFoundError(owner_user_id, quote_id=quote_id)

        record_quote_created(pricing.risk_band, pricing.principal_amount)
        return build_quote_view(quote, owner)

    def get_quote_by_id(self, quote_id: str, requesting_user_id: str) -> Optional[QuoteView]:
        """
        Fetch a single quote owned by the caller.

        Returns None when the quote does not exist or belongs to someone else;
        the caller's role is not consulted.
        """
        try:
            quote = self.quotes.get_quote_for_owner(quote_id, requesting_user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            store_failures_counter.labels(operation="get_quote").inc()
            logger.error(
                f"Error fetching quote by ID: {e}",
                extra={"operation": "get_quote", "user_id": requesting_user_id, "quote_id": quote_id},
            )
            raise StoreError("Failed to fetch quote") from e

        if quote is None:
            quote_lookup_counter.labels(operation="get", scope="miss").inc()
            return None

        quote_lookup_counter.labels(operation="get", scope="own").inc()
        return build_quote_view(quote, quote.author, include_author=True)

    def get_all_quotes(
        self,
        requesting_user_id: str,
        page: int = 1,
        limit: int = 10,
        role_name: Optional[str] = None,
    ) -> QuotePage:
        """
        List quotes visible to the caller, newest first.

        Raises:
            InvalidInputError: page < 1 or limit outside [1, 100]
            StoreError: any persistence failure
        """
        validate_pagination(page, limit)

        see_all = role_name == Role.ADMIN.value
        owner_filter = None if see_all else requesting_user_id
        offset = (page - 1) * limit

        try:
            total_count, rows = self.quotes.find_and_count_quotes(owner_filter, limit, offset)
        except SQLAlchemyError as e:
            self.db.rollback()
            store_failures_counter.labels(operation="list_quotes").inc()
            logger.error(
                f"Error fetching all quotes: {e}",
                extra={"operation": "list_quotes", "user_id": requesting_user_id, "page": page, "limit": limit},
            )
            raise StoreError("Failed to fetch quotes") from e

        quote_lookup_counter.labels(operation="list", scope="all" if see_all else "own").inc()

        return QuotePage(
            quotes=[build_quote_view(quote, quote.author) for quote in rows],
            total_count=total_count,
            total_pages=calculate_total_pages(total_count, limit),
            current_page=page,
        )
