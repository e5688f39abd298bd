"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from solar_quotes.domain.models import QuotePage, QuoteRequest, QuoteView


class CamelModel(BaseModel):
    """Serialize with camelCase field names, accept either form on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateQuoteRequest(CamelModel):
    """Request body for POST /v1/quotes"""

    system_size_kw: float = Field(..., gt=0, description="Installed system size in kW")
    monthly_consumption_kwh: float = Field(..., gt=0, description="Average monthly consumption in kWh")
    down_payment: float = Field(..., ge=0, description="Up-front payment")
    currency: str = Field("USD", min_length=3, max_length=3, description="Currency label, not converted")

    def to_domain(self) -> QuoteRequest:
        return QuoteRequest(
            system_size_kw=self.system_size_kw,
            monthly_consumption_kwh=self.monthly_consumption_kwh,
            down_payment=self.down_payment,
            currency=self.currency,
        )


class PricingOfferSchema(CamelModel):
    """One loan term offer"""

    term_years: int
    apr: float
    principal_used: float
    monthly_payment: float


class AuthorSchema(CamelModel):
    """Compact quote owner reference"""

    id: str
    full_name: str
    email: str


class QuoteResponse(CamelModel):
    """Quote with the owner's denormalized profile fields"""

    id: str
    user_id: str
    system_size_kw: float
    monthly_consumption_kwh: float
    down_payment: float
    currency: str
    system_price: float
    principal_amount: float
    risk_band: str
    base_apr: float
    offers: List[PricingOfferSchema]
    full_name: str
    email: str
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: QuoteView) -> "QuoteResponse":
        return cls(
            id=view.id,
            user_id=view.user_id,
            system_size_kw=view.system_size_kw,
            monthly_consumption_kwh=view.monthly_consumption_kwh,
            down_payment=view.down_payment,
            currency=view.currency,
            system_price=view.system_price,
            principal_amount=view.principal_amount,
            risk_band=view.risk_band,
            base_apr=view.base_apr,
            offers=[
                PricingOfferSchema(
                    term_years=offer.term_years,
                    apr=offer.apr,
                    principal_used=offer.principal_used,
                    monthly_payment=offer.monthly_payment,
                )
                for offer in view.offers
            ],
            full_name=view.full_name,
            email=view.email,
            address=view.address,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )


class QuoteWithAuthorResponse(QuoteResponse):
    """Response for GET /v1/quotes/{quote_id}"""

    author: AuthorSchema

    @classmethod
    def from_view(cls, view: QuoteView) -> "QuoteWithAuthorResponse":
        base = QuoteResponse.from_view(view)
        return cls(
            **base.model_dump(),
            author=AuthorSchema(id=view.author.id, full_name=view.author.full_name, email=view.author.email),
        )


class QuoteListResponse(CamelModel):
    """Response for GET /v1/quotes"""

    quotes: List[QuoteResponse]
    total_count: int
    total_pages: int
    current_page: int

    @classmethod
    def from_page(cls, page: QuotePage) -> "QuoteListResponse":
        return cls(
            quotes=[QuoteResponse.from_view(view) for view in page.quotes],
            total_count=page.total_count,
            total_pages=page.total_pages,
            current_page=page.current_page,
        )
