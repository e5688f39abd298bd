"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Role(str, Enum):
    """Role names issued by the identity provider"""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Principal:
    """Authenticated caller attached to every request"""

    user_id: str
    role_name: Optional[str] = None


@dataclass(frozen=True)
class PricingOffer:
    """One loan term's figures against a quote's principal"""

    term_years: int
    apr: float
    principal_used: float
    monthly_payment: float


@dataclass(frozen=True)
class QuotePricing:
    """Everything the pricing engine derives from the quote inputs"""

    system_price: float
    principal_amount: float
    risk_band: str
    base_apr: float
    offers: List[PricingOffer]


@dataclass
class QuoteRequest:
    """Validated inputs for a new quote"""

    system_size_kw: float
    monthly_consumption_kwh: float
    down_payment: float
    currency: str = "USD"


@dataclass
class Author:
    """Compact owner reference embedded in single-quote views"""

    id: str
    full_name: str
    email: str


@dataclass
class QuoteView:
    """Quote fields merged with the owner's denormalized profile"""

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
    offers: List[PricingOffer]
    full_name: str
    email: str
    address: Optional[str]
    created_at: datetime
    updated_at: datetime
    author: Optional[Author] = None


@dataclass
class QuotePage:
    """One page of quotes plus pagination totals"""

    quotes: List[QuoteView] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    current_page: int = 1
