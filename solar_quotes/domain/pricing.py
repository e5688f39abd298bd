"""Pricing engine - system price, risk band and amortized loan offers for solar quotes"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List
from solar_quotes.domain.models import PricingOffer, QuotePricing

PRICE_PER_KW = 1200  # currency units per kW, regardless of currency label
TERMS = [5, 10, 15]  # years
BASE_APR: Dict[str, float] = {
    "A": 6.9,
    "B": 8.9,
    "C": 11.9,
}


def calculate_system_price(system_size_kw: float) -> float:
    """Purchase price of the installation"""
    return system_size_kw * PRICE_PER_KW


def calculate_principal_amount(system_price: float, down_payment: float) -> float:
    """
    Amount financed after the down payment.

    Not floored at zero: a down payment above the system price yields a
    negative principal, which flows through to negative monthly payments.
    """
    return system_price - down_payment


def determine_risk_band(monthly_consumption_kwh: float, system_size_kw: float) -> str:
    """
    Coarse creditworthiness tier from consumption and system size.

    Precedence:
    - A: consumption >= 400 kWh AND system <= 6 kW
    - B: consumption >= 250 kWh (includes large high-consumption systems)
    - C: everything else
    """
    if monthly_consumption_kwh >= 400 and system_size_kw <= 6:
        return "A"
    elif monthly_consumption_kwh >= 250:
        return "B"
    else:
        return "C"


def get_base_apr(risk_band: str) -> float:
    """Annual percentage rate for a risk band"""
    return BASE_APR[risk_band]


def round_to_cents(amount: float) -> float:
    """Round half away from zero on the cent"""
    return float(Decimal(repr(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def calculate_monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """
    Level monthly payment that retires the principal over the term.

    M = P * r(1+r)^n / ((1+r)^n - 1)
    r = annual rate / 100 / 12, n = term_years * 12

    A zero rate falls back to straight-line P / n.
    """
    if principal == 0:
        return 0.0

    monthly_rate = annual_rate_percent / 100 / 12
    number_of_payments = term_years * 12

    if monthly_rate == 0:
        return round_to_cents(principal / number_of_payments)

    growth = (1 + monthly_rate) ** number_of_payments
    payment = principal * (monthly_rate * growth) / (growth - 1)

    return round_to_cents(payment)


def generate_offers(principal_amount: float, risk_band: str) -> List[PricingOffer]:
    """One offer per fixed term, all at the band's base APR"""
    base_apr = get_base_apr(risk_band)

    return [
        PricingOffer(
            term_years=term_years,
            apr=base_apr,
            principal_used=principal_amount,
            monthly_payment=calculate_monthly_payment(principal_amount, base_apr, term_years),
        )
        for term_years in TERMS
    ]


def calculate_quote_pricing(
    system_size_kw: float,
    monthly_consumption_kwh: float,
    down_payment: float,
    currency: str = "USD",
) -> QuotePricing:
    """
    Main entry point: derive the full pricing bundle for a quote.

    The currency is a label only and does not affect any figure.
    """
    system_price = calculate_system_price(system_size_kw)
    principal_amount = calculate_principal_amount(system_price, down_payment)
    risk_band = determine_risk_band(monthly_consumption_kwh, system_size_kw)
    base_apr = get_base_apr(risk_band)
    offers = generate_offers(principal_amount, risk_band)

    return QuotePricing(
        system_price=system_price,
        principal_amount=principal_amount,
        risk_band=risk_band,
        base_apr=base_apr,
        offers=offers,
    )
