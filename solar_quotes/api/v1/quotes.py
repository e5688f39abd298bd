"""/v1/quotes - create, fetch and list financing quotes"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from solar_quotes.api.v1.schemas import (
    CreateQuoteRequest,
    QuoteListResponse,
    QuoteResponse,
    QuoteWithAuthorResponse,
)
from solar_quotes.api.dependencies import get_current_principal, get_quote_service, get_request_id
from solar_quotes.domain.exceptions import InvalidInputError, NotFoundError, StoreError
from solar_quotes.domain.models import Principal
from solar_quotes.infrastructure.observability.logging import log_quote_created
from solar_quotes.services.quote_service import QuoteService

router = APIRouter()


@router.post("/quotes", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
def create_quote(
    request_body: CreateQuoteRequest,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    quote_service: QuoteService = Depends(get_quote_service),
):
    """
    Price and store a new quote for the caller.

    Flow:
    1. Compute price, principal, risk band and the 5/10/15-year offers
    2. Persist the quote owned by the caller
    3. Load the caller's profile and return the merged view
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        view = quote_service.create_quote(request_body.to_domain(), principal.user_id)
    except NotFoundError as e:
        logging.warning(f"Quote owner not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="User not found")
    except StoreError as e:
        logging.error(f"Store error creating quote: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to create quote")

    duration_ms = (time.time() - start_time) * 1000
    log_quote_created(request_id, principal.user_id, view.id, view.risk_band, view.principal_amount, duration_ms)

    return QuoteResponse.from_view(view)


@router.get("/quotes", response_model=QuoteListResponse)
def list_quotes(
    request: Request,
    page: int = Query(1, description="1-indexed page number"),
    limit: int = Query(10, description="Quotes per page, 1-100"),
    principal: Principal = Depends(get_current_principal),
    quote_service: QuoteService = Depends(get_quote_service),
):
    """
    List quotes newest first.

    ADMIN callers see every user's quotes; everyone else sees their own.
    """
    request_id = get_request_id(request)

    try:
        result = quote_service.get_all_quotes(principal.user_id, page, limit, principal.role_name)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        logging.error(f"Store error listing quotes: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to fetch quotes")

    return QuoteListResponse.from_page(result)


@router.get("/quotes/{quote_id}", response_model=QuoteWithAuthorResponse)
def get_quote(
    quote_id: str,
    request: Request,
    principal: Principal = Depends(get_current_principal),
    quote_service: QuoteService = Depends(get_quote_service),
):
    """
    Fetch one of the caller's own quotes with its author.

    Quotes owned by someone else are reported as not found, for ADMIN callers too.
    """
    request_id = get_request_id(request)

    try:
        view = quote_service.get_quote_by_id(quote_id, principal.user_id)
    except StoreError as e:
        logging.error(f"Store error fetching quote: {e}", extra={"request_id": request_id, "quote_id": quote_id})
        raise HTTPException(status_code=500, detail="Failed to fetch quote")

    if view is None:
        raise HTTPException(status_code=404, detail="Quote not found")

    return QuoteWithAuthorResponse.from_view(view)
