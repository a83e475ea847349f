import logging
from typing import AsyncIterator

import httpx
from fastapi import Depends, Header, HTTPException, Path, status
from sqlalchemy import select
from sqlalchemy.exc import ProgrammingError
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import async_session
from .domain.errors import GENERIC_RETRY_MESSAGE, MalformedTimeError, StoreError
from .domain.venue import VenueTerms
from .infrastructure.gateways import HttpInvoiceGateway, HttpNotificationGateway
from .infrastructure.repositories import SqlAlchemyVenueRepository
from .models import User
from .utils.auth import AuthSession, bearer_token, decode_access_token

logger = logging.getLogger(__name__)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session


def _decode_user_id(token: str) -> int:
    settings = get_settings()
    return decode_access_token(token, secret=settings.auth_secret, algorithms=[settings.auth_algorithm])


async def get_current_user_id(
    authorization: str | None = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> int:
    token = bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="bearer token required",
            headers=_BEARER_CHALLENGE,
        )
    try:
        user_id = _decode_user_id(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid token",
            headers=_BEARER_CHALLENGE,
        ) from exc

    try:
        found = await session.scalar(select(User.id).where(User.id == user_id))
    except ProgrammingError as exc:
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="user lookup failed") from exc
    if found is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="user not found",
            headers=_BEARER_CHALLENGE,
        )
    return user_id


async def get_auth_session(authorization: str | None = Header(default=None)) -> AuthSession | None:
    """Optional identity; the admission protocol rejects a missing one with LoginRequired."""
    token = bearer_token(authorization)
    if token is None:
        return None
    try:
        return AuthSession(user_id=_decode_user_id(token))
    except ValueError:
        return None


async def get_venue_terms(
    venue_id: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_session),
) -> VenueTerms:
    try:
        venue = await SqlAlchemyVenueRepository(session).get(venue_id)
    except StoreError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=GENERIC_RETRY_MESSAGE) from exc
    if venue is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="venue not found")
    try:
        return VenueTerms.from_model(venue)
    except MalformedTimeError as exc:
        logger.error("venue %s has malformed operating hours: %s", venue_id, exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=GENERIC_RETRY_MESSAGE) from exc


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=get_settings().gateway_timeout_seconds) as client:
        yield client


async def get_notification_gateway(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> HttpNotificationGateway:
    settings = get_settings()
    return HttpNotificationGateway(client, url=settings.notify_rpc_url, api_key=settings.service_api_key)


async def get_invoice_gateway(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> HttpInvoiceGateway:
    settings = get_settings()
    return HttpInvoiceGateway(client, url=settings.invoice_service_url, api_key=settings.service_api_key)
