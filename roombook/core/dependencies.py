"""
Request dependencies for FastAPI: tenant resolution and service wiring
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import Session
from typing import Optional
import uuid
import structlog

from roombook.core.auth import decode_access_token
from roombook.core.config import get_settings
from roombook.core.database import get_session
from roombook.core.tenancy import require_tenant
from roombook.models.tenant import Tenant
from roombook.repositories.sql import SqlBookingStore, SqlTenantDirectory
from roombook.schemas.token import TokenPayload
from roombook.services.booking_service import BookingService

logger = structlog.get_logger(__name__)
settings = get_settings()
security = HTTPBearer(auto_error=False)


def _tenant_from_token(credentials: HTTPAuthorizationCredentials) -> str:
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return TokenPayload(**payload).tenant_id
    except PydanticValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is missing required claims",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_tenant_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> uuid.UUID:
    """Get tenant ID from JWT token"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    tenant_id = require_tenant(_tenant_from_token(credentials))
    logger.debug(f"Tenant authenticated: {tenant_id}")
    return tenant_id


async def get_public_tenant_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> uuid.UUID:
    """Tenant ID for customer-facing calls: bearer token if sent, else the tenant header"""
    if credentials is not None:
        raw_tenant_id = _tenant_from_token(credentials)
    else:
        raw_tenant_id = request.headers.get(settings.TENANT_HEADER)

    tenant_id = require_tenant(raw_tenant_id)
    logger.debug(f"Tenant context: {tenant_id}")
    return tenant_id


def get_current_tenant(
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    session: Session = Depends(get_session)
) -> Tenant:
    """Resolved tenant; absent, deleted or inactive tenants are rejected"""
    return SqlTenantDirectory(session).get_active_tenant(tenant_id)


def get_booking_service(session: Session = Depends(get_session)) -> BookingService:
    """Booking service bound to the request's database session"""
    return BookingService(
        store=SqlBookingStore(session),
        directory=SqlTenantDirectory(session),
        slot_size_minutes=settings.SLOT_SIZE_MINUTES,
        max_slots=settings.MAX_SLOTS_PER_DAY,
    )
