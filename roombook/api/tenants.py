"""
Tenant API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
from datetime import datetime
import structlog
import uuid

from roombook.core.database import get_session
from roombook.core.dependencies import get_tenant_id
from roombook.core.exceptions import ConflictError, NotFoundError
from roombook.models.business_hours import BusinessHoursRule, Weekday
from roombook.models.tenant import Tenant
from roombook.repositories.sql import SqlTenantDirectory
from roombook.schemas.tenant import TenantCreate, TenantResponse, TenantUpdate

logger = structlog.get_logger(__name__)
router = APIRouter()


def _owned_tenant(session: Session, tenant_id: uuid.UUID, caller_tenant_id: uuid.UUID) -> Tenant:
    if tenant_id != caller_tenant_id:
        raise NotFoundError("Tenant not found")
    tenant = SqlTenantDirectory(session).get_tenant(tenant_id)
    if tenant is None:
        raise NotFoundError("Tenant not found")
    return tenant


@router.post("/", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(
    tenant_data: TenantCreate,
    session: Session = Depends(get_session)
):
    """Register a new tenant with the default weekly business hours"""
    if SqlTenantDirectory(session).get_by_subdomain(tenant_data.subdomain) is not None:
        raise ConflictError("Subdomain is already taken")

    tenant = Tenant(**tenant_data.model_dump())
    try:
        session.add(tenant)
        session.flush()
        for weekday in Weekday:
            session.add(BusinessHoursRule.default_for(tenant.id, weekday))
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.error(f"Failed to create tenant: {e}")
        raise ConflictError("Subdomain is already taken")

    session.refresh(tenant)
    logger.info(f"Tenant created: {tenant.id} ({tenant.subdomain})")
    return tenant


@router.get("/{tenant_id}", response_model=TenantResponse)
def get_tenant(
    tenant_id: uuid.UUID,
    caller_tenant_id: uuid.UUID = Depends(get_tenant_id),
    session: Session = Depends(get_session)
):
    """Get tenant by ID"""
    return _owned_tenant(session, tenant_id, caller_tenant_id)


@router.put("/{tenant_id}", response_model=TenantResponse)
def update_tenant(
    tenant_id: uuid.UUID,
    tenant_update: TenantUpdate,
    caller_tenant_id: uuid.UUID = Depends(get_tenant_id),
    session: Session = Depends(get_session)
):
    """Update tenant"""
    tenant = _owned_tenant(session, tenant_id, caller_tenant_id)

    for key, value in tenant_update.model_dump(exclude_unset=True).items():
        setattr(tenant, key, value)

    tenant.updated_at = datetime.utcnow()
    session.add(tenant)
    session.commit()
    session.refresh(tenant)
    logger.info(f"Tenant updated: {tenant_id}")
    return tenant


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tenant(
    tenant_id: uuid.UUID,
    caller_tenant_id: uuid.UUID = Depends(get_tenant_id),
    session: Session = Depends(get_session)
):
    """Soft-delete tenant"""
    tenant = _owned_tenant(session, tenant_id, caller_tenant_id)
    tenant.soft_delete()
    session.add(tenant)
    session.commit()
    logger.info(f"Tenant deleted: {tenant_id}")
