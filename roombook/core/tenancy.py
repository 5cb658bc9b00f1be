"""
Tenant isolation filter

Every query on tenant-owned tables starts from ``for_tenant`` so the tenant
predicate is applied before any other predicate.
"""

from typing import Any, Optional, Union
import uuid

from sqlmodel import select

from roombook.core.exceptions import ValidationError


def require_tenant(tenant_id: Optional[Union[uuid.UUID, str]]) -> uuid.UUID:
    """Validate a tenant identifier, raising ValidationError when absent or malformed"""
    if tenant_id is None or tenant_id == "":
        raise ValidationError("Tenant ID is required")
    if isinstance(tenant_id, uuid.UUID):
        return tenant_id
    try:
        return uuid.UUID(str(tenant_id))
    except ValueError:
        raise ValidationError(f"Malformed tenant ID: {tenant_id}")


def for_tenant(model: Any, tenant_id: Optional[Union[uuid.UUID, str]], include_deleted: bool = False):
    """SELECT over ``model`` restricted to one tenant's live rows"""
    statement = select(model).where(model.tenant_id == require_tenant(tenant_id))
    if not include_deleted and hasattr(model, "deleted_at"):
        statement = statement.where(model.deleted_at.is_(None))
    return statement
