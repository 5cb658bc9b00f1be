"""
Pydantic schemas for authentication tokens
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class TokenPayload(BaseModel):
    """JWT token payload"""
    sub: str = Field(..., description="User ID")
    tenant_id: str = Field(..., description="Tenant ID")
    role: str = Field(..., description="User role")
    exp: datetime = Field(..., description="Expiration time")
    iat: Optional[datetime] = Field(default=None, description="Issued at")
