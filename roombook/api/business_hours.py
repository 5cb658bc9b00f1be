"""
Business hours API endpoints
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List
from datetime import datetime
import structlog

from roombook.core.database import get_session
from roombook.core.dependencies import get_current_tenant
from roombook.models.business_hours import BusinessHoursRule, Weekday
from roombook.models.tenant import Tenant
from roombook.repositories.sql import SqlBookingStore
from roombook.schemas.business_hours import BusinessHoursResponse, WeeklyHoursUpdate

logger = structlog.get_logger(__name__)
router = APIRouter()


def _weekly_hours(store: SqlBookingStore, tenant: Tenant) -> list[BusinessHoursResponse]:
    stored = {rule.weekday: rule for rule in store.list_business_hours(tenant.id)}
    hours = []
    for weekday in Weekday:
        rule = stored.get(int(weekday))
        is_default = rule is None
        if is_default:
            rule = BusinessHoursRule.default_for(tenant.id, weekday)
        hours.append(BusinessHoursResponse(
            weekday=weekday,
            day=weekday.name.lower(),
            open_time=rule.open_time,
            close_time=rule.close_time,
            is_closed=rule.is_closed,
            spans_midnight=rule.spans_midnight,
            is_default=is_default,
        ))
    return hours


@router.get("/", response_model=List[BusinessHoursResponse])
def get_business_hours(
    tenant: Tenant = Depends(get_current_tenant),
    session: Session = Depends(get_session)
):
    """Effective weekly hours, Sunday first; unset days show the defaults"""
    return _weekly_hours(SqlBookingStore(session), tenant)


@router.put("/", response_model=List[BusinessHoursResponse])
def update_business_hours(
    hours_update: WeeklyHoursUpdate,
    tenant: Tenant = Depends(get_current_tenant),
    session: Session = Depends(get_session)
):
    """Replace the hours of the given weekdays"""
    store = SqlBookingStore(session)
    now = datetime.utcnow()
    try:
        for entry in hours_update.business_hours:
            rule = store.get_business_hours(tenant.id, entry.weekday)
            if rule is None:
                rule = BusinessHoursRule(tenant_id=tenant.id, weekday=int(entry.weekday))
            else:
                rule.updated_at = now
            rule.is_closed = entry.is_closed
            rule.open_time = entry.open_time
            rule.close_time = entry.close_time
            session.add(rule)
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Failed to update business hours for tenant {tenant.id}: {e}")
        raise

    logger.info(f"Business hours updated for tenant {tenant.id}: {len(hours_update.business_hours)} days")
    return _weekly_hours(store, tenant)
