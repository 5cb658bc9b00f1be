"""
Seed a demo tenant

Creates the ``demo`` tenant with three rooms and the default weekly
business hours. Safe to run repeatedly: nothing is written when the demo
tenant already exists.
"""

import sys
from decimal import Decimal

from sqlmodel import Session
from roombook.core.database import engine
from roombook.models.business_hours import BusinessHoursRule, Weekday
from roombook.models.room import Room
from roombook.models.tenant import PlanType, Tenant
from roombook.repositories.sql import SqlTenantDirectory
import structlog

logger = structlog.get_logger(__name__)

DEMO_SUBDOMAIN = "demo"
DEMO_ROOMS = [
    ("Room A", 4, "Standard", "Standard room for small groups", Decimal("25.00")),
    ("Room B", 6, "Premium", "Premium room with better sound system", Decimal("35.00")),
    ("Room C", 8, "VIP", "VIP room with luxury amenities", Decimal("50.00")),
]


def seed_demo_tenant(session: Session) -> dict:
    """Insert the demo tenant, its rooms and business hours"""
    existing = SqlTenantDirectory(session).get_by_subdomain(DEMO_SUBDOMAIN)
    if existing is not None:
        logger.info(f"Demo tenant already exists: {existing.id}")
        return {"tenant_id": str(existing.id), "created": False}

    try:
        tenant = Tenant(
            name="Demo Karaoke",
            subdomain=DEMO_SUBDOMAIN,
            plan_type=PlanType.PRO,
            settings='{"timezone": "America/New_York", "currency": "USD"}',
        )
        session.add(tenant)
        session.flush()

        for name, capacity, category, description, rate in DEMO_ROOMS:
            session.add(Room(
                tenant_id=tenant.id,
                name=name,
                capacity=capacity,
                category=category,
                description=description,
                hourly_rate=rate,
            ))

        for weekday in Weekday:
            session.add(BusinessHoursRule.default_for(tenant.id, weekday))

        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Error seeding demo tenant: {e}")
        raise

    logger.info(f"Demo tenant created: {tenant.id} with {len(DEMO_ROOMS)} rooms")
    return {"tenant_id": str(tenant.id), "created": True}


def main():
    """Main entry point for the seed job"""
    try:
        with Session(engine) as session:
            results = seed_demo_tenant(session)
            logger.info(f"Results: {results}")
    except Exception as e:
        logger.error(f"Fatal error in seed job: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
