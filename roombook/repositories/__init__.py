from roombook.repositories.base import BookingStore, TenantDirectory
from roombook.repositories.memory import InMemoryBookingStore, InMemoryTenantDirectory
from roombook.repositories.sql import SqlBookingStore, SqlTenantDirectory
