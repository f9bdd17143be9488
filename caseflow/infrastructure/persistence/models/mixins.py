"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, OptionalTenantMixin, CreatedAtMixin, TimestampMixin.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from caseflow.shared.utils.datetime import utc_now
from caseflow.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class OptionalTenantMixin:
    """Mixin for tenant-scoped rows where null means global (no tenant)."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str | None]:
        return mapped_column(String, nullable=True, index=True)


class CreatedAtMixin:
    """Mixin for created_at (set in Python for stable ordering, server default as fallback)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            nullable=False,
        )


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at (timezone-aware)."""

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            onupdate=utc_now,
            nullable=False,
        )
