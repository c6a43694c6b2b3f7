"""SQLAlchemy ORM model for the stored_values table.

Table is created by SqlKeyValueStore on first use; there are no migrations.
`value` holds the JSON text exactly as written, so a corrupt blob survives
until a reader clears it.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.ld_common.database import Base
from src.ld_common.datetime_utils import utc_now


class StoredValueModel(Base):
    __tablename__ = "stored_values"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now
    )
