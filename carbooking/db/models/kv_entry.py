from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.sqltypes import String, Text

from carbooking.db.base import Base


class KVEntry(Base):
    """One stored value, addressed by its string key."""

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(String(length=200), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
