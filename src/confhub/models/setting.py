"""Setting model for categorised key-value configuration entries.

Each setting carries two advisory flags telling operators whether a change
only takes effect after a restart or a database reset. The flags are
informational; nothing in confhub enforces them.
"""

from sqlalchemy import BigInteger, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from confhub.models.base import Base, TimestampMixin


class Setting(Base, TimestampMixin):
    """A single named configuration entry.

    Attributes:
        id: Store-assigned identifier, immutable after insert.
        key: Unique setting name (max 255 chars).
        value: Setting value as text.
        category: Grouping label, empty when ungrouped.
        description: Optional human-readable note.
        requires_restart: Changing the value needs a service restart.
        requires_db_reset: Changing the value needs a database reset.
    """

    __tablename__: str = "settings"

    # SQLite only autoincrements INTEGER PRIMARY KEY columns
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    key: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    value: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(100), default="", index=True)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    requires_restart: Mapped[bool] = mapped_column(Boolean, default=False)
    requires_db_reset: Mapped[bool] = mapped_column(Boolean, default=False)
