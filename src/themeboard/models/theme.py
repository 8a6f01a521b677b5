"""SQLAlchemy model for post themes."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from themeboard.db.session import Base
from themeboard.models.user import new_id


class Theme(Base):
    """A topic every post is filed under. Read-only through the API."""

    __tablename__ = "theme"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
