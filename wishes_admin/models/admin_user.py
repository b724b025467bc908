from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from wishes_admin.db.session import Base
from wishes_admin.models.common import UUIDMixin, TimestampMixin

ADMIN_ROLES = ("admin", "editor", "viewer")

def default_user_settings() -> dict:
    return {"theme": "light", "notifications": {"email": True, "push": True}}

class AdminUser(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "admin_users"
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)  # written by the auth service
    role: Mapped[str] = mapped_column(String(20), default="viewer", nullable=False)  # admin|editor|viewer
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    settings: Mapped[dict] = mapped_column(JSON, default=default_user_settings, nullable=False)
