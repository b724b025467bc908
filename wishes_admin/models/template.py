from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from wishes_admin.db.session import Base
from wishes_admin.models.common import UUIDMixin, TimestampMixin

class Template(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "templates"
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    tags: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    html_content: Mapped[str] = mapped_column(Text, nullable=False)
    css_content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    js_content: Mapped[str] = mapped_column(Text, default="", nullable=False)
    preview_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
