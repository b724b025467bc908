from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from wishes_admin.db.session import Base
from wishes_admin.models.common import UUIDMixin, TimestampMixin

AD_TYPES = ("banner", "interstitial", "rewarded")
AD_PLATFORMS = ("android", "ios", "both")

class AdUnit(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "ad_units"
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    ad_type: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    ad_unit_code: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    platform: Mapped[str] = mapped_column(String(20), default="both", nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
