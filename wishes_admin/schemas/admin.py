from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wishes_admin.models.ad_unit import AD_PLATFORMS, AD_TYPES
from wishes_admin.models.admin_user import ADMIN_ROLES
from wishes_admin.models.shared_wish import WISH_STATUSES


def _one_of(value: str, allowed: tuple[str, ...], name: str) -> str:
    normalized = str(value or "").strip().lower()
    if normalized not in allowed:
        raise ValueError(f"{name} must be one of: {', '.join(allowed)}")
    return normalized


def _not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _clean_tags(value: list[str]) -> list[str]:
    return [tag.strip() for tag in value if tag and tag.strip()]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid")


class TemplateUpsert(_Payload):
    title: str = Field(min_length=1, max_length=200)
    category: str = Field(min_length=1, max_length=100)
    tags: list[str] = Field(default_factory=list)
    html_content: str
    css_content: str = ""
    js_content: str = ""
    preview_url: Optional[str] = None
    is_active: bool = True

    @field_validator("title", "category")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value: list[str]) -> list[str]:
        return _clean_tags(value)


class TemplatePatch(_Payload):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    tags: Optional[list[str]] = None
    html_content: Optional[str] = None
    css_content: Optional[str] = None
    js_content: Optional[str] = None
    preview_url: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("title", "category")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _not_blank(value)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return None
        return _clean_tags(value)


class TemplateStatusUpdate(_Payload):
    is_active: bool


class TemplateBulkImport(_Payload):
    templates: list[TemplateUpsert] = Field(min_length=1, max_length=500)


class SharedFileUpdate(_Payload):
    description: str = Field(default="", max_length=2000)


class SharedWishCreate(_Payload):
    template_id: Optional[str] = None
    recipient_name: str = Field(min_length=1, max_length=200)
    recipient_email: str = Field(min_length=3, max_length=255)
    sender_name: str = Field(min_length=1, max_length=200)
    sender_email: str = Field(min_length=3, max_length=255)
    message: str = Field(min_length=1)
    status: str = "pending"

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: str) -> str:
        return _one_of(value, WISH_STATUSES, "status")

    @field_validator("recipient_email", "sender_email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if "@" not in value:
            raise ValueError("must be an email address")
        return value


class SharedWishUpdate(_Payload):
    recipient_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    sender_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    message: Optional[str] = Field(default=None, min_length=1)
    status: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _one_of(value, WISH_STATUSES, "status")


class AdUnitUpsert(_Payload):
    name: str = Field(min_length=1, max_length=200)
    ad_type: str
    ad_unit_code: str = Field(min_length=1, max_length=120)
    is_active: bool = True
    platform: str = "both"
    description: Optional[str] = None

    @field_validator("ad_type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        return _one_of(value, AD_TYPES, "ad_type")

    @field_validator("platform")
    @classmethod
    def validate_platform(cls, value: str) -> str:
        return _one_of(value, AD_PLATFORMS, "platform")

    @field_validator("ad_unit_code")
    @classmethod
    def strip_code(cls, value: str) -> str:
        return value.strip()


class NotificationSettingsUpdate(_Payload):
    email: Optional[bool] = None
    push: Optional[bool] = None


class UserSettingsUpdate(_Payload):
    theme: Optional[Literal["light", "dark"]] = None
    notifications: Optional[NotificationSettingsUpdate] = None


class AdminUserUpdate(_Payload):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    role: Optional[str] = None
    is_active: Optional[bool] = None
    avatar_url: Optional[str] = None
    settings: Optional[UserSettingsUpdate] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _one_of(value, ADMIN_ROLES, "role")
