"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        "templates",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("html_content", sa.Text(), nullable=False),
        sa.Column("css_content", sa.Text(), nullable=False, server_default=""),
        sa.Column("js_content", sa.Text(), nullable=False, server_default=""),
        sa.Column("preview_url", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_index("ix_templates_created_at", "templates", ["created_at"])
    op.create_index("ix_templates_category", "templates", ["category"])
    op.create_index("ix_templates_is_active", "templates", ["is_active"])

    op.create_table(
        "shared_files",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("original_name", sa.String(length=255), nullable=False),
        sa.Column("path", sa.String(length=500), nullable=False),
        sa.Column("size", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("mime_type", sa.String(length=120), nullable=False),
        sa.Column("owner", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
    )
    op.create_index("ix_shared_files_created_at", "shared_files", ["created_at"])
    op.create_index("ix_shared_files_file_name", "shared_files", ["file_name"])
    op.create_index("ix_shared_files_mime_type", "shared_files", ["mime_type"])
    op.create_index("ix_shared_files_owner", "shared_files", ["owner"])

    op.create_table(
        "shared_wishes",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("short_code", sa.String(length=12), nullable=False, unique=True),
        sa.Column("template_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("recipient_name", sa.String(length=200), nullable=False),
        sa.Column("recipient_email", sa.String(length=255), nullable=False),
        sa.Column("sender_name", sa.String(length=200), nullable=False),
        sa.Column("sender_email", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("last_viewed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_shared_wishes_created_at", "shared_wishes", ["created_at"])
    op.create_index("ix_shared_wishes_template_id", "shared_wishes", ["template_id"])
    op.create_index("ix_shared_wishes_recipient_email", "shared_wishes", ["recipient_email"])
    op.create_index("ix_shared_wishes_sender_email", "shared_wishes", ["sender_email"])
    op.create_index("ix_shared_wishes_status", "shared_wishes", ["status"])

    op.create_table(
        "ad_units",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("ad_type", sa.String(length=30), nullable=False),
        sa.Column("ad_unit_code", sa.String(length=120), nullable=False, unique=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("platform", sa.String(length=20), nullable=False, server_default="both"),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_ad_units_created_at", "ad_units", ["created_at"])
    op.create_index("ix_ad_units_ad_type", "ad_units", ["ad_type"])

    op.create_table(
        "admin_users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="viewer"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("avatar_url", sa.String(length=500), nullable=True),
        sa.Column("settings", sa.JSON(), nullable=False),
    )
    op.create_index("ix_admin_users_created_at", "admin_users", ["created_at"])


def downgrade():
    op.drop_table("admin_users")
    op.drop_table("ad_units")
    op.drop_table("shared_wishes")
    op.drop_table("shared_files")
    op.drop_table("templates")
