from logging.config import fileConfig
from alembic import context
from sqlalchemy import engine_from_config, pool
import os
from wishes_admin.db.session import Base

# import models
from wishes_admin.models.template import Template
from wishes_admin.models.shared_file import SharedFile
from wishes_admin.models.shared_wish import SharedWish
from wishes_admin.models.ad_unit import AdUnit
from wishes_admin.models.admin_user import AdminUser

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)
target_metadata = Base.metadata

def get_url():
    return os.getenv("DATABASE_URL")

def run_migrations_offline():
    context.configure(url=get_url(), target_metadata=target_metadata, literal_binds=True, compare_type=True)
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    cfg = config.get_section(config.config_ini_section) or {}
    cfg["sqlalchemy.url"] = get_url()
    connectable = engine_from_config(cfg, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, compare_type=True)
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
