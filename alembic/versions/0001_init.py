"""init

Revision ID: 0001_init
Revises:
Create Date: 2026-10-18

Initial schema.
Extensions: uuid-ossp, pg_trgm
Tables: assets, asset_logs
Function/triggers: trigger_set_timestamp() keeps updated_at fresh on both tables
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')
    op.execute('CREATE EXTENSION IF NOT EXISTS "pg_trgm"')

    op.execute(
        """
        CREATE OR REPLACE FUNCTION trigger_set_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
          NEW.updated_at = NOW();
          RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
        """
    )

    # ------------------------------------------------------------------
    # assets
    # ------------------------------------------------------------------
    op.create_table(
        "assets",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", sa.String(50), nullable=True),
        sa.Column("hostname", sa.String(255), nullable=True),
        sa.Column("metadata", postgresql.JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint(
            "type IS NULL OR type IN ('server', 'vm', 'nas', 'container', 'network', 'other')",
            name="ck_assets_type",
        ),
    )
    op.create_index("ix_assets_user_id", "assets", ["user_id"])
    op.create_index("ix_assets_user_id_type", "assets", ["user_id", "type"])
    op.create_index(
        "ix_assets_name_trgm",
        "assets",
        ["name"],
        postgresql_using="gin",
        postgresql_ops={"name": "gin_trgm_ops"},
    )
    op.create_index(
        "ix_assets_metadata",
        "assets",
        ["metadata"],
        postgresql_using="gin",
    )

    # ------------------------------------------------------------------
    # asset_logs
    # ------------------------------------------------------------------
    op.create_table(
        "asset_logs",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "asset_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("assets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("tags", postgresql.ARRAY(sa.String(50)), nullable=True),
        sa.Column(
            "search_vector",
            postgresql.TSVECTOR(),
            sa.Computed("to_tsvector('english', content)", persisted=True),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 2 AND 10000",
            name="ck_asset_logs_content_length",
        ),
    )
    op.create_index("ix_asset_logs_user_id_asset_id", "asset_logs", ["user_id", "asset_id"])
    op.create_index("ix_asset_logs_created_at", "asset_logs", ["created_at"])
    op.create_index("ix_asset_logs_tags", "asset_logs", ["tags"], postgresql_using="gin")
    op.create_index(
        "ix_asset_logs_search_vector",
        "asset_logs",
        ["search_vector"],
        postgresql_using="gin",
    )
    op.create_index(
        "ix_asset_logs_content_trgm",
        "asset_logs",
        ["content"],
        postgresql_using="gin",
        postgresql_ops={"content": "gin_trgm_ops"},
    )

    # ------------------------------------------------------------------
    # updated_at triggers
    # ------------------------------------------------------------------
    for table in ("assets", "asset_logs"):
        op.execute(
            f"""
            CREATE TRIGGER set_timestamp_{table}
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION trigger_set_timestamp()
            """
        )


def downgrade() -> None:
    for table in ("asset_logs", "assets"):
        op.execute(f"DROP TRIGGER IF EXISTS set_timestamp_{table} ON {table}")

    op.drop_index("ix_asset_logs_content_trgm", table_name="asset_logs")
    op.drop_index("ix_asset_logs_search_vector", table_name="asset_logs")
    op.drop_index("ix_asset_logs_tags", table_name="asset_logs")
    op.drop_index("ix_asset_logs_created_at", table_name="asset_logs")
    op.drop_index("ix_asset_logs_user_id_asset_id", table_name="asset_logs")
    op.drop_table("asset_logs")

    op.drop_index("ix_assets_metadata", table_name="assets")
    op.drop_index("ix_assets_name_trgm", table_name="assets")
    op.drop_index("ix_assets_user_id_type", table_name="assets")
    op.drop_index("ix_assets_user_id", table_name="assets")
    op.drop_table("assets")

    op.execute("DROP FUNCTION IF EXISTS trigger_set_timestamp()")
