"""Initial schema for files and tasks."""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "files",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("uuid", sa.String(), nullable=False),
        sa.Column("file_name", sa.String(), nullable=False),
        sa.Column("data", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", "uuid", name="uq_files_name_uuid"),
    )
    op.create_index("ix_files_file_name", "files", ["file_name"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("stella_url", sa.String(), nullable=False),
        sa.Column("vott_backend_url", sa.String(), nullable=False),
        sa.Column("image_server_url", sa.String(), nullable=False),
        sa.Column("task_server_url", sa.String(), nullable=False),
        sa.Column("created_at", sa.String(), nullable=False),
        sa.Column("last_updated_at", sa.String(), nullable=False),
        sa.Column("last_used_for_project_creation", sa.String(), nullable=False),
        sa.Column("image_list", JSON_TYPE, nullable=True),
        sa.Column("progress", JSON_TYPE, nullable=False),
        sa.Column("attribute_keys", JSON_TYPE, nullable=False),
        sa.Column("extra", JSON_TYPE, nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("tasks")
    op.drop_index("ix_files_file_name", table_name="files")
    op.drop_table("files")
