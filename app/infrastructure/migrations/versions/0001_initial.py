"""initial schema: users, content collections, comments, reactions

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _content(table: str, *columns: sa.Column) -> None:
    op.create_table(
        table,
        *_timestamps(),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("posted_by", sa.Integer(), sa.ForeignKey("users.id")),
        *columns,
    )
    op.create_index(f"ix_{table}_posted_by", table, ["posted_by"])
    op.create_index(f"ix_{table}_created_at_id", table, ["created_at", "id"])


def upgrade() -> None:
    op.create_table(
        "users",
        *_timestamps(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("full_name", sa.String(255)),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    _content(
        "news",
        sa.Column("title_en", sa.String(512), nullable=False),
        sa.Column("title_te", sa.String(512), nullable=False),
        sa.Column("description_en", sa.Text(), nullable=False),
        sa.Column("description_te", sa.Text(), nullable=False),
        sa.Column("category_en", sa.String(100), nullable=False),
        sa.Column("category_te", sa.String(100), nullable=False),
        sa.Column("sub_category_en", sa.String(100)),
        sa.Column("sub_category_te", sa.String(100)),
        sa.Column("tags_en", sa.JSON()),
        sa.Column("tags_te", sa.JSON()),
        sa.Column("main_url", sa.String(1024), nullable=False),
        sa.Column("movie_rating", sa.Float()),
    )
    op.create_index("ix_news_category_en", "news", ["category_en"])

    _content(
        "galleries",
        sa.Column("name_en", sa.String(255), nullable=False),
        sa.Column("name_te", sa.String(255), nullable=False),
        sa.Column("title_en", sa.String(512), nullable=False),
        sa.Column("title_te", sa.String(512), nullable=False),
        sa.Column("description_en", sa.Text(), nullable=False),
        sa.Column("description_te", sa.Text(), nullable=False),
        sa.Column("category_en", sa.String(100), nullable=False),
        sa.Column("category_te", sa.String(100), nullable=False),
        sa.Column("tags_en", sa.JSON()),
        sa.Column("tags_te", sa.JSON()),
        sa.Column("main_url", sa.String(1024)),
        sa.Column("gallery_pics", sa.JSON()),
    )
    op.create_index("ix_galleries_category_en", "galleries", ["category_en"])

    _content(
        "videos",
        sa.Column("title_en", sa.String(512), nullable=False),
        sa.Column("title_te", sa.String(512), nullable=False),
        sa.Column("category", sa.String(100)),
        sa.Column("sub_category_en", sa.String(100)),
        sa.Column("sub_category_te", sa.String(100)),
        sa.Column("main_url", sa.String(1024)),
        sa.Column("video_url", sa.String(1024)),
    )
    op.create_index("ix_videos_category", "videos", ["category"])

    op.create_table(
        "comments",
        *_timestamps(),
        sa.Column("news_id", sa.Integer(), sa.ForeignKey("news.id", ondelete="CASCADE"), nullable=False),
        sa.Column("language", sa.String(2), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("comments.id", ondelete="CASCADE")),
        sa.Column("posted_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
    )
    op.create_index("ix_comments_news_id", "comments", ["news_id"])
    op.create_index("ix_comments_parent_id", "comments", ["parent_id"])
    op.create_index(
        "ix_comments_thread_created_at_id", "comments",
        ["news_id", "language", "created_at", "id"]
    )

    op.create_table(
        "comment_reactions",
        *_timestamps(),
        sa.Column("comment_id", sa.Integer(), sa.ForeignKey("comments.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("kind", sa.String(7), nullable=False),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_comment_reactions_comment_user"),
    )
    op.create_index("ix_comment_reactions_comment_id", "comment_reactions", ["comment_id"])


def downgrade() -> None:
    op.drop_table("comment_reactions")
    op.drop_table("comments")
    op.drop_table("videos")
    op.drop_table("galleries")
    op.drop_table("news")
    op.drop_table("users")
