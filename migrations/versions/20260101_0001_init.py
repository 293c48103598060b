"""Initial schema: users, posts, followers

Revision ID: 0001
Revises:
Create Date: 2026-01-01

"""
from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # gen_random_uuid()
    op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")
    op.execute("CREATE SCHEMA IF NOT EXISTS social")

    op.execute(
        """
        CREATE TABLE social.users (
            id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
            username varchar(32) NOT NULL UNIQUE,
            email varchar(320) NOT NULL UNIQUE,
            password_hash text NOT NULL,
            bio varchar(500),
            birthday date,
            created_at timestamptz NOT NULL DEFAULT now(),
            updated_at timestamptz NOT NULL DEFAULT now()
        )
        """
    )

    op.execute(
        """
        CREATE TABLE social.posts (
            id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id uuid NOT NULL REFERENCES social.users (id) ON DELETE CASCADE,
            content varchar(2000) NOT NULL,
            created_at timestamptz NOT NULL DEFAULT now(),
            updated_at timestamptz NOT NULL DEFAULT now()
        )
        """
    )
    op.execute("CREATE INDEX posts_user_id_idx ON social.posts (user_id)")

    op.execute(
        """
        CREATE TABLE social.followers (
            follower_id uuid NOT NULL REFERENCES social.users (id) ON DELETE CASCADE,
            followee_id uuid NOT NULL REFERENCES social.users (id) ON DELETE CASCADE,
            created_at timestamptz NOT NULL DEFAULT now(),
            PRIMARY KEY (follower_id, followee_id),
            CHECK (follower_id <> followee_id)
        )
        """
    )
    op.execute("CREATE INDEX followers_followee_id_idx ON social.followers (followee_id)")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS social.followers")
    op.execute("DROP TABLE IF EXISTS social.posts")
    op.execute("DROP TABLE IF EXISTS social.users")
    op.execute("DROP SCHEMA IF EXISTS social")
