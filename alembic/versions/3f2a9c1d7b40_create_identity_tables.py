"""create_identity_tables

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False, comment="Role kind name (e.g., 'ADMIN', 'USER')"),
        sa.Column('description', sa.String(length=200), nullable=True, comment="Description of the role's purpose"),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('google_id', sa.String(length=100), nullable=False, comment="External identity provider user ID (JWT 'sub' claim)"),
        sa.Column('email', sa.String(length=100), nullable=False, comment='User email address'),
        sa.Column('name', sa.String(length=100), nullable=True, comment='Full name'),
        sa.Column('picture', sa.String(length=500), nullable=True, comment='Profile picture URL'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, comment='Optimistic locking version'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('google_id')
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index('idx_user_email', ['email'], unique=False)
        batch_op.create_index('idx_user_google_id', ['google_id'], unique=False)

    op.create_table('user_roles',
        sa.Column('user_id', sa.Integer(), nullable=False, comment='Foreign key to users table'),
        sa.Column('role_id', sa.Integer(), nullable=False, comment='Foreign key to roles table'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id', 'role_id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('user_roles')
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.drop_index('idx_user_google_id')
        batch_op.drop_index('idx_user_email')

    op.drop_table('users')
    op.drop_table('roles')
