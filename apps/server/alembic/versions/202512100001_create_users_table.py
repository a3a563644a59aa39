"""Create users table

Revision ID: 202512100001
Revises:
Create Date: 2025-12-10 04:43:38.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from sqlalchemy.sql import expression


# revision identifiers, used by Alembic.
revision = '202512100001'
down_revision = None
branch_labels = None
depends_on = None


user_role = sa.Enum('GUEST', 'RENTER', 'OWNER', 'ADMIN', name='user_role')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('hashed_password', sa.String(length=255), nullable=True),
        sa.Column('role', user_role, server_default='RENTER', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=expression.true(), nullable=False),
        sa.Column('is_suspended', sa.Boolean(), server_default=expression.false(), nullable=False),
        sa.Column('suspended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('suspended_reason', sa.Text(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True),
                  server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_role_active_created', 'users',
                    ['role', 'is_active', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_users_role_active_created', table_name='users')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    user_role.drop(op.get_bind(), checkfirst=True)
