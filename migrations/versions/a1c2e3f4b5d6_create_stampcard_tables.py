"""Create establishments, admin users, sessions, transactions and token redemptions.

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1c2e3f4b5d6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create the stamp card schema."""
    op.create_table(
        'establishments',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('grid_size', sa.Integer(), nullable=False, server_default='9'),
        sa.Column('reward_text', sa.Text(), nullable=True),
        sa.Column('reward_image_url', sa.Text(), nullable=True),
        sa.Column('logo_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('grid_size BETWEEN 4 AND 20', name='ck_establishment_grid_size'),
    )

    op.create_table(
        'admin_users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('establishment_id', sa.String(36), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.ForeignKeyConstraint(['establishment_id'], ['establishments.id'], ondelete='CASCADE'),
        sa.CheckConstraint(
            "role IN ('establishment_admin', 'superuser')",
            name='ck_admin_user_role'
        ),
        sa.CheckConstraint(
            "(role = 'superuser' AND establishment_id IS NULL) OR "
            "(role = 'establishment_admin' AND establishment_id IS NOT NULL)",
            name='ck_admin_user_role_establishment'
        ),
    )
    op.create_index('ix_admin_users_establishment_id', 'admin_users', ['establishment_id'])

    op.create_table(
        'sessions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['admin_users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_sessions_user_id', 'sessions', ['user_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('token', sa.String(255), nullable=False),
        sa.Column('establishment_id', sa.String(36), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['establishment_id'], ['establishments.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_transactions_token', 'transactions', ['token'], unique=True)
    op.create_index('ix_transactions_establishment_id', 'transactions', ['establishment_id'])

    op.create_table(
        'token_redemptions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('transaction_id', sa.String(36), nullable=False),
        sa.Column('customer_guid', sa.String(36), nullable=False),
        sa.Column('redeemed_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['transaction_id'], ['transactions.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('transaction_id', 'customer_guid', name='uq_redemption_transaction_customer'),
    )
    op.create_index('ix_token_redemptions_transaction_id', 'token_redemptions', ['transaction_id'])
    op.create_index('ix_token_redemptions_customer_guid', 'token_redemptions', ['customer_guid'])


def downgrade():
    """Drop the stamp card schema."""
    op.drop_index('ix_token_redemptions_customer_guid', table_name='token_redemptions')
    op.drop_index('ix_token_redemptions_transaction_id', table_name='token_redemptions')
    op.drop_table('token_redemptions')
    op.drop_index('ix_transactions_establishment_id', table_name='transactions')
    op.drop_index('ix_transactions_token', table_name='transactions')
    op.drop_table('transactions')
    op.drop_index('ix_sessions_user_id', table_name='sessions')
    op.drop_table('sessions')
    op.drop_index('ix_admin_users_establishment_id', table_name='admin_users')
    op.drop_table('admin_users')
    op.drop_table('establishments')
