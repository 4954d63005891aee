"""create users and legacy_clients

Revision ID: a1c4e07b9d21
Revises:
Create Date: 2026-02-14 10:12:41.508113

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1c4e07b9d21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password', sa.LargeBinary(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='client'),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('box_id', sa.String(), nullable=True),
        sa.Column('referral_code', sa.String(), nullable=True),
        sa.Column('verification_status', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('referral_code'),
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_users_email'), ['email'], unique=True)
        batch_op.create_index(batch_op.f('ix_users_box_id'), ['box_id'], unique=False)

    op.create_table(
        'legacy_clients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('box_id', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('registration_date', sa.Date(), nullable=True),
        # server_default so rows loaded straight into the table start unclaimed
        sa.Column('is_claimed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('claimed_by_user_id', sa.Integer(), nullable=True),
        sa.Column('claimed_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['claimed_by_user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('legacy_clients', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_legacy_clients_box_id'), ['box_id'], unique=True)
        batch_op.create_index(batch_op.f('ix_legacy_clients_created_at'), ['created_at'], unique=False)


def downgrade():
    with op.batch_alter_table('legacy_clients', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_legacy_clients_created_at'))
        batch_op.drop_index(batch_op.f('ix_legacy_clients_box_id'))
    op.drop_table('legacy_clients')

    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_users_box_id'))
        batch_op.drop_index(batch_op.f('ix_users_email'))
    op.drop_table('users')
