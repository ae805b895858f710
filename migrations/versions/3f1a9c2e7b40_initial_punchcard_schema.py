"""Initial punchcard schema

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1a9c2e7b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create staff, customers, punchcards, redemptions and social_engagement."""
    op.create_table(
        'staff',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('staff', 'manager')", name='ck_staff_role'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    # active_punchcard_id FK is added after punchcards exists
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('shopify_customer_id', sa.String(50), nullable=True),
        sa.Column('total_purchases', sa.Integer(), nullable=False),
        sa.Column('total_spent', sa.Numeric(12, 2), nullable=False),
        sa.Column('active_punchcard_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('shopify_customer_id')
    )

    op.create_table(
        'punchcards',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('punches', sa.Integer(), nullable=False),
        sa.Column('max_punches', sa.Integer(), nullable=False),
        sa.Column('is_redeemed', sa.Boolean(), nullable=False),
        sa.Column('redeemed_at', sa.DateTime(), nullable=True),
        sa.Column('redeemed_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('punches >= 0 AND punches <= max_punches', name='ck_punchcards_punch_range'),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['redeemed_by'], ['staff.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_punchcards_customer_id', 'punchcards', ['customer_id'])

    with op.batch_alter_table('customers') as batch_op:
        batch_op.create_foreign_key(
            'fk_customers_active_punchcard', 'punchcards',
            ['active_punchcard_id'], ['id'], ondelete='SET NULL'
        )

    op.create_table(
        'redemptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('punchcard_id', sa.Integer(), nullable=False),
        sa.Column('staff_id', sa.Integer(), nullable=True),
        sa.Column('staff_name', sa.String(255), nullable=True),
        sa.Column('staff_email', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ),
        sa.ForeignKeyConstraint(['punchcard_id'], ['punchcards.id'], ),
        sa.ForeignKeyConstraint(['staff_id'], ['staff.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('punchcard_id')
    )
    op.create_index('ix_redemptions_customer_id', 'redemptions', ['customer_id'])

    op.create_table(
        'social_engagement',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=True),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('platform', sa.String(50), nullable=False),
        sa.Column('engagement_type', sa.String(20), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('email_sent', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "engagement_type IN ('like', 'comment', 'share')",
            name='ck_social_engagement_type'
        ),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_social_engagement_customer_id', 'social_engagement', ['customer_id'])


def downgrade():
    """Drop all punchcard tables."""
    op.drop_index('ix_social_engagement_customer_id', table_name='social_engagement')
    op.drop_table('social_engagement')
    op.drop_index('ix_redemptions_customer_id', table_name='redemptions')
    op.drop_table('redemptions')
    with op.batch_alter_table('customers') as batch_op:
        batch_op.drop_constraint('fk_customers_active_punchcard', type_='foreignkey')
    op.drop_index('ix_punchcards_customer_id', table_name='punchcards')
    op.drop_table('punchcards')
    op.drop_table('customers')
    op.drop_table('staff')
