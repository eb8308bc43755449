"""initial_subasta_schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2025-07-29 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '1a2b3c4d5e6f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

json_type = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade() -> None:
    # Create properties table
    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False, comment='Street address'),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('state', sa.String(length=20), nullable=False, comment='State code'),
        sa.Column('zip_code', sa.String(length=10), nullable=False),
        sa.Column('county', sa.String(length=100), nullable=False, comment='County name or FIPS code'),
        sa.Column('property_type', sa.String(length=50), nullable=False),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Numeric(precision=4, scale=1), nullable=True),
        sa.Column('sqft', sa.Integer(), nullable=True),
        sa.Column('lot_size', sa.String(length=50), nullable=True),
        sa.Column('year_built', sa.Integer(), nullable=True),
        sa.Column('condition', sa.String(length=50), nullable=True),
        sa.Column('parking', sa.String(length=100), nullable=True),
        sa.Column('hoa', sa.Numeric(precision=10, scale=2), nullable=True, comment='Monthly HOA fee'),
        sa.Column('original_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('auction_price', sa.Numeric(precision=12, scale=2), nullable=False, comment='Opening bid'),
        sa.Column('discount', sa.Integer(), nullable=False, comment='Discount percentage'),
        sa.Column('market_value', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('lien_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('deposit_required', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('monthly_rent', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('annual_roi', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('cap_rate', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('opportunity_score', sa.Integer(), nullable=True, comment='1-5'),
        sa.Column('auction_type', sa.String(length=50), nullable=False),
        sa.Column('auction_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('auction_location', sa.Text(), nullable=True),
        sa.Column('trustee_phone', sa.String(length=50), nullable=True),
        sa.Column('external_id', sa.String(length=100), nullable=True, comment='ATTOM identifier'),
        sa.Column('images', json_type, nullable=True, comment='Image descriptors'),
        sa.Column('featured', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='active', nullable=False),
        sa.Column('data_source', sa.String(length=50), nullable=True),
        sa.Column('last_synced_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("status IN ('active', 'sold', 'cancelled')", name='check_property_status_valid'),
        sa.CheckConstraint(
            'opportunity_score IS NULL OR opportunity_score BETWEEN 1 AND 5',
            name='check_opportunity_score_range'
        ),
    )
    op.create_index('idx_properties_address_city_state', 'properties', ['address', 'city', 'state'], unique=False)
    op.create_index('idx_properties_state_county', 'properties', ['state', 'county'], unique=False)
    op.create_index('idx_properties_discount', 'properties', ['discount'], unique=False)

    # Create saved_properties table
    op.create_table(
        'saved_properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'property_id', name='uq_saved_properties_user_property'),
    )
    op.create_index('idx_saved_properties_user_id', 'saved_properties', ['user_id'], unique=False)

    # Create sync_runs table
    op.create_table(
        'sync_runs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sync_type', sa.String(length=20), nullable=False, comment='daily_sync or manual_sync'),
        sa.Column('status', sa.String(length=20), nullable=False, comment='Job status: running, success, partial, failure'),
        sa.Column('states', json_type, nullable=True, comment='States synced'),
        sa.Column('records_processed', sa.Integer(), server_default='0', nullable=False),
        sa.Column('records_inserted', sa.Integer(), server_default='0', nullable=False),
        sa.Column('records_updated', sa.Integer(), server_default='0', nullable=False),
        sa.Column('records_failed', sa.Integer(), server_default='0', nullable=False),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "status IN ('running', 'success', 'failure', 'partial')",
            name='check_sync_run_status_valid'
        ),
    )
    op.create_index('idx_sync_runs_started_at', 'sync_runs', ['started_at'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_sync_runs_started_at', table_name='sync_runs')
    op.drop_table('sync_runs')
    op.drop_index('idx_saved_properties_user_id', table_name='saved_properties')
    op.drop_table('saved_properties')
    op.drop_index('idx_properties_discount', table_name='properties')
    op.drop_index('idx_properties_state_county', table_name='properties')
    op.drop_index('idx_properties_address_city_state', table_name='properties')
    op.drop_table('properties')
