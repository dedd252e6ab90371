"""create users, listings and reservations

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2024-05-02 10:14:08.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'listings',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_src', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('room_count', sa.Integer(), nullable=False),
        sa.Column('bathroom_count', sa.Integer(), nullable=False),
        sa.Column('guest_count', sa.Integer(), nullable=False),
        sa.Column('country', sa.String(), nullable=True),
        sa.Column('region', sa.String(), nullable=True),
        sa.Column('latlng', sa.JSON(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('user_id', sa.String(32), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=False),
    )
    op.create_index('ix_listings_category', 'listings', ['category'])
    op.create_index('ix_listings_country', 'listings', ['country'])
    op.create_index('ix_listings_user_id', 'listings', ['user_id'])
    op.create_index('ix_listings_created_at', 'listings', ['created_at'])

    op.create_table(
        'reservations',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('listing_id', sa.String(32), sa.ForeignKey('listings.id'), nullable=False),
        sa.Column('user_id', sa.String(32), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('total_price', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(), nullable=False),
    )
    op.create_index('ix_reservations_listing_id', 'reservations', ['listing_id'])
    op.create_index('ix_reservations_user_id', 'reservations', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    # --- Children first ---
    op.drop_table('reservations')
    op.drop_table('listings')
    op.drop_table('users')
