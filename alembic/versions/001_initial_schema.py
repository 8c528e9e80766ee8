"""initial_schema

Revision ID: 001
Revises: 
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list:
    columns = [sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)]
    if updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        )
    return columns


def upgrade() -> None:
    """Upgrade schema."""
    # Create subscribers table
    op.create_table(
        'subscribers',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('source', sa.String(100), server_default='website', nullable=False),
        sa.Column('status', sa.String(50), server_default='active', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index(op.f('ix_subscribers_id'), 'subscribers', ['id'], unique=False)

    # Create trial_signups table
    op.create_table(
        'trial_signups',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('business_name', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('industry', sa.String(100), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('source', sa.String(100), server_default='free_trial_page', nullable=False),
        sa.Column('status', sa.String(50), server_default='new', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('assigned_to', sa.String(255), nullable=True),
        sa.Column('follow_up_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index(op.f('ix_trial_signups_id'), 'trial_signups', ['id'], unique=False)
    op.create_index(op.f('ix_trial_signups_status'), 'trial_signups', ['status'], unique=False)

    # Create clients table
    op.create_table(
        'clients',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('trial_id', sa.String(), nullable=True),
        sa.Column('business_name', sa.String(255), nullable=False),
        sa.Column('contact_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('industry', sa.String(100), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('service_area', sa.Text(), nullable=True),
        sa.Column('services_offered', sa.Text(), nullable=True),
        sa.Column('avg_job_value', sa.Float(), nullable=True),
        sa.Column('plan', sa.String(50), server_default='starter', nullable=False),
        sa.Column('plan_price', sa.Float(), server_default='397', nullable=False),
        sa.Column('status', sa.String(50), server_default='active', nullable=False),
        sa.Column('dashboard_token', sa.String(64), nullable=False),
        sa.Column('whop_membership_id', sa.String(100), nullable=True),
        sa.Column('whop_user_id', sa.String(100), nullable=True),
        sa.Column('onboarded_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['trial_id'], ['trial_signups.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index(op.f('ix_clients_id'), 'clients', ['id'], unique=False)
    op.create_index(op.f('ix_clients_dashboard_token'), 'clients', ['dashboard_token'], unique=True)

    # Create capture_pages table
    op.create_table(
        'capture_pages',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('client_id', sa.String(), nullable=True),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('industry', sa.String(100), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('status', sa.String(50), server_default='active', nullable=False),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('submissions', sa.Integer(), server_default='0', nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_capture_pages_id'), 'capture_pages', ['id'], unique=False)
    op.create_index(op.f('ix_capture_pages_client_id'), 'capture_pages', ['client_id'], unique=False)
    op.create_index(op.f('ix_capture_pages_slug'), 'capture_pages', ['slug'], unique=True)

    # Create leads table
    op.create_table(
        'leads',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('client_id', sa.String(), nullable=True),
        sa.Column('capture_page', sa.String(255), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('service_needed', sa.String(255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('postal_code', sa.String(20), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('source', sa.String(100), server_default='facebook', nullable=False),
        sa.Column('utm_source', sa.String(255), nullable=True),
        sa.Column('utm_medium', sa.String(255), nullable=True),
        sa.Column('utm_campaign', sa.String(255), nullable=True),
        sa.Column('status', sa.String(50), server_default='new', nullable=False),
        sa.Column('contacted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('booked_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('job_value', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_leads_id'), 'leads', ['id'], unique=False)
    op.create_index(op.f('ix_leads_client_id'), 'leads', ['client_id'], unique=False)
    op.create_index(op.f('ix_leads_status'), 'leads', ['status'], unique=False)
    op.create_index('ix_leads_created_at', 'leads', ['created_at'], unique=False)

    # Create lead_activity table
    op.create_table(
        'lead_activity',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('lead_id', sa.String(), nullable=False),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('created_by', sa.String(255), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['lead_id'], ['leads.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_lead_activity_id'), 'lead_activity', ['id'], unique=False)
    op.create_index(op.f('ix_lead_activity_lead_id'), 'lead_activity', ['lead_id'], unique=False)

    # Create email_log table
    op.create_table(
        'email_log',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('recipient', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(500), nullable=False),
        sa.Column('template', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), server_default='sent', nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_email_log_id'), 'email_log', ['id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('email_log')
    op.drop_table('lead_activity')
    op.drop_table('leads')
    op.drop_table('capture_pages')
    op.drop_table('clients')
    op.drop_table('trial_signups')
    op.drop_table('subscribers')
