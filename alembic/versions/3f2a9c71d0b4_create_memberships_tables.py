"""create_memberships_tables

Revision ID: 3f2a9c71d0b4
Revises:
Create Date: 2026-10-19 09:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c71d0b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

member_status_enum = sa.Enum('active', 'inactive', name='member_status_enum')
membership_type_enum = sa.Enum('standard', 'trial', 'punchcard', name='membership_type_enum')
charge_signup_fee_enum = sa.Enum(
    'at-registration', 'first-payment', name='charge_signup_fee_enum'
)
payment_frequency_enum = sa.Enum(
    'monthly', 'weekly', 'annually', name='payment_frequency_enum'
)
start_date_option_enum = sa.Enum(
    'same-as-registration', 'custom', name='start_date_option_enum'
)
contract_length_enum = sa.Enum(
    'month-to-month', '3-months', '6-months', '12-months', name='contract_length_enum'
)
auto_renewal_enum = sa.Enum('none', 'month-to-month', 'same-term', name='auto_renewal_enum')
member_membership_status_enum = sa.Enum(
    'active', 'cancelled', 'expired', 'converted', name='member_membership_status_enum'
)
billing_type_enum = sa.Enum('autopay', 'one-time', name='billing_type_enum')

ENUMS = (
    member_status_enum,
    membership_type_enum,
    charge_signup_fee_enum,
    payment_frequency_enum,
    start_date_option_enum,
    contract_length_enum,
    auto_renewal_enum,
    member_membership_status_enum,
    billing_type_enum,
)


def upgrade() -> None:
    """Upgrade schema - Create programs, members, waivers and membership tables."""

    op.create_table(
        'programs',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('organization_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(length=16), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_programs_organization_id', 'programs', ['organization_id'])
    op.create_index(
        'program_org_slug_idx', 'programs', ['organization_id', 'slug'], unique=True
    )

    op.create_table(
        'members',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('organization_id', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('status', member_status_enum, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_members_organization_id', 'members', ['organization_id'])

    op.create_table(
        'waiver_templates',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('organization_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('requires_guardian', sa.Boolean(), nullable=False),
        sa.Column('guardian_age_threshold', sa.Integer(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('parent_id', sa.String(length=36), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'ix_waiver_templates_organization_id', 'waiver_templates', ['organization_id']
    )
    op.create_index('ix_waiver_templates_parent_id', 'waiver_templates', ['parent_id'])
    op.create_index(
        'waiver_template_org_slug_version_idx',
        'waiver_templates',
        ['organization_id', 'slug', 'version'],
        unique=True,
    )

    op.create_table(
        'membership_plans',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('organization_id', sa.String(), nullable=False),
        sa.Column('program_id', sa.String(length=36), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_trial', sa.Boolean(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('signup_fee', sa.Float(), nullable=False),
        sa.Column('frequency', sa.String(), nullable=False),
        sa.Column('contract_length', sa.String(), nullable=False),
        sa.Column('access_level', sa.String(), nullable=False),
        sa.Column('membership_type', membership_type_enum, nullable=False),
        sa.Column('charge_signup_fee', charge_signup_fee_enum, nullable=False),
        sa.Column('payment_frequency', payment_frequency_enum, nullable=False),
        sa.Column('start_date_option', start_date_option_enum, nullable=False),
        sa.Column('custom_start_date', sa.Date(), nullable=True),
        sa.Column('pro_rate_first_payment', sa.Boolean(), nullable=False),
        sa.Column('contract_term', contract_length_enum, nullable=False),
        sa.Column('auto_renewal', auto_renewal_enum, nullable=False),
        sa.Column('cancellation_fee', sa.Float(), nullable=True),
        sa.Column('hold_limit_per_year', sa.Integer(), nullable=True),
        sa.Column('classes_included', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['program_id'], ['programs.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'ix_membership_plans_organization_id', 'membership_plans', ['organization_id']
    )
    op.create_index('ix_membership_plans_program_id', 'membership_plans', ['program_id'])

    op.create_table(
        'membership_waivers',
        sa.Column('membership_plan_id', sa.String(length=36), nullable=False),
        sa.Column('waiver_template_id', sa.String(length=36), nullable=False),
        sa.Column('is_required', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['membership_plan_id'], ['membership_plans.id']),
        sa.ForeignKeyConstraint(['waiver_template_id'], ['waiver_templates.id']),
        sa.PrimaryKeyConstraint('membership_plan_id', 'waiver_template_id')
    )

    op.create_table(
        'member_memberships',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('member_id', sa.String(), nullable=False),
        sa.Column('membership_plan_id', sa.String(length=36), nullable=False),
        sa.Column('status', member_membership_status_enum, nullable=False),
        sa.Column('billing_type', billing_type_enum, nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('next_payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['members.id']),
        sa.ForeignKeyConstraint(['membership_plan_id'], ['membership_plans.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'ix_member_memberships_member_id', 'member_memberships', ['member_id']
    )
    op.create_index(
        'member_membership_member_status_idx',
        'member_memberships',
        ['member_id', 'status'],
    )


def downgrade() -> None:
    """Downgrade schema - Drop memberships tables."""
    op.drop_table('member_memberships')
    op.drop_table('membership_waivers')
    op.drop_table('membership_plans')
    op.drop_table('waiver_templates')
    op.drop_table('members')
    op.drop_table('programs')

    bind = op.get_bind()
    for enum_type in ENUMS:
        enum_type.drop(bind, checkfirst=True)
