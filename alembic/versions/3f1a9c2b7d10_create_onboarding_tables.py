"""create onboarding tables

Revision ID: 3f1a9c2b7d10
Revises:
Create Date: 2025-11-03 09:12:44.518210
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    user_role_enum = sa.Enum('ADMIN', 'USER', 'BANNED', name='userrole')

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('middle_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('national_id', sa.String(length=20), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('address', sa.String(length=120), nullable=True),
        sa.Column('role', user_role_enum, nullable=False, server_default='USER'),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'])
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'sessions',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('ip_address', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
    )
    op.create_index(op.f('ix_sessions_user_id'), 'sessions', ['user_id'])

    op.create_table(
        'personal_customers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_number', sa.String(length=20), nullable=False),
        sa.Column('tin_number', sa.String(length=20), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('middle_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('mothers_name', sa.String(length=100), nullable=False),
        sa.Column('gender', sa.String(length=20), nullable=False),
        sa.Column('marital_status', sa.String(length=20), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('national_id', sa.String(length=12), nullable=False),
        sa.Column('phone', sa.String(length=13), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=True),
        sa.Column('region', sa.String(length=100), nullable=False),
        sa.Column('zone', sa.String(length=100), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('subcity', sa.String(length=100), nullable=False),
        sa.Column('woreda', sa.String(length=100), nullable=False),
        sa.Column('monthly_income', sa.Numeric(precision=15, scale=2), nullable=False),
        sa.Column('account_type', sa.String(length=50), nullable=False),
        sa.Column('national_id_url', sa.String(length=500), nullable=True),
        sa.Column('agreement_form_url', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('national_id', name='personal_customers_national_id_key'),
        sa.UniqueConstraint('phone', name='personal_customers_phone_key'),
        sa.UniqueConstraint('email', name='personal_customers_email_key'),
    )
    op.create_index(op.f('ix_personal_customers_id'), 'personal_customers', ['id'])
    op.create_index(op.f('ix_personal_customers_customer_number'), 'personal_customers', ['customer_number'], unique=True)
    op.create_index(op.f('ix_personal_customers_created_at'), 'personal_customers', ['created_at'])

    op.create_table(
        'company_customers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('customer_number', sa.String(length=20), nullable=False),
        sa.Column('tin_number', sa.String(length=20), nullable=False),
        sa.Column('company_name', sa.String(length=200), nullable=False),
        sa.Column('business_type', sa.String(length=100), nullable=True),
        sa.Column('registration_number', sa.String(length=50), nullable=False),
        sa.Column('registration_date', sa.Date(), nullable=True),
        sa.Column('number_of_employees', sa.Integer(), nullable=True),
        sa.Column('contact_person_name', sa.String(length=200), nullable=True),
        sa.Column('contact_person_position', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=120), nullable=True),
        sa.Column('region', sa.String(length=100), nullable=True),
        sa.Column('zone', sa.String(length=100), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('subcity', sa.String(length=100), nullable=True),
        sa.Column('woreda', sa.String(length=100), nullable=True),
        sa.Column('annual_revenue', sa.Numeric(precision=18, scale=2), nullable=True),
        sa.Column('business_license_url', sa.String(length=500), nullable=True),
        sa.Column('agreement_form_url', sa.String(length=500), nullable=True),
        sa.Column('account_type', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('registration_number', name='company_customers_registration_number_key'),
    )
    op.create_index(op.f('ix_company_customers_id'), 'company_customers', ['id'])
    op.create_index(op.f('ix_company_customers_customer_number'), 'company_customers', ['customer_number'], unique=True)
    op.create_index(op.f('ix_company_customers_tin_number'), 'company_customers', ['tin_number'], unique=True)
    op.create_index(op.f('ix_company_customers_company_name'), 'company_customers', ['company_name'])
    op.create_index(op.f('ix_company_customers_created_at'), 'company_customers', ['created_at'])


def downgrade() -> None:
    op.drop_table('company_customers')
    op.drop_table('personal_customers')
    op.drop_index(op.f('ix_sessions_user_id'), table_name='sessions')
    op.drop_table('sessions')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')

    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
