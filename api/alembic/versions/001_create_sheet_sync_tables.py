"""create_sheet_sync_tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _s(name: str, length: int = 255) -> sa.Column:
    return sa.Column(name, sa.String(length=length), nullable=True)


def _t(name: str) -> sa.Column:
    return sa.Column(name, sa.Text(), nullable=True)


def _f(name: str) -> sa.Column:
    return sa.Column(name, sa.Float(), nullable=True)


def _i(name: str) -> sa.Column:
    return sa.Column(name, sa.Integer(), nullable=True)


def _sync_columns() -> list:
    """Columnas tecnicas comunes (SheetSyncMixin)."""
    return [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('sheet_id', sa.String(length=255), nullable=True),
        sa.Column('synced', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('sync_attempted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


TABLES = {
    'borrowers': lambda: [
        _s('ssl_id', 100), _s('customer_type', 100), _s('type', 100), _s('name'),
        _t('location_description'), _s('entity_type', 100), _i('year_founded'),
        _s('payment_method', 100), _s('bank_name'), _s('account_name'), _s('account_number', 100),
        _s('primary_phone', 50), _s('status', 100), _t('notes'), _s('county', 100),
        _s('moe_certified', 3), _s('created_by'),
    ],
    'directors': lambda: [
        _s('borrower_id'), _s('name'), _s('national_id_number', 100), _s('kra_pin_number', 100),
        _s('phone_number', 50), _s('email'), _s('gender', 50), _s('role_in_school', 100),
        _s('status', 100), _s('date_of_birth', 50), _s('education_level', 100),
        _s('insured_for_credit_life', 3), _t('address'),
    ],
    'crb_consents': lambda: [
        _s('borrower_id'), _s('agreement', 3), _s('signed_by_name'), _s('date', 50),
        _s('role_in_organization'), _t('signature'),
    ],
    'referrers': lambda: [
        _s('school_id'), _s('referrer_name'), _s('mpesa_number', 50), _s('referral_reward_paid', 3),
        _s('date_paid', 50), _f('amount_paid'), _t('proof_of_payment'),
    ],
    'credit_applications': lambda: [
        _s('borrower_id'), _s('customer_type', 100), _s('application_start_date', 50),
        _s('credit_type', 100), _f('total_amount_requested'), _s('status', 100), _s('referred_by'),
        _f('current_cost_of_capital'), _i('checks_collected'), _i('checks_needed_for_loan'),
        _s('school_crb_available', 3), _t('comments_on_checks'),
    ],
    'active_debts': lambda: [
        _s('credit_application_id'), _s('debt_status', 100), _s('listed_on_crb', 3),
        _s('personal_loan_or_school_loan', 100), _s('lender'), _s('date_loan_taken', 50),
        _s('final_due_date', 50), _f('total_loan_amount'), _f('balance'), _f('amount_overdue'),
        _f('monthly_payment'),
    ],
    'fee_plans': lambda: [
        _s('credit_application_id'), _s('school_year', 50), _t('photo'), _t('file'),
    ],
    'audited_financials': lambda: [
        _s('credit_application_id'), _s('statement_type', 100), _t('notes'), _t('file'),
    ],
    'student_breakdowns': lambda: [
        _s('credit_application_id'), _s('fee_type', 100), _s('term', 50), _s('grade', 50),
        _i('number_of_students'), _f('fee'), _f('total_revenue'),
    ],
    'investment_committees': lambda: [
        _s('credit_application_id'), _s('school_id'), _s('type_of_school', 100),
        _s('school_is_profitable', 3), _s('audited_financials_provided', 3), _f('collections_rate'),
        _f('average_school_fees_charged'), _f('debt_ratio'), _i('loan_length_months'),
        _f('annual_reducing_interest_rate'), _f('maximum_monthly_payment'), _f('maximum_loan'),
    ],
    'home_visits': lambda: [
        _s('credit_application_id'), _s('user_id'), _s('county', 100), _t('address_details'),
        _s('location_pin'), _s('own_or_rent', 50), _i('how_many_years_stayed'),
        _s('marital_status', 50), _i('how_many_children'), _s('is_spouse_involved_in_school', 3),
        _s('does_spouse_have_other_income', 3), _f('if_yes_how_much_per_month'),
        _t('how_is_neighborhood'), _s('is_director_trained_educator', 3), _t('other_notes'),
    ],
    'asset_titles': lambda: [
        _s('credit_application_id'), _s('type', 100), _s('to_be_used_as_security', 3),
        _t('description'), _s('legal_owner'), _s('plot_number', 100), _s('license_plate_number', 50),
        _f('initial_estimated_value'), _f('evaluators_market_value'), _f('evaluators_forced_value'),
        _i('year_of_manufacture'),
    ],
    'contract_details': lambda: [
        _s('credit_application_id'), _i('loan_length_requested_months'),
        _s('months_school_requests_forgiveness'), _s('disbursal_date_requested', 50), _s('created_by'),
    ],
    'credit_application_comments': lambda: [
        _s('credit_application_id'), _s('commenter_type', 100), _s('commenter_name'), _t('comments'),
    ],
    'payrolls': lambda: [
        _s('credit_application_id'), _s('role'), _i('number_of_employees_in_role'),
        _f('monthly_salary'), _i('months_per_year_paid'), _t('notes'), _f('total_annual_cost'),
    ],
    'restructurings': lambda: [
        _s('loan_id'), _s('date', 50), _t('reason'), _f('previous_principal_amount'),
        _f('new_principal_amount'), _f('previous_monthly_payment'), _f('new_monthly_payment'),
        _i('previous_number_of_months'), _i('new_number_of_months'), _s('approved_by'),
    ],
}

# Columnas indexadas por tabla ademas de id / sheet_id / synced
FK_LIKE_INDEXES = {
    'borrowers': ['name'],
    'directors': ['borrower_id'],
    'crb_consents': ['borrower_id'],
    'referrers': ['school_id'],
    'credit_applications': ['borrower_id'],
    'restructurings': ['loan_id'],
}


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table, columns in TABLES.items():
        if inspector.has_table(table):
            continue
        op.create_table(
            table,
            *_sync_columns(),
            *columns(),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)
        op.create_index(op.f(f'ix_{table}_sheet_id'), table, ['sheet_id'], unique=True)
        op.create_index(op.f(f'ix_{table}_synced'), table, ['synced'], unique=False)
        extra = FK_LIKE_INDEXES.get(table, ['credit_application_id'])
        for column in extra:
            op.create_index(op.f(f'ix_{table}_{column}'), table, [column], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table in reversed(list(TABLES)):
        if inspector.has_table(table):
            op.drop_table(table)
