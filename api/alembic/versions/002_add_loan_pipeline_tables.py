"""add_loan_pipeline_tables

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, Sequence[str], None] = '001'
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
    'enrollment_verifications': lambda: [
        _s('credit_application_id'), _t('sub_county_enrollment_report'),
        _t('enrollment_report'), _i('number_of_students_this_year'),
        _i('number_of_students_last_year'), _i('number_of_students_two_years_ago'),
        _s('created_at_sheet', 50),
    ],
    'mpesa_bank_statements': lambda: [
        _s('credit_application_id'), _s('personal_or_business_account', 100), _s('type', 100),
        _t('account_details'), _t('description'), _t('statement'),
        _s('statement_start_date', 50), _s('statement_end_date', 50), _f('total_revenue'),
        _t('converted_excel_file'), _s('created_at_sheet', 50),
    ],
    'other_supporting_docs': lambda: [
        _s('credit_application_id'), _s('document_type'), _t('notes'), _t('file'), _t('image'),
        _s('created_at_sheet', 50),
    ],
    'vendor_disbursement_details': lambda: [
        _s('credit_application_id'), _s('vendor_payment_method', 100),
        _s('phone_number_for_mpesa_payment', 50), _s('manager_verification'),
        _t('document_verifying_payment_account'), _s('bank_name'), _s('account_name'),
        _s('account_number', 100), _s('phone_number_for_bank_account', 50),
        _s('paybill_number_and_account'), _s('buy_goods_till', 100),
    ],
    'financial_surveys': lambda: [
        _s('credit_application_id'), _s('survey_date', 50), _s('director_id'), _s('created_by'),
        _s('school_grades'), _s('is_school_apbet_or_private', 100), _s('is_church_supported'),
        _s('church_name'), _f('church_annual_support'), _s('facility_ownership', 100),
        _f('annual_lease_rent'), _f('owner_annual_withdrawal'), _f('monthly_debt_payments'),
        _s('provides_meals'), _f('termly_food_expense'), _f('monthly_electricity_expense'),
        _f('monthly_water_expense'), _s('has_vehicles'), _i('sponsored_children_count'),
        _f('annual_sponsorship_revenue'), _i('previous_year_student_count'),
        _i('next_year_expected_students'), _f('current_bank_balance'),
        _i('years_at_current_premises'), _i('years_with_bank_account'),
        _s('has_audited_financials'), _i('branch_count'),
    ],
    'direct_payment_schedules': lambda: [
        _s('direct_loan_id'), _s('borrower_type', 100), _s('borrower_id'), _s('due_date', 50),
        _s('holiday_forgiveness'), _f('amount_still_unpaid'), _i('days_late'),
        _s('date_fully_paid', 50), _s('payment_overdue'), _s('par14', 50), _s('par30', 50),
        _s('par60', 50), _s('par90', 50), _s('par120', 50), _s('check_cashing_status', 100),
        _s('debt_type', 100), _t('notes_on_payment'), _s('adjusted_month', 50),
        _f('credit_life_insurance_fees_charged'), _f('interest_charged_without_forgiveness'),
        _f('principal_repayment_without_forgiveness'),
        _f('vehicle_insurance_payment_due_without_forgiveness'),
        _f('vehicle_insurance_payment_due'), _f('interest_repayment_due'),
        _f('principal_repayment_due'), _f('amount_due'), _f('amount_paid'), _s('created_by'),
        _s('created_at_sheet', 50), _s('ssl_id', 100), _s('date_to_bank_check', 50),
        _s('loan_category', 100), _s('write_off_date', 50), _s('interest_suspended'),
        _s('region', 100), _s('date_for_mpesa_bank_transfer', 50),
    ],
    'principal_tranches': lambda: [
        _s('direct_loan_id'), _s('contract_signing_date', 50), _f('amount'), _s('ssl_id', 100),
        _s('initial_disbursement_date_in_contract', 50), _s('date_tranche_has_gone_par30', 50),
        _s('created_by'), _s('has_female_director'), _s('loan_type', 100), _s('reassigned'),
        _s('team_leader'), _s('region', 100),
    ],
    'direct_lending_processing': lambda: [
        _s('payment_type', 100), _s('payment_source', 100), _s('borrower_type', 100),
        _s('borrower_id'), _s('direct_loan_id'), _s('payment_schedule_id'),
        _s('payment_date', 50), _f('amount_paid'), _s('payment_reference'),
        _f('installment_payment_amount'), _f('installment_vehicle_insurance_premium_amount'),
        _f('installment_vehicle_insurance_surcharge_amount'), _f('installment_interest_amount'),
        _f('installment_principal_amount'), _f('vehicle_insurance_premium_paid'),
        _f('vehicle_insurance_surcharge_paid'), _f('interest_paid'), _f('principal_paid'),
        _s('created_by'), _s('ssl_id', 100), _s('region', 100),
    ],
    'impact_surveys': lambda: [
        _s('credit_application_id'), _s('survey_date', 50), _s('director_id'), _s('created_by'),
        _s('is_school_apbet_or_private', 100), _s('school_area'), _s('grade_levels_served'),
        _i('number_of_students'), _i('number_of_classrooms'), _i('number_of_teachers'),
        _s('has_running_water'), _s('has_electricity'), _s('provides_meals'),
        _s('owns_transport_vehicles'), _i('number_of_vehicles'), _s('has_library'),
        _s('has_computer_lab'), _i('female_students'), _i('male_students'),
        _f('sent_home_for_fees_percentage'),
    ],
    'loans': lambda: [
        _s('loan_type', 100), _t('loan_purpose'), _s('borrower_type', 100), _s('borrower_id'),
        _s('borrower_name'), _f('principal_amount'), _s('interest_type', 100),
        _f('annual_declining_interest'), _f('annual_flat_interest'),
        _f('processing_fee_percentage'), _f('credit_life_insurance_percentage'),
        _f('securitization_fee'), _f('processing_fee'), _f('credit_life_insurance_fee'),
        _i('number_of_months'), _f('daily_penalty'), _f('amount_to_disburse'),
        _f('total_interest_charged'), _f('total_interest_to_pay'), _f('total_principal_to_pay'),
        _s('credit_application_id'), _s('first_payment_period', 50), _s('created_by'),
        _f('total_penalties_assessed'), _f('total_penalties_paid'), _f('penalties_still_due'),
        _s('ssl_id', 100), _s('loan_overdue'), _s('par14', 50), _s('par30', 50),
        _s('par60', 50), _s('par90', 50), _s('par120', 50), _f('amount_overdue'),
        _s('loan_fully_paid'), _s('loan_status', 100), _f('total_amount_due_to_date'),
        _f('principal_paid_to_date'), _f('outstanding_principal_balance'),
        _f('percent_disbursed'), _i('days_late'), _f('total_unpaid_liability'),
        _s('restructured'), _s('has_female_director'), _s('has_male_director'),
        _s('contract_uploaded'), _s('credit_life_insurer'), _s('first_loan', 100),
        _s('referral'), _s('willingness_to_pay', 100), _s('capability_to_pay', 100),
        _s('loan_risk_category', 100), _f('total_interest_paid'),
        _f('outstanding_interest_balance'), _s('reassigned'), _s('flexi_loan'),
        _s('school_area'), _s('contracting_date', 50), _s('school_type', 100),
        _f('principal_written_off'), _f('interest_written_off'), _s('loan_number', 50),
        _s('team_leader'), _s('region', 100), _f('excise_duty'),
    ],
    'write_offs': lambda: [
        _s('date', 50), _s('loan_id'), _s('payment_schedule_id'),
        _f('principal_amount_written_off'), _f('interest_amount_written_off'),
        _f('vehicle_insurance_amount_written_off'), _f('penalty_amount_written_off'),
        _f('total_amount'), _s('created_at_sheet', 50), _s('created_by'), _s('region', 100),
        _s('ssl_id', 100), _s('loan_or_payment_level', 50),
    ],
}

INDEXES = {
    'enrollment_verifications': ['credit_application_id'],
    'mpesa_bank_statements': ['credit_application_id'],
    'other_supporting_docs': ['credit_application_id'],
    'vendor_disbursement_details': ['credit_application_id'],
    'financial_surveys': ['credit_application_id'],
    'direct_payment_schedules': ['direct_loan_id'],
    'principal_tranches': ['direct_loan_id'],
    'direct_lending_processing': ['direct_loan_id'],
    'impact_surveys': ['credit_application_id'],
    'loans': ['borrower_id'],
    'write_offs': ['loan_id'],
}

# Columnas si/no de 001: la hoja a veces trae texto libre en lugar de Yes/No
YES_NO_COLUMNS = {
    'borrowers': ['moe_certified'],
    'directors': ['insured_for_credit_life'],
    'crb_consents': ['agreement'],
    'referrers': ['referral_reward_paid'],
    'credit_applications': ['school_crb_available'],
    'active_debts': ['listed_on_crb'],
    'investment_committees': ['school_is_profitable', 'audited_financials_provided'],
    'home_visits': [
        'is_spouse_involved_in_school',
        'does_spouse_have_other_income',
        'is_director_trained_educator',
    ],
    'asset_titles': ['to_be_used_as_security'],
}


def _resize_yes_no(inspector, old: int, new: int) -> None:
    for table, columns in YES_NO_COLUMNS.items():
        if not inspector.has_table(table):
            continue
        for column in columns:
            op.alter_column(
                table,
                column,
                existing_type=sa.String(length=old),
                type_=sa.String(length=new),
                existing_nullable=True,
            )


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    _resize_yes_no(inspector, 3, 255)

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
        for column in INDEXES[table]:
            op.create_index(op.f(f'ix_{table}_{column}'), table, [column], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table in reversed(list(TABLES)):
        if inspector.has_table(table):
            op.drop_table(table)

    # Valores de mas de 3 caracteres hacen fallar este paso; hay que limpiarlos antes
    _resize_yes_no(inspector, 255, 3)
