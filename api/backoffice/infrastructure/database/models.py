"""
Modelos de base de datos (ORM).

Cada tabla de negocio replica una hoja del spreadsheet de back office.
Las columnas tecnicas de sincronizacion viven en SheetSyncMixin.
"""
from sqlalchemy import Column, String, Integer, Float, DateTime, Text, Boolean
from sqlalchemy.sql import func

from backoffice.infrastructure.database.session import Base


class SheetSyncMixin:
    """
    Columnas comunes a toda entidad sincronizada con Google Sheets.

    - sheet_id: identificador de la fila en la hoja (columna "ID"), unico
    - synced: True cuando la fila de la hoja refleja el registro
    - sync_attempted_at: marca de escritura en curso hacia la hoja
    """

    id = Column(Integer, primary_key=True, index=True)
    sheet_id = Column(String(255), nullable=True, unique=True, index=True)
    synced = Column(Boolean, nullable=False, default=False, index=True)
    sync_attempted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<{type(self).__name__}(id={self.id}, sheet_id={self.sheet_id}, synced={self.synced})>"


class BorrowerModel(SheetSyncMixin, Base):
    """Prestatario (escuela o persona) registrado en la hoja Borrowers."""

    __tablename__ = "borrowers"

    ssl_id = Column(String(100), nullable=True)
    customer_type = Column(String(100), nullable=True)
    type = Column(String(100), nullable=True)
    name = Column(String(255), nullable=True, index=True)
    location_description = Column(Text, nullable=True)
    entity_type = Column(String(100), nullable=True)
    year_founded = Column(Integer, nullable=True)
    payment_method = Column(String(100), nullable=True)
    bank_name = Column(String(255), nullable=True)
    account_name = Column(String(255), nullable=True)
    account_number = Column(String(100), nullable=True)
    primary_phone = Column(String(50), nullable=True)
    status = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    county = Column(String(100), nullable=True)
    moe_certified = Column(String(255), nullable=True)
    created_by = Column(String(255), nullable=True)


class DirectorModel(SheetSyncMixin, Base):
    """Director de una escuela prestataria."""

    __tablename__ = "directors"

    borrower_id = Column(String(255), nullable=True, index=True)
    name = Column(String(255), nullable=True)
    national_id_number = Column(String(100), nullable=True)
    kra_pin_number = Column(String(100), nullable=True)
    phone_number = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    gender = Column(String(50), nullable=True)
    role_in_school = Column(String(100), nullable=True)
    status = Column(String(100), nullable=True)
    date_of_birth = Column(String(50), nullable=True)
    education_level = Column(String(100), nullable=True)
    insured_for_credit_life = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)


class CrbConsentModel(SheetSyncMixin, Base):
    """Consentimiento firmado para consultar el buro de credito (CRB)."""

    __tablename__ = "crb_consents"

    borrower_id = Column(String(255), nullable=True, index=True)
    agreement = Column(String(255), nullable=True)
    signed_by_name = Column(String(255), nullable=True)
    date = Column(String(50), nullable=True)
    role_in_organization = Column(String(255), nullable=True)
    signature = Column(Text, nullable=True)


class ReferrerModel(SheetSyncMixin, Base):
    """Referidor de una escuela y su pago de recompensa."""

    __tablename__ = "referrers"

    school_id = Column(String(255), nullable=True, index=True)
    referrer_name = Column(String(255), nullable=True)
    mpesa_number = Column(String(50), nullable=True)
    referral_reward_paid = Column(String(255), nullable=True)
    date_paid = Column(String(50), nullable=True)
    amount_paid = Column(Float, nullable=True)
    proof_of_payment = Column(Text, nullable=True)


class CreditApplicationModel(SheetSyncMixin, Base):
    """Solicitud de credito."""

    __tablename__ = "credit_applications"

    borrower_id = Column(String(255), nullable=True, index=True)
    customer_type = Column(String(100), nullable=True)
    application_start_date = Column(String(50), nullable=True)
    credit_type = Column(String(100), nullable=True)
    total_amount_requested = Column(Float, nullable=True)
    status = Column(String(100), nullable=True)
    referred_by = Column(String(255), nullable=True)
    current_cost_of_capital = Column(Float, nullable=True)
    checks_collected = Column(Integer, nullable=True)
    checks_needed_for_loan = Column(Integer, nullable=True)
    school_crb_available = Column(String(255), nullable=True)
    comments_on_checks = Column(Text, nullable=True)


class ActiveDebtModel(SheetSyncMixin, Base):
    """Deuda vigente declarada en una solicitud de credito."""

    __tablename__ = "active_debts"

    credit_application_id = Column(String(255), nullable=True, index=True)
    debt_status = Column(String(100), nullable=True)
    listed_on_crb = Column(String(255), nullable=True)
    personal_loan_or_school_loan = Column(String(100), nullable=True)
    lender = Column(String(255), nullable=True)
    date_loan_taken = Column(String(50), nullable=True)
    final_due_date = Column(String(50), nullable=True)
    total_loan_amount = Column(Float, nullable=True)
    balance = Column(Float, nullable=True)
    amount_overdue = Column(Float, nullable=True)
    monthly_payment = Column(Float, nullable=True)


class FeePlanModel(SheetSyncMixin, Base):
    """Plan de cuotas escolares adjunto a una solicitud."""

    __tablename__ = "fee_plans"

    credit_application_id = Column(String(255), nullable=True, index=True)
    school_year = Column(String(50), nullable=True)
    photo = Column(Text, nullable=True)
    file = Column(Text, nullable=True)


class AuditedFinancialModel(SheetSyncMixin, Base):
    """Estado financiero auditado adjunto a una solicitud."""

    __tablename__ = "audited_financials"

    credit_application_id = Column(String(255), nullable=True, index=True)
    statement_type = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    file = Column(Text, nullable=True)


class StudentBreakdownModel(SheetSyncMixin, Base):
    """Desglose de alumnos y cuotas por grado."""

    __tablename__ = "student_breakdowns"

    credit_application_id = Column(String(255), nullable=True, index=True)
    fee_type = Column(String(100), nullable=True)
    term = Column(String(50), nullable=True)
    grade = Column(String(50), nullable=True)
    number_of_students = Column(Integer, nullable=True)
    fee = Column(Float, nullable=True)
    total_revenue = Column(Float, nullable=True)


class InvestmentCommitteeModel(SheetSyncMixin, Base):
    """Resumen del comite de inversion para una solicitud."""

    __tablename__ = "investment_committees"

    credit_application_id = Column(String(255), nullable=True, index=True)
    school_id = Column(String(255), nullable=True)
    type_of_school = Column(String(100), nullable=True)
    school_is_profitable = Column(String(255), nullable=True)
    audited_financials_provided = Column(String(255), nullable=True)
    collections_rate = Column(Float, nullable=True)
    average_school_fees_charged = Column(Float, nullable=True)
    debt_ratio = Column(Float, nullable=True)
    loan_length_months = Column(Integer, nullable=True)
    annual_reducing_interest_rate = Column(Float, nullable=True)
    maximum_monthly_payment = Column(Float, nullable=True)
    maximum_loan = Column(Float, nullable=True)


class HomeVisitModel(SheetSyncMixin, Base):
    """Visita domiciliaria al director de la escuela."""

    __tablename__ = "home_visits"

    credit_application_id = Column(String(255), nullable=True, index=True)
    user_id = Column(String(255), nullable=True)
    county = Column(String(100), nullable=True)
    address_details = Column(Text, nullable=True)
    location_pin = Column(String(255), nullable=True)
    own_or_rent = Column(String(50), nullable=True)
    how_many_years_stayed = Column(Integer, nullable=True)
    marital_status = Column(String(50), nullable=True)
    how_many_children = Column(Integer, nullable=True)
    is_spouse_involved_in_school = Column(String(255), nullable=True)
    does_spouse_have_other_income = Column(String(255), nullable=True)
    if_yes_how_much_per_month = Column(Float, nullable=True)
    how_is_neighborhood = Column(Text, nullable=True)
    is_director_trained_educator = Column(String(255), nullable=True)
    other_notes = Column(Text, nullable=True)


class AssetTitleModel(SheetSyncMixin, Base):
    """Activo (terreno o vehiculo) ofrecido como garantia."""

    __tablename__ = "asset_titles"

    credit_application_id = Column(String(255), nullable=True, index=True)
    type = Column(String(100), nullable=True)
    to_be_used_as_security = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    legal_owner = Column(String(255), nullable=True)
    plot_number = Column(String(100), nullable=True)
    license_plate_number = Column(String(50), nullable=True)
    initial_estimated_value = Column(Float, nullable=True)
    evaluators_market_value = Column(Float, nullable=True)
    evaluators_forced_value = Column(Float, nullable=True)
    year_of_manufacture = Column(Integer, nullable=True)


class ContractDetailModel(SheetSyncMixin, Base):
    """Condiciones contractuales solicitadas."""

    __tablename__ = "contract_details"

    credit_application_id = Column(String(255), nullable=True, index=True)
    loan_length_requested_months = Column(Integer, nullable=True)
    months_school_requests_forgiveness = Column(String(255), nullable=True)
    disbursal_date_requested = Column(String(50), nullable=True)
    created_by = Column(String(255), nullable=True)


class CreditApplicationCommentModel(SheetSyncMixin, Base):
    """Comentario sobre una solicitud de credito."""

    __tablename__ = "credit_application_comments"

    credit_application_id = Column(String(255), nullable=True, index=True)
    commenter_type = Column(String(100), nullable=True)
    commenter_name = Column(String(255), nullable=True)
    comments = Column(Text, nullable=True)


class PayrollModel(SheetSyncMixin, Base):
    """Linea de nomina declarada por la escuela."""

    __tablename__ = "payrolls"

    credit_application_id = Column(String(255), nullable=True, index=True)
    role = Column(String(255), nullable=True)
    number_of_employees_in_role = Column(Integer, nullable=True)
    monthly_salary = Column(Float, nullable=True)
    months_per_year_paid = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    total_annual_cost = Column(Float, nullable=True)


class RestructuringModel(SheetSyncMixin, Base):
    """Reestructuracion de un prestamo."""

    __tablename__ = "restructurings"

    loan_id = Column(String(255), nullable=True, index=True)
    date = Column(String(50), nullable=True)
    reason = Column(Text, nullable=True)
    previous_principal_amount = Column(Float, nullable=True)
    new_principal_amount = Column(Float, nullable=True)
    previous_monthly_payment = Column(Float, nullable=True)
    new_monthly_payment = Column(Float, nullable=True)
    previous_number_of_months = Column(Integer, nullable=True)
    new_number_of_months = Column(Integer, nullable=True)
    approved_by = Column(String(255), nullable=True)


class EnrollmentVerificationModel(SheetSyncMixin, Base):
    """Verificacion de matricula declarada en una solicitud."""

    __tablename__ = "enrollment_verifications"

    credit_application_id = Column(String(255), nullable=True, index=True)
    sub_county_enrollment_report = Column(Text, nullable=True)
    enrollment_report = Column(Text, nullable=True)
    number_of_students_this_year = Column(Integer, nullable=True)
    number_of_students_last_year = Column(Integer, nullable=True)
    number_of_students_two_years_ago = Column(Integer, nullable=True)
    created_at_sheet = Column(String(50), nullable=True)


class MpesaBankStatementModel(SheetSyncMixin, Base):
    """Extracto bancario o de M-Pesa adjunto a una solicitud."""

    __tablename__ = "mpesa_bank_statements"

    credit_application_id = Column(String(255), nullable=True, index=True)
    personal_or_business_account = Column(String(100), nullable=True)
    type = Column(String(100), nullable=True)
    account_details = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    statement = Column(Text, nullable=True)
    statement_start_date = Column(String(50), nullable=True)
    statement_end_date = Column(String(50), nullable=True)
    total_revenue = Column(Float, nullable=True)
    converted_excel_file = Column(Text, nullable=True)
    created_at_sheet = Column(String(50), nullable=True)


class OtherSupportingDocModel(SheetSyncMixin, Base):
    """Documento de respaldo adicional de una solicitud."""

    __tablename__ = "other_supporting_docs"

    credit_application_id = Column(String(255), nullable=True, index=True)
    document_type = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    file = Column(Text, nullable=True)
    image = Column(Text, nullable=True)
    created_at_sheet = Column(String(50), nullable=True)


class VendorDisbursementDetailModel(SheetSyncMixin, Base):
    """Cuenta del proveedor a la que se desembolsa el prestamo."""

    __tablename__ = "vendor_disbursement_details"

    credit_application_id = Column(String(255), nullable=True, index=True)
    vendor_payment_method = Column(String(100), nullable=True)
    phone_number_for_mpesa_payment = Column(String(50), nullable=True)
    manager_verification = Column(String(255), nullable=True)
    document_verifying_payment_account = Column(Text, nullable=True)
    bank_name = Column(String(255), nullable=True)
    account_name = Column(String(255), nullable=True)
    account_number = Column(String(100), nullable=True)
    phone_number_for_bank_account = Column(String(50), nullable=True)
    paybill_number_and_account = Column(String(255), nullable=True)
    buy_goods_till = Column(String(100), nullable=True)


class FinancialSurveyModel(SheetSyncMixin, Base):
    """Encuesta financiera de la escuela."""

    __tablename__ = "financial_surveys"

    credit_application_id = Column(String(255), nullable=True, index=True)
    survey_date = Column(String(50), nullable=True)
    director_id = Column(String(255), nullable=True)
    created_by = Column(String(255), nullable=True)
    school_grades = Column(String(255), nullable=True)
    is_school_apbet_or_private = Column(String(100), nullable=True)
    is_church_supported = Column(String(255), nullable=True)
    church_name = Column(String(255), nullable=True)
    church_annual_support = Column(Float, nullable=True)
    facility_ownership = Column(String(100), nullable=True)
    annual_lease_rent = Column(Float, nullable=True)
    owner_annual_withdrawal = Column(Float, nullable=True)
    monthly_debt_payments = Column(Float, nullable=True)
    provides_meals = Column(String(255), nullable=True)
    termly_food_expense = Column(Float, nullable=True)
    monthly_electricity_expense = Column(Float, nullable=True)
    monthly_water_expense = Column(Float, nullable=True)
    has_vehicles = Column(String(255), nullable=True)
    sponsored_children_count = Column(Integer, nullable=True)
    annual_sponsorship_revenue = Column(Float, nullable=True)
    previous_year_student_count = Column(Integer, nullable=True)
    next_year_expected_students = Column(Integer, nullable=True)
    current_bank_balance = Column(Float, nullable=True)
    years_at_current_premises = Column(Integer, nullable=True)
    years_with_bank_account = Column(Integer, nullable=True)
    has_audited_financials = Column(String(255), nullable=True)
    branch_count = Column(Integer, nullable=True)


class DirectPaymentScheduleModel(SheetSyncMixin, Base):
    """Cuota del calendario de pagos de un prestamo directo."""

    __tablename__ = "direct_payment_schedules"

    direct_loan_id = Column(String(255), nullable=True, index=True)
    borrower_type = Column(String(100), nullable=True)
    borrower_id = Column(String(255), nullable=True)
    due_date = Column(String(50), nullable=True)
    holiday_forgiveness = Column(String(255), nullable=True)
    amount_still_unpaid = Column(Float, nullable=True)
    days_late = Column(Integer, nullable=True)
    date_fully_paid = Column(String(50), nullable=True)
    payment_overdue = Column(String(255), nullable=True)
    par14 = Column(String(50), nullable=True)
    par30 = Column(String(50), nullable=True)
    par60 = Column(String(50), nullable=True)
    par90 = Column(String(50), nullable=True)
    par120 = Column(String(50), nullable=True)
    check_cashing_status = Column(String(100), nullable=True)
    debt_type = Column(String(100), nullable=True)
    notes_on_payment = Column(Text, nullable=True)
    adjusted_month = Column(String(50), nullable=True)
    credit_life_insurance_fees_charged = Column(Float, nullable=True)
    interest_charged_without_forgiveness = Column(Float, nullable=True)
    principal_repayment_without_forgiveness = Column(Float, nullable=True)
    vehicle_insurance_payment_due_without_forgiveness = Column(Float, nullable=True)
    vehicle_insurance_payment_due = Column(Float, nullable=True)
    interest_repayment_due = Column(Float, nullable=True)
    principal_repayment_due = Column(Float, nullable=True)
    amount_due = Column(Float, nullable=True)
    amount_paid = Column(Float, nullable=True)
    created_by = Column(String(255), nullable=True)
    created_at_sheet = Column(String(50), nullable=True)
    ssl_id = Column(String(100), nullable=True)
    date_to_bank_check = Column(String(50), nullable=True)
    loan_category = Column(String(100), nullable=True)
    write_off_date = Column(String(50), nullable=True)
    interest_suspended = Column(String(255), nullable=True)
    region = Column(String(100), nullable=True)
    date_for_mpesa_bank_transfer = Column(String(50), nullable=True)


class PrincipalTrancheModel(SheetSyncMixin, Base):
    """Tramo de principal desembolsado de un prestamo directo."""

    __tablename__ = "principal_tranches"

    direct_loan_id = Column(String(255), nullable=True, index=True)
    contract_signing_date = Column(String(50), nullable=True)
    amount = Column(Float, nullable=True)
    ssl_id = Column(String(100), nullable=True)
    initial_disbursement_date_in_contract = Column(String(50), nullable=True)
    date_tranche_has_gone_par30 = Column(String(50), nullable=True)
    created_by = Column(String(255), nullable=True)
    has_female_director = Column(String(255), nullable=True)
    loan_type = Column(String(100), nullable=True)
    reassigned = Column(String(255), nullable=True)
    team_leader = Column(String(255), nullable=True)
    region = Column(String(100), nullable=True)


class DirectLendingProcessingModel(SheetSyncMixin, Base):
    """Pago recibido y su reparto entre cuota, interes, principal y seguro."""

    __tablename__ = "direct_lending_processing"

    payment_type = Column(String(100), nullable=True)
    payment_source = Column(String(100), nullable=True)
    borrower_type = Column(String(100), nullable=True)
    borrower_id = Column(String(255), nullable=True)
    direct_loan_id = Column(String(255), nullable=True, index=True)
    payment_schedule_id = Column(String(255), nullable=True)
    payment_date = Column(String(50), nullable=True)
    amount_paid = Column(Float, nullable=True)
    payment_reference = Column(String(255), nullable=True)
    installment_payment_amount = Column(Float, nullable=True)
    installment_vehicle_insurance_premium_amount = Column(Float, nullable=True)
    installment_vehicle_insurance_surcharge_amount = Column(Float, nullable=True)
    installment_interest_amount = Column(Float, nullable=True)
    installment_principal_amount = Column(Float, nullable=True)
    vehicle_insurance_premium_paid = Column(Float, nullable=True)
    vehicle_insurance_surcharge_paid = Column(Float, nullable=True)
    interest_paid = Column(Float, nullable=True)
    principal_paid = Column(Float, nullable=True)
    created_by = Column(String(255), nullable=True)
    ssl_id = Column(String(100), nullable=True)
    region = Column(String(100), nullable=True)


class ImpactSurveyModel(SheetSyncMixin, Base):
    """Encuesta de impacto: infraestructura y alumnado de la escuela."""

    __tablename__ = "impact_surveys"

    credit_application_id = Column(String(255), nullable=True, index=True)
    survey_date = Column(String(50), nullable=True)
    director_id = Column(String(255), nullable=True)
    created_by = Column(String(255), nullable=True)
    is_school_apbet_or_private = Column(String(100), nullable=True)
    school_area = Column(String(255), nullable=True)
    grade_levels_served = Column(String(255), nullable=True)
    number_of_students = Column(Integer, nullable=True)
    number_of_classrooms = Column(Integer, nullable=True)
    number_of_teachers = Column(Integer, nullable=True)
    has_running_water = Column(String(255), nullable=True)
    has_electricity = Column(String(255), nullable=True)
    provides_meals = Column(String(255), nullable=True)
    owns_transport_vehicles = Column(String(255), nullable=True)
    number_of_vehicles = Column(Integer, nullable=True)
    has_library = Column(String(255), nullable=True)
    has_computer_lab = Column(String(255), nullable=True)
    female_students = Column(Integer, nullable=True)
    male_students = Column(Integer, nullable=True)
    sent_home_for_fees_percentage = Column(Float, nullable=True)


class LoanModel(SheetSyncMixin, Base):
    """Prestamo desembolsado y su estado de cartera."""

    __tablename__ = "loans"

    loan_type = Column(String(100), nullable=True)
    loan_purpose = Column(Text, nullable=True)
    borrower_type = Column(String(100), nullable=True)
    borrower_id = Column(String(255), nullable=True, index=True)
    borrower_name = Column(String(255), nullable=True)
    principal_amount = Column(Float, nullable=True)
    interest_type = Column(String(100), nullable=True)
    annual_declining_interest = Column(Float, nullable=True)
    annual_flat_interest = Column(Float, nullable=True)
    processing_fee_percentage = Column(Float, nullable=True)
    credit_life_insurance_percentage = Column(Float, nullable=True)
    securitization_fee = Column(Float, nullable=True)
    processing_fee = Column(Float, nullable=True)
    credit_life_insurance_fee = Column(Float, nullable=True)
    number_of_months = Column(Integer, nullable=True)
    daily_penalty = Column(Float, nullable=True)
    amount_to_disburse = Column(Float, nullable=True)
    total_interest_charged = Column(Float, nullable=True)
    total_interest_to_pay = Column(Float, nullable=True)
    total_principal_to_pay = Column(Float, nullable=True)
    credit_application_id = Column(String(255), nullable=True)
    first_payment_period = Column(String(50), nullable=True)
    created_by = Column(String(255), nullable=True)
    total_penalties_assessed = Column(Float, nullable=True)
    total_penalties_paid = Column(Float, nullable=True)
    penalties_still_due = Column(Float, nullable=True)
    ssl_id = Column(String(100), nullable=True)
    loan_overdue = Column(String(255), nullable=True)
    par14 = Column(String(50), nullable=True)
    par30 = Column(String(50), nullable=True)
    par60 = Column(String(50), nullable=True)
    par90 = Column(String(50), nullable=True)
    par120 = Column(String(50), nullable=True)
    amount_overdue = Column(Float, nullable=True)
    loan_fully_paid = Column(String(255), nullable=True)
    loan_status = Column(String(100), nullable=True)
    total_amount_due_to_date = Column(Float, nullable=True)
    principal_paid_to_date = Column(Float, nullable=True)
    outstanding_principal_balance = Column(Float, nullable=True)
    percent_disbursed = Column(Float, nullable=True)
    days_late = Column(Integer, nullable=True)
    total_unpaid_liability = Column(Float, nullable=True)
    restructured = Column(String(255), nullable=True)
    has_female_director = Column(String(255), nullable=True)
    has_male_director = Column(String(255), nullable=True)
    contract_uploaded = Column(String(255), nullable=True)
    credit_life_insurer = Column(String(255), nullable=True)
    first_loan = Column(String(100), nullable=True)
    referral = Column(String(255), nullable=True)
    willingness_to_pay = Column(String(100), nullable=True)
    capability_to_pay = Column(String(100), nullable=True)
    loan_risk_category = Column(String(100), nullable=True)
    total_interest_paid = Column(Float, nullable=True)
    outstanding_interest_balance = Column(Float, nullable=True)
    reassigned = Column(String(255), nullable=True)
    flexi_loan = Column(String(255), nullable=True)
    school_area = Column(String(255), nullable=True)
    contracting_date = Column(String(50), nullable=True)
    school_type = Column(String(100), nullable=True)
    principal_written_off = Column(Float, nullable=True)
    interest_written_off = Column(Float, nullable=True)
    loan_number = Column(String(50), nullable=True)
    team_leader = Column(String(255), nullable=True)
    region = Column(String(100), nullable=True)
    excise_duty = Column(Float, nullable=True)


class WriteOffModel(SheetSyncMixin, Base):
    """Castigo de un prestamo o de una cuota."""

    __tablename__ = "write_offs"

    date = Column(String(50), nullable=True)
    loan_id = Column(String(255), nullable=True, index=True)
    payment_schedule_id = Column(String(255), nullable=True)
    principal_amount_written_off = Column(Float, nullable=True)
    interest_amount_written_off = Column(Float, nullable=True)
    vehicle_insurance_amount_written_off = Column(Float, nullable=True)
    penalty_amount_written_off = Column(Float, nullable=True)
    total_amount = Column(Float, nullable=True)
    created_at_sheet = Column(String(50), nullable=True)
    created_by = Column(String(255), nullable=True)
    region = Column(String(100), nullable=True)
    ssl_id = Column(String(100), nullable=True)
    loan_or_payment_level = Column(String(50), nullable=True)
