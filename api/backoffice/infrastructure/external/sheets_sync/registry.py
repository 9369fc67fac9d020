"""
Registro ordenado de entidades sincronizadas.

El orden importa: el scheduler migra primero las entidades padre
(prestatarios, solicitudes) y luego las dependientes.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from backoffice.infrastructure.database import models
from backoffice.shared.exceptions.domain import MigrationNotFoundException

from .sync_config import IMPORT_POLICY_UPSERT, EntitySyncConfig, slugify
from .types import INTEGER, NUMBER, YES_NO, FieldMapping as F


def _id(column: str = "ID") -> F:
    return F(column, "sheet_id")


def _created_by() -> F:
    return F("Created By", "created_by")


def _created_at() -> F:
    # Fecha de alta tal como la escribe la hoja; created_at es la del registro local
    return F("Created At", "created_at_sheet")


BORROWERS = EntitySyncConfig(
    display_name="Borrowers",
    sheet_name="Borrowers",
    model=models.BorrowerModel,
    id_prefix="B",
    field_mappings=(
        _id(),
        F("SSL ID", "ssl_id"),
        F("Customer Type", "customer_type"),
        F("Type", "type"),
        F("Name", "name"),
        F("Location Description", "location_description"),
        F("Entity Type", "entity_type"),
        F("Year Founded", "year_founded", INTEGER),
        F("Payment Method", "payment_method"),
        F("Bank Name", "bank_name"),
        F("Account Name", "account_name"),
        F("Account Number", "account_number"),
        F("Primary Phone for Borrower", "primary_phone"),
        F("Status", "status"),
        F("Notes", "notes"),
        F("County", "county"),
        F("Certified by the MOE?", "moe_certified", YES_NO),
        _created_by(),
    ),
)

DIRECTORS = EntitySyncConfig(
    display_name="Directors",
    sheet_name="Users",
    model=models.DirectorModel,
    id_prefix="U",
    field_mappings=(
        _id(),
        F("Borrower ID", "borrower_id"),
        F("Name", "name"),
        F("National ID Number", "national_id_number"),
        F("KRA Pin Number", "kra_pin_number"),
        F("Phone Number", "phone_number"),
        F("Email", "email"),
        F("Gender", "gender"),
        F("Role in School", "role_in_school"),
        F("Status", "status"),
        F("Date of Birth", "date_of_birth"),
        F("Education Level", "education_level"),
        F("Insured for Credit Life?", "insured_for_credit_life", YES_NO),
        F("Address", "address"),
    ),
)

CRB_CONSENTS = EntitySyncConfig(
    display_name="CRB Consents",
    sheet_name="CRB Consent",
    model=models.CrbConsentModel,
    id_prefix="CRB",
    field_mappings=(
        _id(),
        F("Borrower ID", "borrower_id"),
        F("Agreement", "agreement", YES_NO),
        F("Signed By Name", "signed_by_name"),
        F("Date", "date"),
        F("Role in Organization", "role_in_organization"),
        F("Signature", "signature"),
    ),
)

REFERRERS = EntitySyncConfig(
    display_name="Referrers",
    sheet_name="Referrers",
    model=models.ReferrerModel,
    id_prefix="REF",
    field_mappings=(
        _id(),
        F("School ID", "school_id"),
        F("Referrer Name", "referrer_name"),
        F("M Pesa Number", "mpesa_number"),
        F("Referral Reward Paid?", "referral_reward_paid", YES_NO),
        F("Date Paid", "date_paid"),
        F("Amount Paid", "amount_paid", NUMBER),
        F("Proof of Payment", "proof_of_payment"),
    ),
)

CREDIT_APPLICATIONS = EntitySyncConfig(
    display_name="Credit Applications",
    sheet_name="Credit Applications",
    model=models.CreditApplicationModel,
    id_prefix="CA",
    field_mappings=(
        _id(),
        F("Borrower ID", "borrower_id"),
        F("Customer Type", "customer_type"),
        F("Application Start Date", "application_start_date"),
        F("Credit Type", "credit_type"),
        F("Total Amount Requested", "total_amount_requested", NUMBER),
        F("Status", "status"),
        F("Referred By", "referred_by"),
        F("Current Cost of Capital", "current_cost_of_capital", NUMBER),
        F("Checks Collected", "checks_collected", INTEGER),
        F("Checks Needed for Loan", "checks_needed_for_loan", INTEGER),
        F("School CRB Available?", "school_crb_available", YES_NO),
        F("Comments on Checks", "comments_on_checks"),
    ),
)

ACTIVE_DEBTS = EntitySyncConfig(
    display_name="Active Debts",
    sheet_name="Active Debt",
    model=models.ActiveDebtModel,
    id_prefix="AD",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Debt Status", "debt_status"),
        F("Listed on CRB?", "listed_on_crb", YES_NO),
        F("Personal Loan or School Loan", "personal_loan_or_school_loan"),
        F("Lender", "lender"),
        F("Date Loan Taken", "date_loan_taken"),
        F("Final Due Date", "final_due_date"),
        F("Total Loan Amount", "total_loan_amount", NUMBER),
        F("Balance", "balance", NUMBER),
        F("Amount Overdue", "amount_overdue", NUMBER),
        F("Monthly Payment", "monthly_payment", NUMBER),
    ),
)

FEE_PLANS = EntitySyncConfig(
    display_name="Fee Plans",
    sheet_name="Fee Plan Documents",
    model=models.FeePlanModel,
    id_prefix="FP",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("School Year", "school_year"),
        F("Photo", "photo"),
        F("File", "file"),
    ),
)

AUDITED_FINANCIALS = EntitySyncConfig(
    display_name="Audited Financials",
    sheet_name="Audited Financial Statements",
    model=models.AuditedFinancialModel,
    id_prefix="AF",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Statement Type", "statement_type"),
        F("Notes", "notes"),
        F("File", "file"),
    ),
)

STUDENT_BREAKDOWN = EntitySyncConfig(
    display_name="Student Breakdown",
    sheet_name="Student Breakdown",
    model=models.StudentBreakdownModel,
    id_prefix="SB",
    field_mappings=(
        _id(),
        F("Credit Application", "credit_application_id"),
        F("Fee Type", "fee_type"),
        F("Term ID", "term"),
        F("Grade", "grade"),
        F("Number of Students", "number_of_students", INTEGER),
        F("Fee", "fee", NUMBER),
        F("Total Revenue", "total_revenue", NUMBER),
    ),
)

INVESTMENT_COMMITTEE = EntitySyncConfig(
    display_name="Investment Committee",
    sheet_name="Investment Committee",
    model=models.InvestmentCommitteeModel,
    id_prefix="IC",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("School ID", "school_id"),
        F("Type of School", "type_of_school"),
        F("School is profitable?", "school_is_profitable", YES_NO),
        F("Audited financials provided?", "audited_financials_provided", YES_NO),
        F("Collections Rate", "collections_rate", NUMBER),
        F("Average School Fees Charged", "average_school_fees_charged", NUMBER),
        F("Debt Ratio", "debt_ratio", NUMBER),
        F("Loan Length (Months)", "loan_length_months", INTEGER),
        F("Annual Reducing Interest Rate", "annual_reducing_interest_rate", NUMBER),
        F("Maximum Monthly Payment", "maximum_monthly_payment", NUMBER),
        F("Maximum Loan", "maximum_loan", NUMBER),
    ),
)

HOME_VISITS = EntitySyncConfig(
    display_name="Home Visits",
    sheet_name="Home Visits",
    model=models.HomeVisitModel,
    id_prefix="HV",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("User ID", "user_id"),
        F("County", "county"),
        # La hoja trae el espacio final en el encabezado
        F("Address Details ", "address_details"),
        F("Location Pin", "location_pin"),
        F("Own or Rent", "own_or_rent"),
        F("How many years have they stayed there?", "how_many_years_stayed", INTEGER),
        F("Marital Status", "marital_status"),
        F("How many children does the director have?", "how_many_children", INTEGER),
        F("Is the spouse involved in running school?", "is_spouse_involved_in_school", YES_NO),
        F("Does the spouse have other income?", "does_spouse_have_other_income", YES_NO),
        F("If yes, how much per month? ", "if_yes_how_much_per_month", NUMBER),
        F("How is the neighborhood? Provide general comments.", "how_is_neighborhood"),
        F("Is the director a trained educator?", "is_director_trained_educator", YES_NO),
        F("Other Notes", "other_notes"),
    ),
)

ASSET_TITLES = EntitySyncConfig(
    display_name="Asset Titles",
    sheet_name="Asset Titles",
    model=models.AssetTitleModel,
    id_prefix="AT",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Type", "type"),
        F("To Be Used As Security?", "to_be_used_as_security", YES_NO),
        F("Description", "description"),
        F("Legal Owner", "legal_owner"),
        F("Plot Number", "plot_number"),
        F("License Plate Number", "license_plate_number"),
        F("Initial Estimated Value (KES)", "initial_estimated_value", NUMBER),
        F("Evaluator's Market Value", "evaluators_market_value", NUMBER),
        F("Evaluator's Forced Value", "evaluators_forced_value", NUMBER),
        F("Year of Manufacture", "year_of_manufacture", INTEGER),
    ),
)

CONTRACT_DETAILS = EntitySyncConfig(
    display_name="Contract Details",
    sheet_name="Contract Details",
    model=models.ContractDetailModel,
    id_prefix="CD",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Loan Length Requested (Months)", "loan_length_requested_months", INTEGER),
        F("Months the School Requests Forgiveness", "months_school_requests_forgiveness"),
        F("Disbursal Date Requested", "disbursal_date_requested"),
        _created_by(),
    ),
)

CREDIT_APPLICATION_COMMENTS = EntitySyncConfig(
    display_name="Credit Application Comments",
    sheet_name="Credit Application Comments",
    model=models.CreditApplicationCommentModel,
    id_prefix="CAC",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Commenter Type", "commenter_type"),
        F("Comments", "comments"),
        F("Commenter Name", "commenter_name"),
    ),
)

PAYROLL = EntitySyncConfig(
    display_name="Payroll",
    sheet_name="Payroll",
    model=models.PayrollModel,
    id_prefix="P",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Role", "role"),
        F("Number of Employees in Role", "number_of_employees_in_role", INTEGER),
        F("Monthly Salary", "monthly_salary", NUMBER),
        F("Months per Year the Role is Paid", "months_per_year_paid", INTEGER),
        F("Notes", "notes"),
        F("Total Annual Cost", "total_annual_cost", NUMBER),
    ),
)

ENROLLMENT_VERIFICATION = EntitySyncConfig(
    display_name="Enrollment Verification",
    sheet_name="Enrollment Verification",
    model=models.EnrollmentVerificationModel,
    id_prefix="EV",
    filter_column="Credit Application ID",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Sub County Enrollment Report", "sub_county_enrollment_report"),
        F("Enrollment Report", "enrollment_report"),
        F("Number of Students This Year", "number_of_students_this_year", INTEGER),
        F("Number of students last year", "number_of_students_last_year", INTEGER),
        F("Number of students two years ago", "number_of_students_two_years_ago", INTEGER),
        _created_at(),
    ),
)

# El endpoint historico usa el singular: /mpesa-bank-statement-migration
MPESA_BANK_STATEMENTS = EntitySyncConfig(
    display_name="Mpesa Bank Statements",
    sheet_name="Mpesa Bank Statements",
    model=models.MpesaBankStatementModel,
    id_prefix="MBS",
    slug="mpesa-bank-statement",
    filter_column="Credit Application",
    field_mappings=(
        _id(),
        F("Credit Application", "credit_application_id"),
        F("Personal Or Business Account", "personal_or_business_account"),
        F("Type", "type"),
        F("Account Details", "account_details"),
        F("Description", "description"),
        F("Statement", "statement"),
        F("Statement Start Date", "statement_start_date"),
        F("Statement End Date", "statement_end_date"),
        F("Total Revenue", "total_revenue", NUMBER),
        F("Converted Excel File", "converted_excel_file"),
        _created_at(),
    ),
)

OTHER_SUPPORTING_DOCS = EntitySyncConfig(
    display_name="Other Supporting Docs",
    sheet_name="Other Supporting Documents",
    model=models.OtherSupportingDocModel,
    id_prefix="OSD",
    filter_column="Credit Application ID",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Document Type", "document_type"),
        F("Notes", "notes"),
        F("File", "file"),
        F("Image", "image"),
        _created_at(),
    ),
)

VENDOR_DISBURSEMENT_DETAILS = EntitySyncConfig(
    display_name="Vendor Disbursement Details",
    sheet_name="Vendor Disbursement Details",
    model=models.VendorDisbursementDetailModel,
    id_prefix="VDD",
    filter_column="Credit Application ID",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Vendor Payment Method", "vendor_payment_method"),
        F("Phone Number for M Pesa Payment", "phone_number_for_mpesa_payment"),
        F("Manager Verification of Payment Account", "manager_verification"),
        F("Document Verifying Payment Account", "document_verifying_payment_account"),
        F("Bank Name", "bank_name"),
        F("Account Name", "account_name"),
        F("Account Number", "account_number"),
        F("Phone Number for Bank Account", "phone_number_for_bank_account"),
        F("Paybill Number and Account", "paybill_number_and_account"),
        F("Buy Goods Till ", "buy_goods_till"),
    ),
)

FINANCIAL_SURVEYS = EntitySyncConfig(
    display_name="Financial Surveys",
    sheet_name="Financial Survey",
    model=models.FinancialSurveyModel,
    id_prefix="FS",
    filter_column="Credit Application ID",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Survey Date", "survey_date"),
        F("Director ID", "director_id"),
        _created_by(),
        F("What grades does the school serve?", "school_grades"),
        F("Is the school APBET or Private?", "is_school_apbet_or_private"),
        F("Is the school supported by a major church?", "is_church_supported", YES_NO),
        F("Which church?", "church_name"),
        F("How much money does the church give the school per year?", "church_annual_support", NUMBER),
        F("Does the school rent, lease, or own its facilities?", "facility_ownership"),
        F("How much does the school pay for the lease or rental per year?", "annual_lease_rent", NUMBER),
        F(
            "How much money does the owner withdraw from the school annually? "
            "(including direct expenses, salary, profit, dividends, etc)",
            "owner_annual_withdrawal",
            NUMBER,
        ),
        F(
            "How much does the school and directors pay per month in school related debt payments, "
            "including debt on and off the CRB?",
            "monthly_debt_payments",
            NUMBER,
        ),
        F("Does the school provide any meals?", "provides_meals", YES_NO),
        F("How much does the school spend on food per term? ", "termly_food_expense", NUMBER),
        F("How much does the school spend on electricity per month?", "monthly_electricity_expense", NUMBER),
        F("How much does the school spend on water per month?", "monthly_water_expense", NUMBER),
        F("Does the school have vehicles for transportation?", "has_vehicles", YES_NO),
        F("How many children at the school are sponsored?", "sponsored_children_count", INTEGER),
        F("How much annual sponsorship revenue does the school collect?", "annual_sponsorship_revenue", NUMBER),
        F("How many students did the school have the previous academic year ", "previous_year_student_count", INTEGER),
        F("How many students do you expect to have next year?", "next_year_expected_students", INTEGER),
        F("Current total bank account balance", "current_bank_balance", NUMBER),
        F("Number of years at current business premises", "years_at_current_premises", INTEGER),
        F("How many years has the school had a bank account?", "years_with_bank_account", INTEGER),
        F("School has audited financials or management accounts?", "has_audited_financials", YES_NO),
        F("How many branches does the school have?", "branch_count", INTEGER),
    ),
)

# Las entidades de prestamos directos se actualizan al reimportar.
DIRECT_PAYMENT_SCHEDULES = EntitySyncConfig(
    display_name="Direct Payment Schedules",
    sheet_name="Dir. Payment Schedules",
    model=models.DirectPaymentScheduleModel,
    id_prefix="DPS",
    id_columns=("ID", "Sheet ID"),
    import_policy=IMPORT_POLICY_UPSERT,
    filter_column="Direct Loan ID",
    field_mappings=(
        _id(),
        F("Direct Loan ID", "direct_loan_id"),
        F("Borrower Type ", "borrower_type"),
        F("Borrower ID", "borrower_id"),
        F("Due Date", "due_date"),
        F("Holiday Forgiveness?", "holiday_forgiveness", YES_NO),
        F("Amount Still Unpaid", "amount_still_unpaid", NUMBER),
        F("Days Late", "days_late", INTEGER),
        F("Date Fully Paid", "date_fully_paid"),
        F("Payment Overdue?", "payment_overdue", YES_NO),
        F("PAR 14", "par14"),
        F("PAR 30", "par30"),
        F("PAR 60", "par60"),
        F("PAR 90", "par90"),
        F("PAR 120", "par120"),
        F("Check Cashing Status", "check_cashing_status"),
        F("Debt Type", "debt_type"),
        F("Notes on Payment", "notes_on_payment"),
        F("Adjusted Month", "adjusted_month"),
        F("Credit Life Insurance Fees Charged", "credit_life_insurance_fees_charged", NUMBER),
        F("Interest Charged without Forgiveness", "interest_charged_without_forgiveness", NUMBER),
        F("Principal Repayment without Forgiveness", "principal_repayment_without_forgiveness", NUMBER),
        F(
            "Vehicle Insurance Payment Due, without Forgiveness",
            "vehicle_insurance_payment_due_without_forgiveness",
            NUMBER,
        ),
        F("Vehicle Insurance Payment Due", "vehicle_insurance_payment_due", NUMBER),
        F("Interest Repayment Due", "interest_repayment_due", NUMBER),
        F("Principal Repayment Due", "principal_repayment_due", NUMBER),
        F("Amount Due", "amount_due", NUMBER),
        F("Amount Paid", "amount_paid", NUMBER),
        _created_by(),
        _created_at(),
        F("SSL ID", "ssl_id"),
        F("Date to Bank Check", "date_to_bank_check"),
        F("Loan Category", "loan_category"),
        F("Write Off Date", "write_off_date"),
        F("Interest Suspended?", "interest_suspended", YES_NO),
        F("Region", "region"),
        F("Date for MPESA / Bank Transfer", "date_for_mpesa_bank_transfer"),
    ),
)

PRINCIPAL_TRANCHES = EntitySyncConfig(
    display_name="Principal Tranches",
    sheet_name="Principal Tranches",
    model=models.PrincipalTrancheModel,
    id_prefix="PT",
    id_columns=("ID", "Sheet ID"),
    import_policy=IMPORT_POLICY_UPSERT,
    filter_column="Direct Loan ID",
    field_mappings=(
        _id(),
        F("Direct Loan ID", "direct_loan_id"),
        F("Contract Signing Date", "contract_signing_date"),
        F("Amount", "amount", NUMBER),
        F("SSL ID", "ssl_id"),
        F("Initial Disbursement Date in Contract", "initial_disbursement_date_in_contract"),
        F("Date Tranche Has Gone Par 30", "date_tranche_has_gone_par30"),
        _created_by(),
        F("Has Female Director?", "has_female_director", YES_NO),
        F("Loan Type", "loan_type"),
        F("Reassigned?", "reassigned", YES_NO),
        F("Team Leader", "team_leader"),
        F("Region", "region"),
    ),
)

DIRECT_LENDING_PROCESSING = EntitySyncConfig(
    display_name="Direct Lending Processing",
    sheet_name="Direct Lending Processing",
    model=models.DirectLendingProcessingModel,
    id_prefix="DLP",
    id_columns=("ID", "Sheet ID"),
    import_policy=IMPORT_POLICY_UPSERT,
    field_mappings=(
        _id(),
        F("Payment Type", "payment_type"),
        F("Payment Source", "payment_source"),
        F("Borrower Type", "borrower_type"),
        F("Borrower ID", "borrower_id"),
        F("Direct Loan ID", "direct_loan_id"),
        F("Payment Schedule ID", "payment_schedule_id"),
        F("Payment Date", "payment_date"),
        F("Amount Paid", "amount_paid", NUMBER),
        F("Payment Reference or Transaction Code", "payment_reference"),
        F("Installment Payment Amount", "installment_payment_amount", NUMBER),
        F("Installment Vehicle Insurance Premium Amount", "installment_vehicle_insurance_premium_amount", NUMBER),
        F("Installment Vehicle Insurance Surcharge Amount", "installment_vehicle_insurance_surcharge_amount", NUMBER),
        F("Installment Interest Amount", "installment_interest_amount", NUMBER),
        F("Installment Principal Amount", "installment_principal_amount", NUMBER),
        F("Vehicle Insurance Premium Paid", "vehicle_insurance_premium_paid", NUMBER),
        F("Vehicle Insurance Surcharge Paid", "vehicle_insurance_surcharge_paid", NUMBER),
        F("Interest Paid", "interest_paid", NUMBER),
        F("Principal Paid", "principal_paid", NUMBER),
        _created_by(),
        F("SSL ID", "ssl_id"),
        F("Region", "region"),
    ),
)

IMPACT_SURVEY = EntitySyncConfig(
    display_name="Impact Survey",
    sheet_name="Impact Survey",
    model=models.ImpactSurveyModel,
    id_prefix="IS",
    filter_column="Credit Application ID",
    field_mappings=(
        _id(),
        F("Credit Application ID", "credit_application_id"),
        F("Survey Date", "survey_date"),
        F("Director ID", "director_id"),
        _created_by(),
        F("Is the school APBET or Private?", "is_school_apbet_or_private"),
        F("What kind of area is the school in?", "school_area"),
        F("What grade levels does the school serve?", "grade_levels_served"),
        F("How many students does the school have?", "number_of_students", INTEGER),
        F("How many classrooms does the school have?", "number_of_classrooms", INTEGER),
        F("How many teachers does the school have?", "number_of_teachers", INTEGER),
        F("Does the school have running water?", "has_running_water", YES_NO),
        F("Does the school have electricity?", "has_electricity", YES_NO),
        F("Does the school provide meals?", "provides_meals", YES_NO),
        F("Does the school own vehicles to transport students to school?", "owns_transport_vehicles", YES_NO),
        F("How many vehicles does the school own?", "number_of_vehicles", INTEGER),
        F("Does the school have a library?", "has_library", YES_NO),
        F("Does the school have a computer lab?", "has_computer_lab", YES_NO),
        F("How many female children attend the school?", "female_students", INTEGER),
        F("How many male children attend the school?", "male_students", INTEGER),
        F(
            "By percentage of children, how many children get sent home at least once per term "
            "because of school fees?",
            "sent_home_for_fees_percentage",
            NUMBER,
        ),
    ),
)

LOANS = EntitySyncConfig(
    display_name="Loans",
    sheet_name="Loans",
    model=models.LoanModel,
    id_prefix="L",
    filter_column="Borrower ID",
    field_mappings=(
        _id(),
        F("Loan Type", "loan_type"),
        F("Loan Purpose", "loan_purpose"),
        F("Borrower Type", "borrower_type"),
        F("Borrower ID", "borrower_id"),
        F("Borrower Name", "borrower_name"),
        F("Principal Amount", "principal_amount", NUMBER),
        F("Interest Type", "interest_type"),
        # La hoja trae el espacio final en el encabezado
        F("Annual Declining Interest ", "annual_declining_interest", NUMBER),
        F("Annual Flat Interest", "annual_flat_interest", NUMBER),
        F("Processing Fee Percentage", "processing_fee_percentage", NUMBER),
        F("Credit Life Insurance Percentage", "credit_life_insurance_percentage", NUMBER),
        F("Securitization Fee", "securitization_fee", NUMBER),
        F("Processing Fee", "processing_fee", NUMBER),
        F("Credit Life Insurance Fee", "credit_life_insurance_fee", NUMBER),
        F("Number of Months", "number_of_months", INTEGER),
        F("Daily Penalty", "daily_penalty", NUMBER),
        F("Amount to Disburse", "amount_to_disburse", NUMBER),
        F("Total Interest Charged", "total_interest_charged", NUMBER),
        F("Total Interest to Pay", "total_interest_to_pay", NUMBER),
        F("Total Principal to Pay", "total_principal_to_pay", NUMBER),
        F("Credit Application ID", "credit_application_id"),
        F("First Payment Period", "first_payment_period"),
        _created_by(),
        F("Total Penalties Assessed", "total_penalties_assessed", NUMBER),
        F("Total Penalties Paid", "total_penalties_paid", NUMBER),
        F("Penalties Still Due", "penalties_still_due", NUMBER),
        F("SSL ID", "ssl_id"),
        F("Loan Overdue", "loan_overdue", YES_NO),
        F("PAR 14", "par14"),
        F("PAR 30", "par30"),
        F("PAR 60", "par60"),
        F("PAR 90", "par90"),
        F("PAR 120", "par120"),
        F("Amount Overdue", "amount_overdue", NUMBER),
        F("Loan Fully Paid?", "loan_fully_paid", YES_NO),
        F("Loan Status", "loan_status"),
        F("Total Amount Due to Date", "total_amount_due_to_date", NUMBER),
        F("Principal Paid to Date", "principal_paid_to_date", NUMBER),
        F("Outstanding Principal Balance", "outstanding_principal_balance", NUMBER),
        F("% Disbursed", "percent_disbursed", NUMBER),
        F("Days Late", "days_late", INTEGER),
        F("Total Unpaid Liability", "total_unpaid_liability", NUMBER),
        F("Restructured?", "restructured", YES_NO),
        F("Has Female Director?", "has_female_director", YES_NO),
        F("Has Male Director?", "has_male_director", YES_NO),
        F("Contract Uploaded?", "contract_uploaded", YES_NO),
        F("Credit Life Insurer", "credit_life_insurer"),
        F("First Loan", "first_loan"),
        F("Referral?", "referral", YES_NO),
        F("Willingness to Pay", "willingness_to_pay"),
        F("Capability to Pay", "capability_to_pay"),
        F("Loan Risk Category", "loan_risk_category"),
        F("Total Interest Paid", "total_interest_paid", NUMBER),
        # Encabezado con la errata de la hoja
        F("Oustanding Interest Balance", "outstanding_interest_balance", NUMBER),
        F("Reassigned?", "reassigned", YES_NO),
        F("Flexi Loan?", "flexi_loan", YES_NO),
        F("School Area", "school_area"),
        F("Contracting Date", "contracting_date"),
        F("School Type", "school_type"),
        F("Principal Written Off", "principal_written_off", NUMBER),
        F("Interest Written Off", "interest_written_off", NUMBER),
        F("Loan Number", "loan_number"),
        F("Team Leader", "team_leader"),
        F("Region", "region"),
        F("Excise Duty", "excise_duty", NUMBER),
    ),
)

WRITE_OFFS = EntitySyncConfig(
    display_name="Write Offs",
    sheet_name="Write Offs",
    model=models.WriteOffModel,
    id_prefix="WO",
    filter_column="Loan ID",
    field_mappings=(
        _id(),
        F("Date", "date"),
        F("Loan ID", "loan_id"),
        F("Payment Schedule ID", "payment_schedule_id"),
        F("Principal Amount Written Off", "principal_amount_written_off", NUMBER),
        F("Interest Amount Written Off", "interest_amount_written_off", NUMBER),
        F("Vehicle Insurance Amount Written Off", "vehicle_insurance_amount_written_off", NUMBER),
        F("Penalty Amount Written Off", "penalty_amount_written_off", NUMBER),
        F("Total Amount", "total_amount", NUMBER),
        _created_at(),
        _created_by(),
        F("Region", "region"),
        F("SSL ID", "ssl_id"),
        F("Loan or Payment Level", "loan_or_payment_level"),
    ),
)

# Restructurings tambien actualiza registros existentes al importar.
RESTRUCTURINGS = EntitySyncConfig(
    display_name="Restructurings",
    sheet_name="Restructurings",
    model=models.RestructuringModel,
    id_prefix="RS",
    id_columns=("ID", "Sheet ID"),
    import_policy=IMPORT_POLICY_UPSERT,
    filter_column="Loan ID",
    field_mappings=(
        _id(),
        F("Loan ID", "loan_id"),
        F("Date", "date"),
        F("Reason", "reason"),
        F("Previous Principal Amount", "previous_principal_amount", NUMBER),
        F("New Principal Amount", "new_principal_amount", NUMBER),
        F("Previous Monthly Payment", "previous_monthly_payment", NUMBER),
        F("New Monthly Payment", "new_monthly_payment", NUMBER),
        F("Previous Number of Months", "previous_number_of_months", INTEGER),
        F("New Number of Months", "new_number_of_months", INTEGER),
        F("Approved By", "approved_by"),
    ),
)


REGISTRY: tuple[EntitySyncConfig, ...] = (
    BORROWERS,
    DIRECTORS,
    CRB_CONSENTS,
    REFERRERS,
    CREDIT_APPLICATIONS,
    ACTIVE_DEBTS,
    FEE_PLANS,
    PAYROLL,
    ENROLLMENT_VERIFICATION,
    MPESA_BANK_STATEMENTS,
    AUDITED_FINANCIALS,
    STUDENT_BREAKDOWN,
    OTHER_SUPPORTING_DOCS,
    INVESTMENT_COMMITTEE,
    VENDOR_DISBURSEMENT_DETAILS,
    FINANCIAL_SURVEYS,
    HOME_VISITS,
    ASSET_TITLES,
    CONTRACT_DETAILS,
    CREDIT_APPLICATION_COMMENTS,
    DIRECT_PAYMENT_SCHEDULES,
    PRINCIPAL_TRANCHES,
    DIRECT_LENDING_PROCESSING,
    IMPACT_SURVEY,
    LOANS,
    WRITE_OFFS,
    RESTRUCTURINGS,
)

_CONFIG_BY_SLUG = {config.slug: config for config in REGISTRY}


def available_names(registry: Iterable[EntitySyncConfig] = REGISTRY) -> list[str]:
    return [config.display_name for config in registry]


class MigrationEntity(str, Enum):
    """Nombres validos de migracion (el valor es el slug de la URL)."""

    BORROWERS = BORROWERS.slug
    DIRECTORS = DIRECTORS.slug
    CRB_CONSENTS = CRB_CONSENTS.slug
    REFERRERS = REFERRERS.slug
    CREDIT_APPLICATIONS = CREDIT_APPLICATIONS.slug
    ACTIVE_DEBTS = ACTIVE_DEBTS.slug
    FEE_PLANS = FEE_PLANS.slug
    PAYROLL = PAYROLL.slug
    ENROLLMENT_VERIFICATION = ENROLLMENT_VERIFICATION.slug
    MPESA_BANK_STATEMENTS = MPESA_BANK_STATEMENTS.slug
    AUDITED_FINANCIALS = AUDITED_FINANCIALS.slug
    STUDENT_BREAKDOWN = STUDENT_BREAKDOWN.slug
    OTHER_SUPPORTING_DOCS = OTHER_SUPPORTING_DOCS.slug
    INVESTMENT_COMMITTEE = INVESTMENT_COMMITTEE.slug
    VENDOR_DISBURSEMENT_DETAILS = VENDOR_DISBURSEMENT_DETAILS.slug
    FINANCIAL_SURVEYS = FINANCIAL_SURVEYS.slug
    HOME_VISITS = HOME_VISITS.slug
    ASSET_TITLES = ASSET_TITLES.slug
    CONTRACT_DETAILS = CONTRACT_DETAILS.slug
    CREDIT_APPLICATION_COMMENTS = CREDIT_APPLICATION_COMMENTS.slug
    DIRECT_PAYMENT_SCHEDULES = DIRECT_PAYMENT_SCHEDULES.slug
    PRINCIPAL_TRANCHES = PRINCIPAL_TRANCHES.slug
    DIRECT_LENDING_PROCESSING = DIRECT_LENDING_PROCESSING.slug
    IMPACT_SURVEY = IMPACT_SURVEY.slug
    LOANS = LOANS.slug
    WRITE_OFFS = WRITE_OFFS.slug
    RESTRUCTURINGS = RESTRUCTURINGS.slug

    @property
    def config(self) -> EntitySyncConfig:
        return _CONFIG_BY_SLUG[self.value]

    @property
    def display_name(self) -> str:
        return self.config.display_name

    @classmethod
    def parse(cls, name: str) -> "MigrationEntity":
        """
        Convierte texto libre en una entidad registrada.

        Acepta el nombre visible o el slug, sin distinguir mayusculas,
        espacios ni guiones ("Home Visits", "home-visits", "HOME VISITS").

        Raises:
            MigrationNotFoundException: si no corresponde a ninguna entidad
        """
        entity = _ALIASES.get(slugify(name or ""))
        if entity is None:
            raise MigrationNotFoundException(name, available_names())
        return entity


_ALIASES: dict[str, MigrationEntity] = {}
for _entity in MigrationEntity:
    _ALIASES[_entity.value] = _entity
    _ALIASES[slugify(_entity.display_name)] = _entity
