"""
Configuracion de base de datos.

Importa todos los modelos para que se registren con Base
antes de crear las tablas.
"""
from backoffice.infrastructure.database.models import (
    SheetSyncMixin,
    BorrowerModel,
    DirectorModel,
    CrbConsentModel,
    ReferrerModel,
    CreditApplicationModel,
    ActiveDebtModel,
    FeePlanModel,
    AuditedFinancialModel,
    StudentBreakdownModel,
    InvestmentCommitteeModel,
    HomeVisitModel,
    AssetTitleModel,
    ContractDetailModel,
    CreditApplicationCommentModel,
    PayrollModel,
    RestructuringModel,
)
