"""
Excepciones de integracion con servicios externos.
"""
from backoffice.shared.exceptions.base import AppException


class SheetGatewayException(AppException):
    """Google Sheets no respondio o respondio con error."""

    def __init__(self, message: str, sheet_name: str = None, status: int = None):
        details = {}
        if sheet_name:
            details["sheet"] = sheet_name
        if status is not None:
            details["status"] = status
        super().__init__(
            message=message,
            status_code=502,
            error_code="SHEETS_GATEWAY_ERROR",
            details=details
        )
        self.sheet_name = sheet_name
        self.status = status
