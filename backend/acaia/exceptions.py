"""
Domain errors raised by services and mapped to JSON error responses
"""


class AcaiaError(Exception):
    """Base class; carries the HTTP status the error maps to"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AcaiaError):
    status_code = 400


class NotFoundError(AcaiaError):
    status_code = 404


class ConflictError(AcaiaError):
    status_code = 409


class UnknownProductError(ValidationError):
    """A cart references products missing from the catalog"""

    def __init__(self, product_ids):
        self.product_ids = sorted(product_ids)
        ids = ", ".join(str(pid) for pid in self.product_ids)
        super().__init__(f"Product ID {ids} not found")


class VisitConflictError(ConflictError):
    """Another request opened a visit for the same seating area first"""

    def __init__(self, seating_area_id: int):
        self.seating_area_id = seating_area_id
        super().__init__(
            f"Seating area {seating_area_id} was opened by another request, please retry"
        )


class VisitResolutionError(AcaiaError):
    status_code = 500
