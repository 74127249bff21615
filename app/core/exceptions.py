class FinanceTrackerException(Exception):
    """Base exception for finance tracker"""

    pass


class UnauthorizedException(FinanceTrackerException):
    """Raised when authentication fails (bad credentials, invalid JWT)"""

    pass


class NotFoundException(FinanceTrackerException):
    """Raised when resource not found"""

    pass


class ForbiddenException(FinanceTrackerException):
    """Raised when a session tries to touch another user's data"""

    pass


class ValidationException(FinanceTrackerException):
    """Raised for business logic validation errors"""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ReferenceViolationException(FinanceTrackerException):
    """Raised when a referenced entity is missing or owned by another user"""

    def __init__(self, field: str, ref_id: int):
        super().__init__(f"Invalid reference {field}={ref_id}")
        self.field = field
        self.ref_id = ref_id


class DependencyExistsException(FinanceTrackerException):
    """Raised when a delete is blocked by records still referencing the target"""

    def __init__(self, message: str, dependents: dict[str, list[int]]):
        super().__init__(message)
        self.dependents = dependents


class PartialCascadeFailureException(FinanceTrackerException):
    """
    Raised when a multi-record cascade could not finish after retries.

    `remaining` maps each record set name to the ids still present.
    """

    def __init__(self, message: str, remaining: dict[str, list[int]]):
        super().__init__(message)
        self.remaining = remaining
