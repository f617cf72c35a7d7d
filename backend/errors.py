"""
Typed failures raised by the learning plan CRUD layer.

Callers (CLI, Streamlit pages, a future HTTP layer) translate these into
their own responses; status_code is the suggested HTTP mapping.
"""


class LearningPlanError(Exception):
    """Base exception for learning plan operations"""
    status_code: int = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(LearningPlanError):
    """Raised when a plan, topic or user id does not resolve"""
    status_code = 404

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, self.status_code)


class InvalidArgumentError(LearningPlanError):
    """
    Raised for malformed input or mismatched references.

    Examples:
    - Topic id that belongs to a different plan
    - Non-numeric user id filter
    """
    status_code = 400

    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message, self.status_code)


class UnauthorizedError(LearningPlanError):
    """Raised when the caller does not own the plan being changed"""
    status_code = 403

    def __init__(self, message: str = "You do not own this learning plan"):
        super().__init__(message, self.status_code)


class ConflictError(LearningPlanError):
    """Raised when a plan was modified by someone else since it was read"""
    status_code = 409

    def __init__(self, message: str = "Learning plan was modified concurrently"):
        super().__init__(message, self.status_code)
