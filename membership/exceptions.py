"""
Domain errors raised by the membership ledger and the payment workflow.

They carry an HTTP status so the API edge (config.exceptions) can render them
without the core importing DRF.
"""


class GymError(Exception):
    status_code = 500
    default_message = "Something went wrong."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(GymError):
    status_code = 404
    default_message = "Not found."

    def __init__(self, entity, pk):
        self.entity = entity
        self.pk = pk
        super().__init__(f"{entity} {pk} not found.")


class ValidationFailure(GymError):
    status_code = 400
    default_message = "Invalid data."

    def __init__(self, message=None, fields=None):
        self.fields = list(fields or [])
        super().__init__(message)


class InvalidTransition(GymError):
    """A payment was asked to leave a terminal state."""

    status_code = 409
    default_message = "Transition not allowed."


class StoreFailure(GymError):
    status_code = 500
    default_message = "The record store failed to complete the operation."
