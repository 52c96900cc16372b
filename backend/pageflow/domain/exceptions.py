"""
Typed failures raised by the page lifecycle core.

The HTTP layer maps each class 1:1 to a status code (see ``pageflow.errors``).
``InvariantViolation`` is not a user error: it means the per-page
serialization was broken and the operation was aborted before writing.
"""


class PageflowError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(PageflowError):
    status_code = 404

    def __init__(self, entity: str, entity_id: str, message: str | None = None):
        super().__init__(message or f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class IllegalTransition(PageflowError):
    status_code = 409

    def __init__(self, from_state: str, to_state: str, action: str | None = None):
        label = f" ({action})" if action else ""
        super().__init__(f"Illegal page transition{label}: {from_state} → {to_state}")
        self.from_state = from_state
        self.to_state = to_state
        self.action = action


class ValidationError(PageflowError):
    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class AuthorizationError(PageflowError):
    status_code = 403

    def __init__(self, role: str, capability: str):
        super().__init__(f"Role '{role}' may not {capability.replace('_', ' ')}")
        self.role = role
        self.capability = capability


class InvariantViolation(PageflowError):
    status_code = 500
