"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class UnknownEntityTypeError(Exception):
    """Raised when no entity profile is registered for a collection name."""

    def __init__(self, entity_type: str):
        self.entity_type = entity_type
        super().__init__(f"Unknown entity type '{entity_type}'")


class RecordValidationError(Exception):
    """Raised when record input fails validation before any remote call."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class PermissionDeniedError(Exception):
    """Raised when the current user lacks the capability for an action."""

    def __init__(self, action: str, scope: str):
        self.action = action
        self.scope = scope
        super().__init__(f"You do not have permission to {action} {scope}")


class InvalidTransitionError(Exception):
    """Raised when a record is not in a state that allows the action.

    Archived records can only be restored or permanently deleted; active
    records can only be archived or permanently deleted.
    """

    def __init__(self, entity_type: str, entity_id: str, action: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.action = action
        super().__init__(f"Cannot {action} {entity_type} '{entity_id}' in its current state")


class RemoteServiceError(Exception):
    """Raised when the remote data service returns an error.

    Transport-agnostic — used by the HTTP adapter for non-2xx responses.
    """

    def __init__(self, service: str, status_code: int, message: str):
        self.service = service
        self.status_code = status_code
        self.message = message
        super().__init__(f"[{service}] {status_code}: {message}")
