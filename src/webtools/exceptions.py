"""Exceptions raised by webtools integrations."""

from typing import Any


class WebtoolsError(Exception):
    """Base error for webtools integrations."""

    def __init__(
        self,
        message: str = "Webtools integration error",
        error_code: str = "webtools_error",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class EntityTypeNotFoundError(WebtoolsError):
    """Raised when no storage is registered for an entity type."""

    def __init__(self, entity_type_id: str) -> None:
        super().__init__(
            message=f'The "{entity_type_id}" entity type does not exist.',
            error_code="entity_type_not_found",
            details={"entity_type_id": entity_type_id},
        )


class InvalidEntityTypeError(WebtoolsError):
    """Raised when an entity type is registered with an unusable storage."""

    def __init__(self, entity_type_id: str, reason: str) -> None:
        super().__init__(
            message=f'The "{entity_type_id}" entity type is invalid: {reason}',
            error_code="invalid_entity_type",
            details={"entity_type_id": entity_type_id, "reason": reason},
        )


class InvalidRuleError(WebtoolsError):
    """Raised when an analytics rule fails validation."""

    def __init__(self, message: str, rule_id: str | None = None) -> None:
        super().__init__(
            message=message,
            error_code="invalid_rule",
            details={"rule_id": rule_id} if rule_id else {},
        )


class RuleStorageUnavailableError(WebtoolsError, RuntimeError):
    """Unchecked fault raised when the rule storage cannot be obtained."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, error_code="rule_storage_unavailable")
