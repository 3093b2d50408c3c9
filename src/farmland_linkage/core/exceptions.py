class LinkageError(Exception):
    """Base exception for farmland linkage failures."""


class ContractViolation(LinkageError, TypeError):
    """Raised when a caller breaks an API contract (e.g. None for a collection)."""


class LoadError(LinkageError):
    """Raised when an input file cannot be read or decoded."""


class PipelineError(LinkageError):
    """Raised when the orchestration pipeline fails."""


def require_collection(value, name: str):
    """Fail fast when a required collection is missing."""
    if value is None:
        raise ContractViolation(f"{name} must be a collection, got None")
    if isinstance(value, (str, bytes)):
        raise ContractViolation(f"{name} must be a collection, got {type(value).__name__}")
    return value


def require_text(value, name: str) -> str:
    """Fail fast when a required string is missing."""
    if not isinstance(value, str):
        raise ContractViolation(f"{name} must be str, got {type(value).__name__}")
    return value
