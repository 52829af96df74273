"""Custom exception hierarchy for rcontracts-core.

This module defines the exception classes used throughout reactive-contracts:
- ContractsError: Base exception for all contract-related errors
- ContractDefinitionError: Raised when a contract cannot be constructed
- ConfigurationError: Raised when rcontracts.yaml cannot be loaded
- ContractLoadError: Raised when a contract source file cannot be loaded
- DiscoveryError: Raised when contract source discovery fails
- GenerationError: Raised when an artifact cannot be written

User-facing messages are safe to display. Technical details are logged
internally via structlog and never exposed to the user.

Only construction (ContractDefinitionError) and discovery (DiscoveryError)
cross the compiler's public boundary. Everything else is folded into
result values by the orchestrator.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class ContractsError(Exception):
    """Base exception for reactive-contracts.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never exposed to the user.

    Example:
        >>> raise ContractsError(
        ...     "Contract invalid",
        ...     internal_details="shape.user.id: unsupported leaf <object at 0x...>"
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ContractsError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "contracts_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ContractDefinitionError(ContractsError):
    """Raised when a contract declaration is too malformed to construct.

    Use this exception when:
    - name or intent is missing, empty, or not a string
    - shape is not a mapping
    - a shape leaf is neither a type string, a nested mapping, nor a derived field

    Attributes:
        field_path: Dotted path of the offending field (if known).

    Example:
        >>> raise ContractDefinitionError("Contract must have a valid name")
    """

    def __init__(
        self,
        user_message: str,
        *,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ContractDefinitionError.

        Args:
            user_message: Safe message to display to the user.
            field_path: Dotted path of the offending field (optional).
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message, internal_details=internal_details)
        self.field_path = field_path


class ConfigurationError(ContractsError):
    """Raised when compiler configuration parsing or validation fails.

    Provides file path and field context for actionable error messages.

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the invalid field (e.g., "output.frontend").
        line_number: Line number in the file where error occurred (if available).

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid output directory",
        ...     file_path="rcontracts.yaml",
        ...     field_path="output.frontend",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        line_number: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the configuration file (optional).
            field_path: Dot-separated path to the field (optional).
            line_number: Line number in the file (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if line_number:
            context_parts.append(f"line {line_number}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path
        self.line_number = line_number


class ContractLoadError(ContractsError):
    """Raised when a contract source file cannot be loaded.

    The orchestrator reports this as a file-level error and continues
    with the remaining files.

    Attributes:
        source_path: Path of the source file that failed to load.
    """

    def __init__(
        self,
        user_message: str,
        *,
        source_path: str,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ContractLoadError.

        Args:
            user_message: Safe message to display to the user.
            source_path: Path of the source file that failed to load.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message, internal_details=internal_details)
        self.source_path = source_path


class DiscoveryError(ContractsError):
    """Raised when contract source discovery itself fails.

    This is the only compilation failure that is raised to the caller
    instead of being recorded on a result.

    Attributes:
        pattern: The glob pattern that was being resolved.
    """

    def __init__(
        self,
        user_message: str,
        *,
        pattern: str,
        internal_details: str | None = None,
    ) -> None:
        """Initialize DiscoveryError.

        Args:
            user_message: Safe message to display to the user.
            pattern: The glob pattern that was being resolved.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message, internal_details=internal_details)
        self.pattern = pattern


class GenerationError(ContractsError):
    """Raised when a generated artifact cannot be written.

    Attributes:
        output_path: Path of the artifact that failed to write.
    """

    def __init__(
        self,
        user_message: str,
        *,
        output_path: str,
        internal_details: str | None = None,
    ) -> None:
        """Initialize GenerationError.

        Args:
            user_message: Safe message to display to the user.
            output_path: Path of the artifact that failed to write.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message, internal_details=internal_details)
        self.output_path = output_path
