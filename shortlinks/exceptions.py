class ShortLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlinks_error'


class ServiceError(ShortLinksError):
    """Base exception for errors surfaced by the shortening service."""

    error_code = 'service:service_error'


class InvalidInputError(ServiceError):
    """Raised when a caller supplies a malformed or empty long URL or short code."""

    error_code = 'service:invalid_input_error'


class NotFoundError(ServiceError):
    """Raised when a short code has no mapping."""

    error_code = 'service:not_found_error'


class ExhaustedRetriesError(ServiceError):
    """Raised when no free short code was found within the retry budget.

    Signals an undersized code space or a degenerate code generator.
    Retrying the same request with different input will not help.
    """

    error_code = 'service:exhausted_retries_error'


class ConfigurationError(ShortLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
