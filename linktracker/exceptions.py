class LinkTrackerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linktracker_error'


class LinkNotFoundError(LinkTrackerError):
    """Raised when a link is absent, invalidated or expired."""

    error_code = 'link:not_found'


class LinkForbiddenError(LinkTrackerError):
    """Raised when the supplied password doesn't match the link's password."""

    error_code = 'link:forbidden'


class CodeGenerationError(LinkTrackerError):
    """Raised when no unused code could be generated for a new link."""

    error_code = 'link:code_generation_error'


class ConfigurationError(LinkTrackerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
