"""
Custom exceptions for participant-tracker with helpful error messages.
"""


class ParticipantTrackerError(Exception):
    """Base exception for participant-tracker errors."""

    def __init__(self, message: str, suggestion: str = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.message)

    def __str__(self):
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class ConfigurationError(ParticipantTrackerError):
    """Configuration file errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Configuration file is invalid."""

    def __init__(self, error_details: str, config_path: str = None):
        message = f"Invalid configuration file: {error_details}"
        if config_path:
            message = f"Invalid configuration file {config_path}: {error_details}"

        suggestion = (
            "Fix the participant-tracker.yaml file.\n"
            "You can regenerate the default configuration:\n"
            "  mv participant-tracker.yaml participant-tracker.yaml.backup\n"
            "  participant-tracker init .\n\n"
            "Then merge your settings back from the backup."
        )
        super().__init__(message, suggestion)


class CacheError(ParticipantTrackerError):
    """Errors related to the participant cache."""

    pass


class InvalidCacheDataError(CacheError):
    """Data handed to the cache cannot be stored as a JSON object."""

    def __init__(self, type_name: str):
        message = f"Cache data must be a mapping, got {type_name}"
        suggestion = (
            "Pass the structure returned by load_cache() or a dict/OrderedDict\n"
            "whose keys are strings."
        )
        super().__init__(message, suggestion)


def format_error_for_cli(error: Exception) -> str:
    """
    Format an exception for CLI display with helpful information.

    Args:
        error: The exception to format

    Returns:
        Formatted error message string
    """
    if isinstance(error, ParticipantTrackerError):
        output = f"[red]Error:[/red] {error.message}"
        if error.suggestion:
            output += f"\n\n[yellow]{error.suggestion}[/yellow]"
        return output
    else:
        return f"[red]Error:[/red] {str(error)}"
