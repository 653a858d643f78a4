"""
Exceptions raised by the composition and plugin resolution layers.
"""
from typing import Optional


class ProjectXError(Exception):
    """
    Base class for all Project-X errors.
    """


class ConfigError(ProjectXError):
    """
    Raised when a configuration or manifest file cannot be read or validated.
    """


class NotSupportedError(ProjectXError):
    """
    Raised when a service type has no registered builder.
    """
    def __init__(self, service_type: str, service_name: Optional[str] = None):
        self.service_type = service_type
        self.service_name = service_name
        if service_name:
            message = f"Service '{service_name}' has unsupported type '{service_type}'"
        else:
            message = f"Unsupported service type '{service_type}'"
        super().__init__(message)


class NotFoundError(ProjectXError):
    """
    Raised when a capability identifier cannot be resolved to a class.
    """
    def __init__(self, family: str, identifier: str):
        self.family = family
        self.identifier = identifier
        super().__init__(f"No {family} type registered for identifier '{identifier}'")


class PluginError(ProjectXError):
    """
    Describes a single plugin entry that was skipped during resolution.

    Recorded as a diagnostic by the resolver, never raised out of it.
    """
    def __init__(self, package: str, message: str):
        self.package = package
        self.message = message
        super().__init__(f"{package}: {message}")
