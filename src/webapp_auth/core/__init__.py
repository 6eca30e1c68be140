"""
Core building blocks for the sample.

Modules:
    context: Value classes passed between steps
    config_loader: Environment and credentials file loading
    exceptions: Custom exception types
"""

from .context import IdentityProviderCredentials, ProvisionedWebApp, SampleContext
from .exceptions import (
    SampleError,
    ConfigurationError,
    ResourceCreationError,
    ResourceDeletionError,
)

__all__ = [
    # Context
    "IdentityProviderCredentials",
    "ProvisionedWebApp",
    "SampleContext",
    # Exceptions
    "SampleError",
    "ConfigurationError",
    "ResourceCreationError",
    "ResourceDeletionError",
]
