"""
Custom exceptions for the web app authentication sample.

Exception Hierarchy:
    SampleError (base)
    ├── ConfigurationError - Invalid or missing configuration
    ├── ResourceCreationError - Failed to create or update a cloud resource
    └── ResourceDeletionError - Failed to delete a cloud resource
"""

from typing import Optional


class SampleError(Exception):
    """
    Base exception for all sample-related errors.
    
    Attributes:
        message: Human-readable error description
        identity_provider: Optional identity provider key the error relates to
        resource_name: Optional name of the Azure resource involved
    """
    
    def __init__(
        self,
        message: str,
        identity_provider: Optional[str] = None,
        resource_name: Optional[str] = None
    ):
        self.message = message
        self.identity_provider = identity_provider
        self.resource_name = resource_name
        
        details = []
        if identity_provider:
            details.append(f"identity_provider={identity_provider}")
        if resource_name:
            details.append(f"resource={resource_name}")
        
        if details:
            full_message = f"{message} [{', '.join(details)}]"
        else:
            full_message = message
            
        super().__init__(full_message)


class ConfigurationError(SampleError):
    """
    Raised when configuration is invalid or missing required fields.
    
    This typically occurs when:
    - A required environment variable (CLIENT_ID, ...) is missing or empty
    - The identity provider credentials file is missing or has invalid JSON
    - Non-interactive mode is used without credentials for a provider
    
    Example:
        >>> load_azure_settings()
        ConfigurationError: Missing required environment variable(s): CLIENT_SECRET, TENANT_ID
    """
    
    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        identity_provider: Optional[str] = None
    ):
        self.config_file = config_file
        if config_file:
            message = f"{message} (file: {config_file})"
        super().__init__(message, identity_provider=identity_provider)


class ResourceCreationError(SampleError):
    """
    Raised when a cloud resource fails to create or update.
    
    Attributes:
        resource_type: Type of resource (e.g., "web_app", "auth_settings")
        resource_name: Name of the resource that failed
        original_error: The underlying SDK exception
    """
    
    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        original_error: Optional[Exception] = None
    ):
        self.resource_type = resource_type
        self.original_error = original_error
        
        message = f"Failed to create {resource_type} '{resource_name}'"
        if original_error:
            message += f": {str(original_error)}"
            
        super().__init__(message, resource_name=resource_name)


class ResourceDeletionError(SampleError):
    """
    Raised when a cloud resource fails to delete.
    
    Attributes:
        resource_type: Type of resource (e.g., "resource_group")
        resource_name: Name of the resource that failed
        original_error: The underlying SDK exception
    """
    
    def __init__(
        self,
        resource_type: str,
        resource_name: str,
        original_error: Optional[Exception] = None
    ):
        self.resource_type = resource_type
        self.original_error = original_error
        
        message = f"Failed to delete {resource_type} '{resource_name}'"
        if original_error:
            message += f": {str(original_error)}"
            
        super().__init__(message, resource_name=resource_name)
