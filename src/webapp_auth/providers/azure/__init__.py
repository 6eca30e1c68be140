"""
Azure Provider package.

Modules:
    provider: Credential and SDK client initialization
    naming: Random resource names per run
    resource_group: Resource Group create/destroy/check
    web_apps: App Service Plan and web app create/check
    auth_settings: Identity provider login configuration
    cleanup: Removal of leaked resource groups
"""

from .provider import AzureProvider

__all__ = ["AzureProvider"]
