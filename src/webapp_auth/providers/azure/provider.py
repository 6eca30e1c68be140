"""
Azure provider: credential and SDK client initialization.

SDK Clients Initialized:
    - ResourceManagementClient: For Resource Group management
    - WebSiteManagementClient: For App Service plans, web apps and auth settings

Usage:
    from webapp_auth.providers.azure.provider import AzureProvider
    
    provider = AzureProvider()
    provider.initialize_clients(settings)
    # Access clients: provider.clients["resource"], provider.clients["web"]
"""

import logging
from typing import Any, Dict, TYPE_CHECKING

import webapp_auth.constants as CONSTANTS
from webapp_auth.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from webapp_auth.core.config_loader import AzureSettings

logger = logging.getLogger(__name__)


class AzureProvider:
    """
    Holds the authenticated Azure SDK clients for one subscription.
    
    Attributes:
        clients: Dictionary of initialized Azure SDK clients
        subscription_id: Target subscription
    """
    
    def __init__(self):
        self._subscription_id: str = ""
        self._clients: Dict[str, Any] = {}
        self._initialized: bool = False
    
    @property
    def subscription_id(self) -> str:
        """Get the Azure subscription ID."""
        return self._subscription_id
    
    @property
    def clients(self) -> Dict[str, Any]:
        """Get the dictionary of Azure SDK clients."""
        if not self._initialized:
            raise RuntimeError("Provider not initialized. Call initialize_clients first.")
        return self._clients
    
    @property
    def initialized(self) -> bool:
        return self._initialized
    
    def initialize_clients(self, settings: 'AzureSettings') -> None:
        """
        Build the service principal credential and the SDK clients.
        
        No network call happens here; the credential fetches a token on the
        first management request.
        
        Args:
            settings: AzureSettings with CLIENT_ID, CLIENT_SECRET, TENANT_ID
                and SUBSCRIPTION_ID
        
        Raises:
            ConfigurationError: If any required value is missing
        """
        # Fail-fast: every service principal value MUST be provided
        missing = [
            name for name in CONSTANTS.REQUIRED_ENV_VARS
            if not str(getattr(settings, name, "") or "").strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Cannot authenticate to Azure, missing: {', '.join(missing)}"
            )
        
        self._subscription_id = settings.SUBSCRIPTION_ID
        
        credential = self._get_credential(settings)
        self._initialize_sdk_clients(credential)
        
        self._initialized = True
        logger.debug(f"Azure clients initialized for subscription {self._subscription_id}")
    
    def _get_credential(self, settings: 'AzureSettings') -> Any:
        """Get the service principal credential for SDK clients."""
        from azure.identity import ClientSecretCredential
        
        return ClientSecretCredential(
            tenant_id=settings.TENANT_ID,
            client_id=settings.CLIENT_ID,
            client_secret=settings.CLIENT_SECRET
        )
    
    def _initialize_sdk_clients(self, credential: Any) -> None:
        """Initialize the Azure SDK clients used by the sample."""
        from azure.mgmt.resource import ResourceManagementClient
        from azure.mgmt.web import WebSiteManagementClient
        
        subscription_id = self._subscription_id
        
        self._clients["resource"] = ResourceManagementClient(credential=credential, subscription_id=subscription_id)
        self._clients["web"] = WebSiteManagementClient(credential=credential, subscription_id=subscription_id)
