"""
Run context and value classes.

Functions receive explicit objects instead of reading globals:
    - AzureSettings (see config_loader) carries the service principal
    - SampleContext bundles settings, naming, provider and credential source
    - IdentityProviderCredentials carries one provider's operator input
    - ProvisionedWebApp records what a run created
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from webapp_auth.core.config_loader import AzureSettings
    from webapp_auth.prompts import CredentialSource
    from webapp_auth.providers.azure.naming import SampleNaming
    from webapp_auth.providers.azure.provider import AzureProvider


@dataclass
class IdentityProviderCredentials:
    """
    Credentials for a single identity provider login.
    
    Attributes:
        provider_key: Identity provider key ("aad", "facebook", "google", "microsoft")
        values: Field name -> value, e.g. {"app_id": "...", "app_secret": "..."}
    """
    
    provider_key: str
    values: Dict[str, str] = field(default_factory=dict)
    
    def get(self, field_name: str) -> str:
        """
        Get a credential value, failing fast if it is missing.
        
        Raises:
            KeyError: If the field was never supplied
        """
        if field_name not in self.values:
            raise KeyError(f"Missing credential field '{field_name}' for {self.provider_key}")
        return self.values[field_name]


@dataclass
class ProvisionedWebApp:
    """A web app created during the run and the login wired to it."""
    
    name: str
    url: str
    provider_key: str
    plan_id: Optional[str] = None


@dataclass
class SampleContext:
    """
    Everything a single sample run needs.
    
    Attributes:
        settings: Service principal and region settings
        naming: Random resource names for this run
        provider: Initialized AzureProvider with SDK clients
        credential_source: Where identity provider credentials come from
    """
    
    settings: 'AzureSettings'
    naming: 'SampleNaming'
    provider: 'AzureProvider'
    credential_source: 'CredentialSource'
    
    @property
    def location(self) -> str:
        return self.settings.AZURE_REGION
