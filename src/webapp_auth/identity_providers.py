"""
Identity provider catalog.

One entry per web app the sample creates, in creation order. Each entry
describes what the operator must create on the provider side and which
credential fields are collected for it.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import webapp_auth.constants as CONSTANTS


@dataclass(frozen=True)
class CredentialField:
    """A single credential value: its field name, console prompt and env variable."""
    
    name: str
    prompt: str
    env_var: str


@dataclass(frozen=True)
class IdentityProviderDemo:
    """
    Catalog entry for one identity provider login.
    
    Attributes:
        key: Identity provider key used in config files
        display_name: Name used in log output
        name_prefix: Prefix for the random web app name
        instruction: What the operator must create, followed by the app URL
        fields: Ordered credential fields collected for this provider
    """
    
    key: str
    display_name: str
    name_prefix: str
    instruction: str
    fields: Tuple[CredentialField, ...]
    

IDENTITY_PROVIDERS: Tuple[IdentityProviderDemo, ...] = (
    IdentityProviderDemo(
        key=CONSTANTS.PROVIDER_AAD,
        display_name="active directory",
        name_prefix="webapp1-",
        instruction="Please create an AD application with redirect URL",
        fields=(
            CredentialField("application_id", "Application ID is:", "AAD_APPLICATION_ID"),
            CredentialField("tenant_id", "Tenant ID is:", "AAD_TENANT_ID"),
        ),
    ),
    IdentityProviderDemo(
        key=CONSTANTS.PROVIDER_FACEBOOK,
        display_name="Facebook",
        name_prefix="webapp2-",
        instruction="Please create a Facebook developer application with whitelisted URL",
        fields=(
            CredentialField("app_id", "App ID is:", "FACEBOOK_APP_ID"),
            CredentialField("app_secret", "App secret is:", "FACEBOOK_APP_SECRET"),
        ),
    ),
    IdentityProviderDemo(
        key=CONSTANTS.PROVIDER_GOOGLE,
        display_name="Google",
        name_prefix="webapp3-",
        instruction="Please create a Google developer application with redirect URL",
        fields=(
            CredentialField("client_id", "Client ID is:", "GOOGLE_CLIENT_ID"),
            CredentialField("client_secret", "Client secret is:", "GOOGLE_CLIENT_SECRET"),
        ),
    ),
    IdentityProviderDemo(
        key=CONSTANTS.PROVIDER_MICROSOFT,
        display_name="Microsoft",
        name_prefix="webapp4-",
        instruction="Please create a Microsoft developer application with redirect URL",
        fields=(
            CredentialField("client_id", "Client ID is:", "MICROSOFT_CLIENT_ID"),
            CredentialField("client_secret", "Client secret is:", "MICROSOFT_CLIENT_SECRET"),
        ),
    ),
)

IDENTITY_PROVIDERS_BY_KEY: Dict[str, IdentityProviderDemo] = {
    demo.key: demo for demo in IDENTITY_PROVIDERS
}


def get_identity_provider(key: str) -> IdentityProviderDemo:
    """
    Look up a catalog entry by key.
    
    Raises:
        KeyError: If the key is not a known identity provider
    """
    if key not in IDENTITY_PROVIDERS_BY_KEY:
        raise KeyError(
            f"Unknown identity provider '{key}'. "
            f"Available: {list(IDENTITY_PROVIDERS_BY_KEY)}"
        )
    return IDENTITY_PROVIDERS_BY_KEY[key]
