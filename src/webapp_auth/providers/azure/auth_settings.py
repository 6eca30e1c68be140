"""
Azure App Service authentication settings.

Builds and applies the "Easy Auth" configuration for each identity
provider login:

    - Active Directory: auth settings V2 (identityProviders.azureActiveDirectory)
    - Facebook / Google / Microsoft account: classic auth settings

Each payload carries only the credential fields of its own provider, so
applying one login never overwrites or leaks another provider's secrets.
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, Tuple
import logging

from azure.core.exceptions import (
    AzureError,
    HttpResponseError,
    ClientAuthenticationError
)

import webapp_auth.constants as CONSTANTS
from webapp_auth.identity_providers import get_identity_provider

if TYPE_CHECKING:
    from webapp_auth.core.context import IdentityProviderCredentials
    from webapp_auth.providers.azure.provider import AzureProvider

logger = logging.getLogger(__name__)

AUTH_V1 = "v1"
AUTH_V2 = "v2"


# ==========================================
# Payload Builders
# ==========================================

def _build_aad_settings(credentials: 'IdentityProviderCredentials', app_url: str) -> dict:
    application_id = credentials.get("application_id")
    tenant_id = credentials.get("tenant_id")
    
    return {
        "properties": {
            "platform": {"enabled": True},
            "globalValidation": {
                "requireAuthentication": True,
                "unauthenticatedClientAction": "RedirectToLoginPage",
                "redirectToProvider": "azureactivedirectory",
            },
            "identityProviders": {
                "azureActiveDirectory": {
                    "enabled": True,
                    "registration": {
                        "clientId": application_id,
                        "openIdIssuer": CONSTANTS.AAD_ISSUER_TEMPLATE.format(tenant_id=tenant_id),
                    },
                    "validation": {
                        "allowedAudiences": [f"https://{app_url}"],
                        "defaultAuthorizationPolicy": {},
                    },
                }
            },
        }
    }


def _classic_settings(default_provider: str, fields: Dict[str, str]) -> dict:
    properties = {
        "enabled": True,
        "unauthenticatedClientAction": "RedirectToLoginPage",
        "defaultProvider": default_provider,
    }
    properties.update(fields)
    return {"properties": properties}


def _build_facebook_settings(credentials: 'IdentityProviderCredentials', app_url: str) -> dict:
    return _classic_settings("Facebook", {
        "facebookAppId": credentials.get("app_id"),
        "facebookAppSecret": credentials.get("app_secret"),
    })


def _build_google_settings(credentials: 'IdentityProviderCredentials', app_url: str) -> dict:
    return _classic_settings("Google", {
        "googleClientId": credentials.get("client_id"),
        "googleClientSecret": credentials.get("client_secret"),
    })


def _build_microsoft_settings(credentials: 'IdentityProviderCredentials', app_url: str) -> dict:
    return _classic_settings("MicrosoftAccount", {
        "microsoftAccountClientId": credentials.get("client_id"),
        "microsoftAccountClientSecret": credentials.get("client_secret"),
    })


_BUILDERS: Dict[str, Tuple[str, Callable[['IdentityProviderCredentials', str], dict]]] = {
    CONSTANTS.PROVIDER_AAD: (AUTH_V2, _build_aad_settings),
    CONSTANTS.PROVIDER_FACEBOOK: (AUTH_V1, _build_facebook_settings),
    CONSTANTS.PROVIDER_GOOGLE: (AUTH_V1, _build_google_settings),
    CONSTANTS.PROVIDER_MICROSOFT: (AUTH_V1, _build_microsoft_settings),
}


def build_auth_settings(credentials: 'IdentityProviderCredentials', app_url: str) -> Tuple[str, dict]:
    """
    Build the authentication settings payload for one identity provider.
    
    Args:
        credentials: The provider's credentials
        app_url: Host name of the web app (used as AAD audience)
    
    Returns:
        (api_version, payload) where api_version is "v2" for Active
        Directory and "v1" for the social logins
    
    Raises:
        KeyError: If the provider is unknown or a credential field is missing
    """
    if credentials.provider_key not in _BUILDERS:
        raise KeyError(f"No authentication settings builder for '{credentials.provider_key}'")
    api_version, builder = _BUILDERS[credentials.provider_key]
    return api_version, builder(credentials, app_url)


# ==========================================
# SDK Calls
# ==========================================

def apply_auth_settings(
    provider: 'AzureProvider',
    rg_name: str,
    app_name: str,
    credentials: 'IdentityProviderCredentials',
    app_url: str
) -> Any:
    """
    Apply an identity provider login to a single web app.
    
    Args:
        provider: Initialized AzureProvider
        rg_name: Resource Group name
        app_name: Web app to update (and only this one)
        credentials: The provider's credentials
        app_url: Host name of the web app
    
    Returns:
        The updated settings object returned by Azure
    
    Raises:
        HttpResponseError: If the update fails
        ClientAuthenticationError: If permission denied
    """
    demo = get_identity_provider(credentials.provider_key)
    api_version, payload = build_auth_settings(credentials, app_url)
    web = provider.clients["web"].web_apps
    
    logger.info(f"Updating web app {app_name} to use {demo.display_name} login...")
    
    try:
        if api_version == AUTH_V2:
            result = web.update_auth_settings_v2(
                resource_group_name=rg_name,
                name=app_name,
                site_auth_settings_v2=payload
            )
        else:
            result = web.update_auth_settings(
                resource_group_name=rg_name,
                name=app_name,
                site_auth_settings=payload
            )
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED updating auth settings: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to update auth settings for {app_name}: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error updating auth settings: {type(e).__name__}: {e}")
        raise
    
    logger.info(f"Added {demo.display_name} login to {app_name}")
    return result
