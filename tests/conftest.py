import os
import sys
import pytest
from unittest.mock import MagicMock

# Make the src/ layout importable without installing the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from webapp_auth.core.context import IdentityProviderCredentials
from webapp_auth.identity_providers import IDENTITY_PROVIDERS
from webapp_auth.providers.azure.naming import SampleNaming

PLAN_ID = "/subscriptions/test-subscription-123/resourceGroups/rg1NEMV_test/providers/Microsoft.Web/serverfarms/webapp1-test-plan"

_AZURE_ENV_VARS = [
    "CLIENT_ID",
    "CLIENT_SECRET",
    "TENANT_ID",
    "SUBSCRIPTION_ID",
    "AZURE_REGION",
    "LOG_MODE",
] + [f.env_var for demo in IDENTITY_PROVIDERS for f in demo.fields]


@pytest.fixture(scope="function", autouse=True)
def clean_env(monkeypatch):
    """Remove Azure and identity provider variables to prevent accidental cloud calls."""
    for name in _AZURE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def service_principal_env(monkeypatch):
    """Set a complete (fake) service principal in the environment."""
    monkeypatch.setenv("CLIENT_ID", "sp-client-id")
    monkeypatch.setenv("CLIENT_SECRET", "sp-client-secret")
    monkeypatch.setenv("TENANT_ID", "sp-tenant-id")
    monkeypatch.setenv("SUBSCRIPTION_ID", "test-subscription-123")


@pytest.fixture
def all_credentials():
    """Credentials for all four identity providers."""
    return {
        "aad": IdentityProviderCredentials("aad", {"application_id": "aad-app-id", "tenant_id": "aad-tenant-id"}),
        "facebook": IdentityProviderCredentials("facebook", {"app_id": "fb-app-id", "app_secret": "fb-app-secret"}),
        "google": IdentityProviderCredentials("google", {"client_id": "g-client-id", "client_secret": "g-client-secret"}),
        "microsoft": IdentityProviderCredentials("microsoft", {"client_id": "ms-client-id", "client_secret": "ms-client-secret"}),
    }


@pytest.fixture
def naming():
    """Deterministic naming: every random suffix is 'test'."""
    return SampleNaming(name_factory=lambda prefix: f"{prefix}test")


@pytest.fixture
def mock_provider():
    """
    Create a mock AzureProvider whose web client behaves like the SDK.
    
    - app_service_plans.begin_create_or_update returns a plan with PLAN_ID
    - web_apps.begin_create_or_update returns a site named after the request
      and bound to the requested serverFarmId
    """
    provider = MagicMock()
    provider.subscription_id = "test-subscription-123"
    provider.clients = {
        "resource": MagicMock(),
        "web": MagicMock(),
    }
    
    web = provider.clients["web"]
    plan = MagicMock()
    plan.id = PLAN_ID
    web.app_service_plans.begin_create_or_update.return_value.result.return_value = plan
    
    def create_site(resource_group_name, name, site_envelope):
        site = MagicMock()
        site.name = name
        site.resource_group = resource_group_name
        site.server_farm_id = site_envelope["properties"]["serverFarmId"]
        site.default_host_name = f"{name}.azurewebsites.net"
        poller = MagicMock()
        poller.result.return_value = site
        return poller
    
    web.web_apps.begin_create_or_update.side_effect = create_site
    return provider
