"""
Azure App Service sample for managing authentication for web apps.

Creates 4 web apps under the same new App Service plan with:
    - Active Directory login for 1
    - Facebook login for 2
    - Google login for 3
    - Microsoft login for 4

Order of Operations:
    1. Resource Group
    2. Per identity provider: web app (the first also creates the plan),
       operator credentials, authentication settings of that web app
    3. Resource Group deletion, always attempted
"""

import logging
from typing import List, Optional, TYPE_CHECKING

from webapp_auth.core.context import ProvisionedWebApp
from webapp_auth.core.exceptions import ConfigurationError
from webapp_auth.identity_providers import IDENTITY_PROVIDERS, IdentityProviderDemo
from webapp_auth.logger import print_stack_trace
from webapp_auth.providers.azure.auth_settings import apply_auth_settings
from webapp_auth.providers.azure.resource_group import create_resource_group, destroy_resource_group
from webapp_auth.providers.azure.web_apps import create_web_app, describe_web_app

if TYPE_CHECKING:
    from webapp_auth.core.context import SampleContext
    from webapp_auth.providers.azure.provider import AzureProvider

logger = logging.getLogger(__name__)


def run_sample(context: 'SampleContext') -> List[ProvisionedWebApp]:
    """
    Run the whole sample and tear it down again.
    
    The Resource Group is deleted on every exit path. Errors raised while
    provisioning propagate to the caller after the cleanup attempt;
    cleanup errors are only logged.
    
    Args:
        context: SampleContext with initialized provider, naming and
            credential source
    
    Returns:
        The web apps that were provisioned (already deleted on return)
    """
    provider = context.provider
    rg_name: Optional[str] = None
    provisioned: List[ProvisionedWebApp] = []
    
    try:
        rg_name = create_resource_group(provider, context.naming.resource_group(), context.location)
        
        plan_id: Optional[str] = None
        for demo in IDENTITY_PROVIDERS:
            web_app = provision_web_app(context, rg_name, demo, plan_id)
            plan_id = web_app.plan_id
            provisioned.append(web_app)
        
        logger.info(f"✓ Provisioned {len(provisioned)} web apps in {rg_name}")
        return provisioned
    finally:
        cleanup(provider, rg_name)


def provision_web_app(
    context: 'SampleContext',
    rg_name: str,
    demo: IdentityProviderDemo,
    plan_id: Optional[str] = None
) -> ProvisionedWebApp:
    """
    Create one web app and wire its identity provider login.
    
    Args:
        context: SampleContext for the run
        rg_name: Resource Group the web app goes into
        demo: Identity provider catalog entry
        plan_id: App Service Plan to reuse; None creates a new plan
    
    Returns:
        ProvisionedWebApp with the plan ID the next web app should reuse
    
    Raises:
        ConfigurationError: If the credential source returns credentials for
            a different identity provider
    """
    provider = context.provider
    naming = context.naming
    
    app_name = naming.web_app(demo.name_prefix)
    app_url = naming.web_app_url(app_name)
    
    site = create_web_app(
        provider,
        rg_name,
        app_name,
        plan_id=plan_id,
        location=context.location,
        plan_name=naming.app_service_plan(app_name)
    )
    
    credentials = context.credential_source.collect(demo, app_url)
    if credentials.provider_key != demo.key:
        raise ConfigurationError(
            f"Expected {demo.key} credentials but got {credentials.provider_key}",
            identity_provider=demo.key
        )
    
    apply_auth_settings(provider, rg_name, app_name, credentials, app_url)
    logger.info(describe_web_app(site))
    
    return ProvisionedWebApp(
        name=app_name,
        url=app_url,
        provider_key=demo.key,
        plan_id=site.server_farm_id
    )


def cleanup(provider: 'AzureProvider', rg_name: Optional[str]) -> bool:
    """
    Best-effort deletion of the run's Resource Group.
    
    Args:
        provider: Initialized AzureProvider
        rg_name: Resource Group name, or None if it was never created
    
    Returns:
        True if the Resource Group is gone (or never existed), False if
        the deletion failed and resources may have leaked
    """
    if rg_name is None:
        logger.info("Did not create any resources in Azure. No clean up is necessary")
        return True
    
    try:
        destroy_resource_group(provider, rg_name)
        return True
    except Exception as e:
        logger.error(f"Cleanup failed, resource group {rg_name} may still exist: {e}")
        print_stack_trace()
        return False
