"""
Azure web app and App Service Plan management.

Components Managed:
    - App Service Plan: Standard S1 Windows plan shared by every web app
    - Web Apps: One per identity provider login, .NET Framework v4.6

The first web app of a run creates the plan; every later web app is
created with the plan's resource ID so all four share the same workers.
"""

from typing import TYPE_CHECKING, Any, Optional
import logging

from azure.core.exceptions import (
    AzureError,
    HttpResponseError,
    ClientAuthenticationError
)

import webapp_auth.constants as CONSTANTS
from webapp_auth.core.exceptions import ResourceCreationError

if TYPE_CHECKING:
    from webapp_auth.providers.azure.provider import AzureProvider

logger = logging.getLogger(__name__)


# ==========================================
# 1. App Service Plan
# ==========================================

def create_app_service_plan(
    provider: 'AzureProvider',
    rg_name: str,
    plan_name: str,
    location: str = CONSTANTS.DEFAULT_REGION
) -> str:
    """
    Create the App Service Plan shared by the web apps (Standard S1).
    
    Args:
        provider: Initialized AzureProvider
        rg_name: Resource Group name
        plan_name: App Service Plan name
        location: Azure region
        
    Returns:
        App Service Plan resource ID
        
    Raises:
        ValueError: If provider is None
        ResourceCreationError: If Azure returns a plan without an ID
        HttpResponseError: If creation fails
        ClientAuthenticationError: If permission denied
    """
    if provider is None:
        raise ValueError("provider is required")
    
    logger.info(f"Creating App Service Plan: {plan_name}")
    
    try:
        poller = provider.clients["web"].app_service_plans.begin_create_or_update(
            resource_group_name=rg_name,
            name=plan_name,
            app_service_plan={
                "location": location,
                "sku": dict(CONSTANTS.APP_SERVICE_PLAN_SKU),
                "properties": {
                    "reserved": False  # Windows
                }
            }
        )
        plan = poller.result(timeout=CONSTANTS.LRO_TIMEOUT)
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating App Service Plan: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create App Service Plan: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating App Service Plan: {type(e).__name__}: {e}")
        raise
    
    plan_id = getattr(plan, "id", None)
    if not plan_id:
        raise ResourceCreationError("app_service_plan", plan_name)
    
    logger.info(f"✓ App Service Plan created: {plan_name}")
    return plan_id


# ==========================================
# 2. Web Apps
# ==========================================

def create_web_app(
    provider: 'AzureProvider',
    rg_name: str,
    app_name: str,
    plan_id: Optional[str] = None,
    location: str = CONSTANTS.DEFAULT_REGION,
    plan_name: Optional[str] = None
) -> Any:
    """
    Create a web app, creating the App Service Plan first when needed.
    
    Args:
        provider: Initialized AzureProvider
        rg_name: Resource Group name
        app_name: Web app name (also its DNS label)
        plan_id: Existing App Service Plan resource ID to reuse. When None
            a new plan is created.
        location: Azure region
        plan_name: Name of the plan to create (default: {app_name}-plan)
        
    Returns:
        The created Site. ``site.server_farm_id`` is the plan to reuse.
        
    Raises:
        ResourceCreationError: If the created site has no App Service Plan
        HttpResponseError: If creation fails
        ClientAuthenticationError: If permission denied
    """
    if provider is None:
        raise ValueError("provider is required")
    
    if plan_id is None:
        plan_id = create_app_service_plan(
            provider, rg_name, plan_name or f"{app_name}-plan", location
        )
    
    logger.info(f"Creating web app {app_name} in resource group {rg_name}...")
    
    params = {
        "location": location,
        "kind": "app",
        "properties": {
            "serverFarmId": plan_id,
            "siteConfig": {
                "netFrameworkVersion": CONSTANTS.NET_FRAMEWORK_VERSION,
            },
        },
    }
    
    try:
        poller = provider.clients["web"].web_apps.begin_create_or_update(
            resource_group_name=rg_name,
            name=app_name,
            site_envelope=params
        )
        site = poller.result(timeout=CONSTANTS.LRO_TIMEOUT)
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating web app: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create web app {app_name}: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating web app: {type(e).__name__}: {e}")
        raise
    
    if not getattr(site, "server_farm_id", None):
        raise ResourceCreationError("web_app", app_name)
    
    logger.info(f"Created web app {site.name}")
    logger.info(describe_web_app(site))
    return site


def describe_web_app(site: Any) -> str:
    """Multi-line summary of a Site for console output."""
    return "\n".join([
        f"Web app: {getattr(site, 'id', None)}",
        f"\tName: {getattr(site, 'name', None)}",
        f"\tResource group: {getattr(site, 'resource_group', None)}",
        f"\tRegion: {getattr(site, 'location', None)}",
        f"\tState: {getattr(site, 'state', None)}",
        f"\tDefault hostname: {getattr(site, 'default_host_name', None)}",
        f"\tApp service plan: {getattr(site, 'server_farm_id', None)}",
        f"\tHTTPS only: {getattr(site, 'https_only', None)}",
    ])
