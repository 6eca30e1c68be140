"""
Azure Resource Group management.

The Resource Group is created first and deleted last; deleting it removes
the App Service plan and every web app of the run with it.
"""

from typing import TYPE_CHECKING
import logging

from azure.core.exceptions import (
    ResourceNotFoundError,
    HttpResponseError,
    ClientAuthenticationError,
    AzureError
)

import webapp_auth.constants as CONSTANTS
from webapp_auth.core.exceptions import ResourceDeletionError

if TYPE_CHECKING:
    from webapp_auth.providers.azure.provider import AzureProvider

logger = logging.getLogger(__name__)


def create_resource_group(provider: 'AzureProvider', rg_name: str, location: str = CONSTANTS.DEFAULT_REGION) -> str:
    """
    Create the Resource Group for the run.
    
    Args:
        provider: Azure Provider instance with initialized clients
        rg_name: Resource Group name
        location: Azure region for the Resource Group (default: eastus)
    
    Returns:
        The Resource Group name
    
    Raises:
        ValueError: If provider or rg_name is missing
        azure.core.exceptions.HttpResponseError: If creation fails
    """
    if provider is None:
        raise ValueError("provider is required")
    if not rg_name:
        raise ValueError("rg_name is required")
    
    logger.info(f"Creating Resource Group: {rg_name} in {location}")
    
    try:
        provider.clients["resource"].resource_groups.create_or_update(
            resource_group_name=rg_name,
            parameters={"location": location}
        )
        
        logger.info(f"✓ Resource Group created: {rg_name}")
        return rg_name
    except ClientAuthenticationError as e:
        logger.error(f"PERMISSION DENIED creating Resource Group: {e.message}")
        raise
    except HttpResponseError as e:
        logger.error(f"Failed to create Resource Group: {e.status_code} - {e.message}")
        raise
    except AzureError as e:
        logger.error(f"Azure error creating Resource Group: {type(e).__name__}: {e}")
        raise


def destroy_resource_group(provider: 'AzureProvider', rg_name: str) -> None:
    """
    Delete the Resource Group and ALL resources within it.
    
    Waits for the long-running delete to finish. A group that no longer
    exists counts as deleted.
    
    Args:
        provider: Azure Provider instance
        rg_name: Resource Group name
    
    Raises:
        ResourceDeletionError: If Azure rejects or fails the deletion
    """
    logger.info(f"Deleting Resource Group: {rg_name}")
    
    try:
        poller = provider.clients["resource"].resource_groups.begin_delete(rg_name)
        poller.result(timeout=CONSTANTS.LRO_TIMEOUT)
        logger.info(f"Deleted Resource Group: {rg_name}")
    except ResourceNotFoundError:
        logger.info(f"Resource Group already deleted: {rg_name}")
    except AzureError as e:
        raise ResourceDeletionError("resource_group", rg_name, original_error=e) from e
