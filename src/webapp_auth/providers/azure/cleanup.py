"""
Azure SDK Cleanup Module.

Fallback cleanup for resource groups left behind when a run could not
delete its own resource group (e.g. the process was killed, or the delete
call itself failed).
"""
import logging
from typing import TYPE_CHECKING, List

from azure.core.exceptions import AzureError, ResourceNotFoundError

import webapp_auth.constants as CONSTANTS

if TYPE_CHECKING:
    from webapp_auth.providers.azure.provider import AzureProvider

logger = logging.getLogger(__name__)


def cleanup_resource_groups(
    provider: 'AzureProvider',
    prefix: str = CONSTANTS.RESOURCE_GROUP_PREFIX,
    dry_run: bool = False
) -> List[str]:
    """
    Delete every resource group whose name starts with prefix.
    
    Args:
        provider: Initialized AzureProvider
        prefix: Resource group name prefix (default: rg1NEMV_)
        dry_run: Log what would be deleted without deleting
    
    Returns:
        Names of the matching resource groups
    
    Raises:
        ValueError: If prefix is empty
    """
    if not prefix:
        raise ValueError("prefix is required")
    
    resource_client = provider.clients["resource"]
    
    logger.info(f"[Azure SDK] Cleanup for resource group prefix: {prefix}")
    if dry_run:
        logger.info("[Azure SDK] DRY RUN MODE - no resources will be deleted")
    
    matches = [
        rg.name for rg in resource_client.resource_groups.list()
        if rg.name and rg.name.startswith(prefix)
    ]
    
    if not matches:
        logger.info("  No orphaned resource groups found")
        return matches
    
    for rg_name in matches:
        logger.info(f"  Found orphan: {rg_name}")
        if dry_run:
            logger.info("    [DRY RUN] Would delete")
            continue
        try:
            poller = resource_client.resource_groups.begin_delete(rg_name)
            poller.result(timeout=CONSTANTS.LRO_TIMEOUT)
            logger.info("    ✓ Deleted")
        except ResourceNotFoundError:
            logger.info("    ✓ Already deleted")
        except AzureError as e:
            logger.warning(f"    ✗ Error: {e}")
    
    return matches
