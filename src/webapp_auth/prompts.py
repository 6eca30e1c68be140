"""
Identity provider credential sources.

The sample needs credentials for an externally created application per
identity provider, and they can only be created once the web app URL is
known. A CredentialSource is asked for them right after each web app is
created.

Sources:
    - InteractiveCredentialSource: asks the operator on the console
    - PresetCredentialSource: returns configured values (file / env), and
      optionally falls back to another source for anything not configured
"""

import logging
from typing import Callable, Dict, Optional

from webapp_auth.core.context import IdentityProviderCredentials
from webapp_auth.core.exceptions import ConfigurationError
from webapp_auth.identity_providers import IdentityProviderDemo

logger = logging.getLogger(__name__)


class CredentialSource:
    """Interface for anything that can supply identity provider credentials."""
    
    def collect(self, demo: IdentityProviderDemo, app_url: str) -> IdentityProviderCredentials:
        raise NotImplementedError


class InteractiveCredentialSource(CredentialSource):
    """
    Prompts the operator for each credential field in catalog order.
    
    Blank answers are asked again. End of input aborts the run with a
    ConfigurationError.
    """
    
    def __init__(self, input_func: Callable[[str], str] = input):
        self._input = input_func
    
    def collect(self, demo: IdentityProviderDemo, app_url: str) -> IdentityProviderCredentials:
        logger.info(f"{demo.instruction} {app_url}")
        
        values = {}
        for field in demo.fields:
            values[field.name] = self._read(field.prompt, demo.key)
        
        return IdentityProviderCredentials(provider_key=demo.key, values=values)
    
    def _read(self, prompt: str, provider_key: str) -> str:
        while True:
            try:
                answer = self._input(f"{prompt} ")
            except EOFError:
                raise ConfigurationError(
                    f"Input ended while waiting for '{prompt}'",
                    identity_provider=provider_key
                )
            answer = (answer or "").strip()
            if answer:
                return answer
            logger.warning("A value is required.")


class PresetCredentialSource(CredentialSource):
    """
    Returns pre-configured credentials without prompting.
    
    Args:
        credentials: Provider key -> configured credentials
        fallback: Source used for providers that are not configured. When
            None, a missing provider raises ConfigurationError.
    """
    
    def __init__(
        self,
        credentials: Dict[str, IdentityProviderCredentials],
        fallback: Optional[CredentialSource] = None
    ):
        self._credentials = dict(credentials)
        self._fallback = fallback
    
    def collect(self, demo: IdentityProviderDemo, app_url: str) -> IdentityProviderCredentials:
        configured = self._credentials.get(demo.key)
        if configured is not None:
            logger.info(f"Using configured {demo.display_name} credentials for {app_url}")
            return configured
        
        if self._fallback is None:
            raise ConfigurationError(
                f"No credentials configured for {demo.display_name} login "
                f"and interactive prompts are disabled",
                identity_provider=demo.key
            )
        return self._fallback.collect(demo, app_url)
