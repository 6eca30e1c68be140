"""
Azure resource naming for a sample run.

Every run gets fresh random names so that runs never collide with each
other or with leftovers from a failed cleanup.

Naming Convention:
    - Resource Group: rg1NEMV_{random}
    - Web Apps: webapp1-{random} ... webapp4-{random}
    - App Service Plan: {first web app}-plan
    - Web App URL: {web app}.azurewebsites.net

    Web app names are global DNS labels: lowercase alphanumeric and
    hyphens, at most 60 characters.
"""

import uuid
from typing import Callable, Dict, Optional

import webapp_auth.constants as CONSTANTS


def create_random_name(prefix: str, length: int = CONSTANTS.RANDOM_SUFFIX_LENGTH) -> str:
    """Append a random hexadecimal suffix to a prefix."""
    return f"{prefix}{uuid.uuid4().hex[:length]}"


class SampleNaming:
    """
    Generates and remembers the resource names of one sample run.
    
    Names are generated lazily and cached, so asking twice returns the
    same name.
    """
    
    def __init__(self, name_factory: Optional[Callable[[str], str]] = None):
        self._name_factory = name_factory or create_random_name
        self._names: Dict[str, str] = {}
    
    def _cached(self, key: str, prefix: str) -> str:
        if key not in self._names:
            self._names[key] = self._name_factory(prefix)
        return self._names[key]
    
    def resource_group(self) -> str:
        """Resource Group holding every resource of the run."""
        return self._cached("resource_group", CONSTANTS.RESOURCE_GROUP_PREFIX)
    
    def web_app(self, prefix: str) -> str:
        """
        Web app name for a catalog prefix (e.g. "webapp1-").
        
        Raises:
            ValueError: If the generated name is not a valid web app name
        """
        name = self._cached(f"web_app:{prefix}", prefix).lower()
        if len(name) > CONSTANTS.WEB_APP_NAME_MAX_LENGTH:
            raise ValueError(
                f"Web app name '{name}' exceeds {CONSTANTS.WEB_APP_NAME_MAX_LENGTH} characters"
            )
        return name
    
    def app_service_plan(self, first_app_name: str) -> str:
        """App Service Plan shared by all web apps, named after the first one."""
        return f"{first_app_name}-plan"
    
    @staticmethod
    def web_app_url(app_name: str) -> str:
        return f"{app_name}{CONSTANTS.WEB_APP_DOMAIN_SUFFIX}"
