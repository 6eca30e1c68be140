"""
Configuration loading utilities.

Two kinds of configuration feed a run:

    1. Service principal settings (required) - CLIENT_ID, CLIENT_SECRET,
       TENANT_ID and SUBSCRIPTION_ID from the environment or a .env file.
    2. Identity provider credentials (optional) - from a JSON file and/or
       environment variables, so the sample can run without prompting.

Credentials File Format:
    {
        "aad": {"application_id": "...", "tenant_id": "..."},
        "facebook": {"app_id": "...", "app_secret": "..."},
        "google": {"client_id": "...", "client_secret": "..."},
        "microsoft": {"client_id": "...", "client_secret": "..."}
    }

Usage:
    from webapp_auth.core.config_loader import load_azure_settings

    settings = load_azure_settings()
    print(settings.SUBSCRIPTION_ID)
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

import webapp_auth.constants as CONSTANTS
from webapp_auth.identity_providers import IDENTITY_PROVIDERS
from .context import IdentityProviderCredentials
from .exceptions import ConfigurationError


class AzureSettings(BaseSettings):
    # Service principal
    CLIENT_ID: str = ""
    CLIENT_SECRET: str = ""
    TENANT_ID: str = ""
    SUBSCRIPTION_ID: str = ""
    
    # Deployment
    AZURE_REGION: str = CONSTANTS.DEFAULT_REGION
    
    # Logging ("DEBUG" enables debug output)
    LOG_MODE: str = ""
    
    class Config:
        env_file = CONSTANTS.DEFAULT_ENV_FILE
        extra = "ignore"
    
    @property
    def debug_mode(self) -> bool:
        return self.LOG_MODE.upper() == "DEBUG"
    
    def missing_required(self) -> list[str]:
        """Names of required variables that are unset or blank."""
        return [
            name for name in CONSTANTS.REQUIRED_ENV_VARS
            if not str(getattr(self, name) or "").strip()
        ]


def _describe_validation_error(error: ValidationError) -> str:
    """Field locations and messages only; input values may be secrets."""
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors(include_input=False, include_url=False)
    )


def load_azure_settings(env_file: Optional[str] = CONSTANTS.DEFAULT_ENV_FILE) -> AzureSettings:
    """
    Load service principal settings from the environment.
    
    Args:
        env_file: Optional .env file to read as well (None disables it)
    
    Returns:
        AzureSettings with every required value present
    
    Raises:
        ConfigurationError: If any required variable is missing or empty
    """
    try:
        settings = AzureSettings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment settings: {_describe_validation_error(e)}")
    
    missing = settings.missing_required()
    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )
    return settings


# ==========================================
# Identity Provider Credentials
# ==========================================

class _StrictModel(BaseModel):
    class Config:
        extra = "forbid"


class AadCredentialsModel(_StrictModel):
    application_id: str = Field(min_length=1)
    tenant_id: str = Field(min_length=1)


class FacebookCredentialsModel(_StrictModel):
    app_id: str = Field(min_length=1)
    app_secret: str = Field(min_length=1)


class ClientCredentialsModel(_StrictModel):
    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)


class IdentityCredentialsFile(_StrictModel):
    aad: Optional[AadCredentialsModel] = None
    facebook: Optional[FacebookCredentialsModel] = None
    google: Optional[ClientCredentialsModel] = None
    microsoft: Optional[ClientCredentialsModel] = None


def _load_json_file(file_path: Path) -> Dict[str, Any]:
    """
    Load a JSON file and return its contents as a dictionary.
    
    Raises:
        ConfigurationError: If the file is missing or has invalid JSON
    """
    if not file_path.exists():
        raise ConfigurationError(
            f"Credentials file not found: {file_path.name}",
            config_file=str(file_path)
        )
    
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in credentials file: {e}",
            config_file=str(file_path)
        )
    
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Credentials file must contain a JSON object",
            config_file=str(file_path)
        )
    return data


def load_identity_credentials(file_path: Path) -> Dict[str, IdentityProviderCredentials]:
    """
    Load identity provider credentials from a JSON file.
    
    Providers absent from the file are simply not returned. Every provider
    that is present must carry all of its fields.
    
    Args:
        file_path: Path to the credentials JSON file
    
    Returns:
        Mapping of provider key to IdentityProviderCredentials
    
    Raises:
        ConfigurationError: If the file is missing, malformed, names an unknown
            provider or field, or leaves a field empty
    """
    file_path = Path(file_path)
    data = _load_json_file(file_path)
    
    try:
        parsed = IdentityCredentialsFile(**data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid identity provider credentials: {_describe_validation_error(e)}",
            config_file=str(file_path)
        )
    
    credentials = {}
    for key, values in parsed.model_dump(exclude_none=True).items():
        credentials[key] = IdentityProviderCredentials(provider_key=key, values=values)
    return credentials


def load_identity_credentials_from_env(
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, IdentityProviderCredentials]:
    """
    Load identity provider credentials from environment variables.
    
    A provider is returned only when all of its variables are set
    (e.g. FACEBOOK_APP_ID and FACEBOOK_APP_SECRET).
    
    Raises:
        ConfigurationError: If only some of a provider's variables are set
    """
    environ = os.environ if environ is None else environ
    credentials = {}
    
    for demo in IDENTITY_PROVIDERS:
        values = {
            f.name: environ[f.env_var].strip()
            for f in demo.fields
            if environ.get(f.env_var, "").strip()
        }
        if not values:
            continue
        if len(values) != len(demo.fields):
            missing = [f.env_var for f in demo.fields if f.name not in values]
            raise ConfigurationError(
                f"Incomplete credentials in environment, missing: {', '.join(missing)}",
                identity_provider=demo.key
            )
        credentials[demo.key] = IdentityProviderCredentials(provider_key=demo.key, values=values)
    
    return credentials


def load_configured_credentials(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, IdentityProviderCredentials]:
    """
    Merge identity provider credentials from the environment and a file.
    
    File entries win over environment entries for the same provider.
    """
    credentials = load_identity_credentials_from_env(environ)
    if config_path is not None:
        credentials.update(load_identity_credentials(config_path))
    return credentials
