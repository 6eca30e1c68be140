"""
Web App Authentication Sample - CLI Entry Point.

Usage:
    webapp-auth-sample                         # run, prompting for credentials
    webapp-auth-sample run --config creds.json --non-interactive
    webapp-auth-sample cleanup --dry-run       # list leaked resource groups

Environment:
    CLIENT_ID, CLIENT_SECRET, TENANT_ID, SUBSCRIPTION_ID (required)
    AZURE_REGION, LOG_MODE (optional)
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import webapp_auth.constants as CONSTANTS
from webapp_auth.logger import logger, configure_logger, print_stack_trace
from webapp_auth.core.config_loader import AzureSettings, load_azure_settings, load_configured_credentials
from webapp_auth.core.context import SampleContext
from webapp_auth.core.exceptions import ConfigurationError
from webapp_auth.identity_providers import IDENTITY_PROVIDERS
from webapp_auth.prompts import InteractiveCredentialSource, PresetCredentialSource
from webapp_auth.providers.azure.cleanup import cleanup_resource_groups
from webapp_auth.providers.azure.naming import SampleNaming
from webapp_auth.providers.azure.provider import AzureProvider
from webapp_auth.sample import run_sample


# ==========================================
# Argument Parsing
# ==========================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webapp-auth-sample",
        description="Create Azure web apps with Active Directory, Facebook, Google "
                    "and Microsoft logins, then delete them again."
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument(
        "--env-file",
        default=CONSTANTS.DEFAULT_ENV_FILE,
        help="Optional .env file with service principal settings (default: .env)."
    )
    parser.set_defaults(
        command="run",
        config=None,
        non_interactive=False,
        region=None,
        prefix=CONSTANTS.RESOURCE_GROUP_PREFIX,
        dry_run=False,
    )
    
    subparsers = parser.add_subparsers(dest="command")
    
    run_parser = subparsers.add_parser("run", help="Run the sample (default).")
    run_parser.add_argument(
        "--config",
        type=Path,
        help="JSON file with identity provider credentials."
    )
    run_parser.add_argument(
        "--non-interactive",
        action="store_true",
        help="Never prompt; fail if a provider has no configured credentials."
    )
    run_parser.add_argument("--region", help=f"Azure region (default: {CONSTANTS.DEFAULT_REGION}).")
    
    cleanup_parser = subparsers.add_parser("cleanup", help="Delete resource groups leaked by earlier runs.")
    cleanup_parser.add_argument(
        "--prefix",
        default=CONSTANTS.RESOURCE_GROUP_PREFIX,
        help=f"Resource group name prefix (default: {CONSTANTS.RESOURCE_GROUP_PREFIX})."
    )
    cleanup_parser.add_argument("--dry-run", action="store_true", help="Only list matching resource groups.")
    
    return parser


# ==========================================
# Command Handlers
# ==========================================

def handle_run(args: argparse.Namespace, settings: AzureSettings, provider: AzureProvider) -> None:
    """Run the sample with credentials from config, env and/or the console."""
    configured = load_configured_credentials(args.config)
    fallback = None if args.non_interactive else InteractiveCredentialSource()
    
    if args.non_interactive:
        missing = [demo.key for demo in IDENTITY_PROVIDERS if demo.key not in configured]
        if missing:
            raise ConfigurationError(
                f"--non-interactive needs credentials for every provider; missing: {', '.join(missing)}"
            )
    
    if args.region:
        settings = settings.model_copy(update={"AZURE_REGION": args.region})
    
    context = SampleContext(
        settings=settings,
        naming=SampleNaming(),
        provider=provider,
        credential_source=PresetCredentialSource(configured, fallback=fallback),
    )
    
    provisioned = run_sample(context)
    for web_app in provisioned:
        logger.info(f"  {web_app.provider_key}: https://{web_app.url}")


def handle_cleanup(args: argparse.Namespace, provider: AzureProvider) -> None:
    matches = cleanup_resource_groups(provider, prefix=args.prefix, dry_run=args.dry_run)
    logger.info(f"Matched {len(matches)} resource group(s) with prefix {args.prefix}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Entry point.
    
    Returns:
        0 on success, 1 if an error was caught and logged
    """
    args = build_parser().parse_args(argv)
    configure_logger(debug_mode=args.debug)
    
    try:
        # Authenticate
        settings = load_azure_settings(env_file=args.env_file)
        if settings.debug_mode and not args.debug:
            configure_logger(debug_mode=True)
        
        provider = AzureProvider()
        provider.initialize_clients(settings)
        
        logger.info(f"Selected subscription: {provider.subscription_id}")
        
        if args.command == "cleanup":
            handle_cleanup(args, provider)
        else:
            handle_run(args, settings, provider)
        return 0
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 1
    except Exception as e:
        logger.error(f"{type(e).__name__}: {e}")
        print_stack_trace()
        return 1


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
