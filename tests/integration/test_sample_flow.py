"""
End-to-end sample flow against mocked Azure SDK clients.

Properties checked:
    - One resource group and four web apps are created, then the group is deleted
    - The first web app creates the App Service Plan, the rest reuse it
    - Each web app gets exactly its own identity provider's settings
    - Cleanup is attempted on every failure path
    - "Nothing to clean up" is reported only when no resource group exists
"""

import pytest
from unittest.mock import MagicMock
from azure.core.exceptions import HttpResponseError

from webapp_auth.core.config_loader import AzureSettings
from webapp_auth.core.context import IdentityProviderCredentials, SampleContext
from webapp_auth.core.exceptions import ConfigurationError
from webapp_auth.prompts import InteractiveCredentialSource, PresetCredentialSource
from webapp_auth.sample import cleanup, run_sample

PLAN_ID = "/subscriptions/test-subscription-123/resourceGroups/rg1NEMV_test/providers/Microsoft.Web/serverfarms/webapp1-test-plan"
NOTHING_TO_CLEAN = "Did not create any resources in Azure. No clean up is necessary"

SOCIAL_FIELDS = {
    "webapp2-test": {"facebookAppId": "fb-app-id", "facebookAppSecret": "fb-app-secret"},
    "webapp3-test": {"googleClientId": "g-client-id", "googleClientSecret": "g-client-secret"},
    "webapp4-test": {
        "microsoftAccountClientId": "ms-client-id",
        "microsoftAccountClientSecret": "ms-client-secret",
    },
}
ALL_SOCIAL_KEYS = {key for fields in SOCIAL_FIELDS.values() for key in fields}


@pytest.fixture
def settings():
    return AzureSettings(
        _env_file=None,
        CLIENT_ID="sp-client-id",
        CLIENT_SECRET="sp-client-secret",
        TENANT_ID="sp-tenant-id",
        SUBSCRIPTION_ID="test-subscription-123",
    )


@pytest.fixture
def context(settings, naming, mock_provider, all_credentials):
    return SampleContext(
        settings=settings,
        naming=naming,
        provider=mock_provider,
        credential_source=PresetCredentialSource(all_credentials),
    )


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level("INFO", logger="webapp_auth")
    return caplog


class TestSuccessfulRun:
    
    def test_creates_one_group_and_four_apps_then_deletes(self, context, mock_provider):
        resource = mock_provider.clients["resource"]
        web = mock_provider.clients["web"]
        
        provisioned = run_sample(context)
        
        resource.resource_groups.create_or_update.assert_called_once()
        assert resource.resource_groups.create_or_update.call_args.kwargs["resource_group_name"] == "rg1NEMV_test"
        assert web.web_apps.begin_create_or_update.call_count == 4
        resource.resource_groups.begin_delete.assert_called_once_with("rg1NEMV_test")
        
        assert [app.name for app in provisioned] == [
            "webapp1-test", "webapp2-test", "webapp3-test", "webapp4-test"
        ]
        assert [app.provider_key for app in provisioned] == ["aad", "facebook", "google", "microsoft"]
        assert provisioned[0].url == "webapp1-test.azurewebsites.net"
    
    def test_plan_is_created_once_and_shared(self, context, mock_provider):
        web = mock_provider.clients["web"]
        
        provisioned = run_sample(context)
        
        web.app_service_plans.begin_create_or_update.assert_called_once()
        assert web.app_service_plans.begin_create_or_update.call_args.kwargs["name"] == "webapp1-test-plan"
        for call in web.web_apps.begin_create_or_update.call_args_list:
            assert call.kwargs["site_envelope"]["properties"]["serverFarmId"] == PLAN_ID
        assert {app.plan_id for app in provisioned} == {PLAN_ID}
    
    def test_each_app_gets_only_its_own_provider_settings(self, context, mock_provider):
        web = mock_provider.clients["web"].web_apps
        
        run_sample(context)
        
        # Directory login on app 1 only
        web.update_auth_settings_v2.assert_called_once()
        v2_call = web.update_auth_settings_v2.call_args
        assert v2_call.kwargs["name"] == "webapp1-test"
        registration = v2_call.kwargs["site_auth_settings_v2"]["properties"]["identityProviders"]["azureActiveDirectory"]["registration"]
        assert registration["clientId"] == "aad-app-id"
        
        # One classic update per social app, each on its own app
        assert web.update_auth_settings.call_count == 3
        updated = {}
        for call in web.update_auth_settings.call_args_list:
            props = call.kwargs["site_auth_settings"]["properties"]
            updated[call.kwargs["name"]] = {k: v for k, v in props.items() if k in ALL_SOCIAL_KEYS}
        assert updated == SOCIAL_FIELDS
    
    def test_apps_exist_before_their_settings_are_updated(self, context, mock_provider):
        events = []
        web = mock_provider.clients["web"].web_apps
        create_site = web.begin_create_or_update.side_effect
        
        def record_create(**kwargs):
            events.append(("create", kwargs["name"]))
            return create_site(**kwargs)
        
        web.begin_create_or_update.side_effect = record_create
        web.update_auth_settings_v2.side_effect = lambda **kwargs: events.append(("auth", kwargs["name"]))
        web.update_auth_settings.side_effect = lambda **kwargs: events.append(("auth", kwargs["name"]))
        
        run_sample(context)
        
        assert events == [
            ("create", "webapp1-test"), ("auth", "webapp1-test"),
            ("create", "webapp2-test"), ("auth", "webapp2-test"),
            ("create", "webapp3-test"), ("auth", "webapp3-test"),
            ("create", "webapp4-test"), ("auth", "webapp4-test"),
        ]
    
    def test_operator_is_prompted_between_create_and_update(self, context, mock_provider, all_credentials):
        """Configured providers skip the console; the rest are asked after their app exists."""
        events = []
        answers = iter([
            "typed-aad-app", "typed-aad-tenant",
            "typed-g-client", "typed-g-secret",
            "typed-ms-client", "typed-ms-secret",
        ])
        
        def scripted_input(prompt):
            events.append(("prompt", prompt))
            return next(answers)
        
        web = mock_provider.clients["web"].web_apps
        create_site = web.begin_create_or_update.side_effect
        
        def record_create(**kwargs):
            events.append(("create", kwargs["name"]))
            return create_site(**kwargs)
        
        web.begin_create_or_update.side_effect = record_create
        web.update_auth_settings_v2.side_effect = lambda **kwargs: events.append(("auth", kwargs["name"]))
        web.update_auth_settings.side_effect = lambda **kwargs: events.append(("auth", kwargs["name"]))
        
        context.credential_source = PresetCredentialSource(
            {"facebook": all_credentials["facebook"]},
            fallback=InteractiveCredentialSource(input_func=scripted_input),
        )
        
        run_sample(context)
        
        assert events == [
            ("create", "webapp1-test"),
            ("prompt", "Application ID is: "), ("prompt", "Tenant ID is: "),
            ("auth", "webapp1-test"),
            ("create", "webapp2-test"),
            ("auth", "webapp2-test"),
            ("create", "webapp3-test"),
            ("prompt", "Client ID is: "), ("prompt", "Client secret is: "),
            ("auth", "webapp3-test"),
            ("create", "webapp4-test"),
            ("prompt", "Client ID is: "), ("prompt", "Client secret is: "),
            ("auth", "webapp4-test"),
        ]
        
        google_call = web.update_auth_settings.call_args_list[1]
        assert google_call.kwargs["name"] == "webapp3-test"
        assert google_call.kwargs["site_auth_settings"]["properties"]["googleClientId"] == "typed-g-client"


class TestFailurePaths:
    
    def test_web_app_failure_still_deletes_group(self, context, mock_provider, caplog_info):
        web = mock_provider.clients["web"]
        web.web_apps.begin_create_or_update.side_effect = HttpResponseError("Conflict")
        
        with pytest.raises(HttpResponseError):
            run_sample(context)
        
        mock_provider.clients["resource"].resource_groups.begin_delete.assert_called_once_with("rg1NEMV_test")
        assert NOTHING_TO_CLEAN not in caplog_info.text
    
    def test_missing_credentials_still_deletes_group(self, context, mock_provider, all_credentials):
        del all_credentials["google"]
        context.credential_source = PresetCredentialSource(all_credentials)
        
        with pytest.raises(ConfigurationError):
            run_sample(context)
        
        web = mock_provider.clients["web"]
        assert web.web_apps.begin_create_or_update.call_count == 3
        mock_provider.clients["resource"].resource_groups.begin_delete.assert_called_once()
    
    def test_credentials_for_wrong_provider_are_rejected(self, context, mock_provider):
        wrong = MagicMock()
        wrong.collect.return_value = IdentityProviderCredentials("facebook", {"app_id": "a", "app_secret": "b"})
        context.credential_source = wrong
        
        with pytest.raises(ConfigurationError, match="Expected aad credentials"):
            run_sample(context)
        
        mock_provider.clients["web"].web_apps.update_auth_settings.assert_not_called()
        mock_provider.clients["resource"].resource_groups.begin_delete.assert_called_once()
    
    def test_group_creation_failure_reports_nothing_to_clean(self, context, mock_provider, caplog_info):
        resource = mock_provider.clients["resource"]
        resource.resource_groups.create_or_update.side_effect = HttpResponseError("Quota exceeded")
        
        with pytest.raises(HttpResponseError):
            run_sample(context)
        
        resource.resource_groups.begin_delete.assert_not_called()
        assert NOTHING_TO_CLEAN in caplog_info.text
    
    def test_cleanup_failure_is_logged_not_raised(self, context, mock_provider, caplog_info):
        resource = mock_provider.clients["resource"]
        resource.resource_groups.begin_delete.side_effect = HttpResponseError("Internal error")
        
        provisioned = run_sample(context)
        
        assert len(provisioned) == 4
        assert "Cleanup failed, resource group rg1NEMV_test may still exist" in caplog_info.text


class TestCleanup:
    
    def test_cleanup_without_group(self, mock_provider, caplog_info):
        assert cleanup(mock_provider, None) is True
        
        mock_provider.clients["resource"].resource_groups.begin_delete.assert_not_called()
        assert NOTHING_TO_CLEAN in caplog_info.text
    
    def test_cleanup_with_group(self, mock_provider, caplog_info):
        assert cleanup(mock_provider, "rg1NEMV_test") is True
        
        assert "Deleted Resource Group: rg1NEMV_test" in caplog_info.text
    
    def test_cleanup_swallows_unexpected_errors(self, mock_provider):
        mock_provider.clients["resource"].resource_groups.begin_delete.side_effect = RuntimeError("boom")
        
        assert cleanup(mock_provider, "rg1NEMV_test") is False
