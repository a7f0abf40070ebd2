"""Centralized service configuration for the Bing Ads API.

This module is the single source of truth for versions, services, endpoint
URLs, namespaces and per-environment authentication constants. All lookups
are static; nothing here holds mutable state.
"""

from typing import Dict, List, Literal, Optional

# Type aliases for version and environment codes
Version = Literal["v8", "v9"]
Environment = Literal["PRODUCTION", "SANDBOX"]


class ApiConfig:
    """Static lookup of Bing Ads API versions, services and endpoints.

    Components should query this class (or an injected subclass) instead of
    defining their own URL tables.
    """

    DEFAULT_VERSION: Version = "v9"
    LATEST_VERSION: Version = "v9"
    DEFAULT_ENVIRONMENT: Environment = "PRODUCTION"

    API_NAME = "BingAdsApi"
    DEFAULT_CONFIG_FILENAME = "bing_ads_api.yml"

    # Services available to each version
    SERVICE_CONFIG: Dict[str, List[str]] = {
        "v8": [
            "AdIntelligenceService",
            "AdministrationService",
            "BulkService",
            "CampaignManagementService",
            "CustomerBillingService",
            "CustomerManagementService",
            "NotificationService",
            "OptimizerService",
            "ReportingService",
        ],
        "v9": [
            "AdIntelligenceService",
            "BulkService",
            "CampaignManagementService",
            "CustomerBillingService",
            "CustomerManagementService",
            "OptimizerService",
            "ReportingService",
        ],
    }

    # Per-environment constants; version keys hold the advertiser API base
    ENVIRONMENT_CONFIG: Dict[str, Dict[str, Optional[str]]] = {
        "PRODUCTION": {
            "oauth_scope": "bingads.manage",
            "oauth_token_url": "https://login.live.com/oauth20_token.srf",
            "header_ns": "https://adcenter.microsoft.com/api/adcenter/",
            "v8": "https://adcenterapi.microsoft.com/Api/Advertiser/",
            "v9": "https://api.bingads.microsoft.com/Api/Advertiser/",
        },
        "SANDBOX": {
            "oauth_scope": "bingads.manage",
            "oauth_token_url": "https://login.live-int.com/oauth20_token.srf",
            "header_ns": "https://adcenter.microsoft.com/api/adcenter/",
            "v8": None,
            "v9": "https://api.sandbox.bingads.microsoft.com/Api/Advertiser/",
        },
    }

    # Root of the service namespaces; the version is appended
    DEFAULT_NS_ROOT = "https://bingads.microsoft.com/"

    ADDRESS_CONFIG: Dict[str, Dict[str, Dict[str, Optional[str]]]] = {
        "v9": {
            "AdIntelligenceService": {
                "PRODUCTION": "https://api.bingads.microsoft.com/Api/Advertiser/AdIntelligence/v9/AdIntelligenceService.svc?wsdl",
                "SANDBOX": "https://api.sandbox.bingads.microsoft.com/Api/Advertiser/AdIntelligence/v9/AdIntelligenceService.svc?wsdl",
            },
            "BulkService": {
                "PRODUCTION": "https://api.bingads.microsoft.com/Api/Advertiser/CampaignManagement/v9/BulkService.svc?wsdl",
                "SANDBOX": "https://api.sandbox.bingads.microsoft.com/Api/Advertiser/CampaignManagement/v9/BulkService.svc?wsdl",
            },
            "CampaignManagementService": {
                "PRODUCTION": "https://api.bingads.microsoft.com/Api/Advertiser/CampaignManagement/v9/CampaignManagementService.svc?wsdl",
                "SANDBOX": "https://api.sandbox.bingads.microsoft.com/Api/Advertiser/CampaignManagement/v9/CampaignManagementService.svc?wsdl",
            },
            "CustomerBillingService": {
                "PRODUCTION": "https://clientcenter.api.bingads.microsoft.com/Api/Billing/v9/CustomerBillingService.svc?wsdl",
                "SANDBOX": None,
            },
            "CustomerManagementService": {
                "PRODUCTION": "https://clientcenter.api.bingads.microsoft.com/Api/CustomerManagement/v9/CustomerManagementService.svc?wsdl",
                "SANDBOX": "https://clientcenter.api.sandbox.bingads.microsoft.com/Api/CustomerManagement/v9/CustomerManagementService.svc?wsdl",
            },
            "OptimizerService": {
                "PRODUCTION": "https://api.bingads.microsoft.com/Api/Advertiser/Optimizer/v9/OptimizerService.svc?wsdl",
                "SANDBOX": "https://api.sandbox.bingads.microsoft.com/Api/Advertiser/Optimizer/v9/OptimizerService.svc?wsdl",
            },
            "ReportingService": {
                "PRODUCTION": "https://api.bingads.microsoft.com/Api/Advertiser/Reporting/v9/ReportingService.svc?wsdl",
                "SANDBOX": "https://api.sandbox.bingads.microsoft.com/Api/Advertiser/Reporting/v9/ReportingService.svc?wsdl",
            },
        },
        "v8": {
            "AdIntelligenceService": {
                "PRODUCTION": "https://adcenterapi.microsoft.com/Api/Advertiser/v8/CampaignManagement/AdIntelligenceService.svc?wsdl",
                "SANDBOX": None,
            },
            "AdministrationService": {
                "PRODUCTION": "https://adcenterapi.microsoft.com/Api/Advertiser/v8/Administration/AdministrationService.svc?wsdl",
                "SANDBOX": None,
            },
            "BulkService": {
                "PRODUCTION": "https://adcenterapi.microsoft.com/Api/Advertiser/v8/CampaignManagement/BulkService.svc?wsdl",
                "SANDBOX": None,
            },
            "CampaignManagementService": {
                "PRODUCTION": "https://adcenterapi.microsoft.com/Api/Advertiser/v8/CampaignManagement/CampaignManagementService.svc?wsdl",
                "SANDBOX": "https://api.sandbox.bingads.microsoft.com/Api/Advertiser/v8/CampaignManagement/CampaignManagementService.svc?wsdl",
            },
            "CustomerBillingService": {
                "PRODUCTION": "https://sharedservices.adcenterapi.microsoft.com/Api/Billing/v8/CustomerBillingService.svc?wsdl",
                "SANDBOX": None,
            },
            "CustomerManagementService": {
                "PRODUCTION": "https://sharedservices.adcenterapi.microsoft.com/Api/CustomerManagement/v8/CustomerManagementService.svc?wsdl",
                "SANDBOX": "https://sharedservices.api.sandbox.bingads.microsoft.com/Api/CustomerManagement/v8/CustomerManagementService.svc?wsdl",
            },
            "NotificationService": {
                "PRODUCTION": "https://sharedservices.adcenterapi.microsoft.com/Api/Notification/v8/NotificationService.svc?wsdl",
                "SANDBOX": None,
            },
            "OptimizerService": {
                "PRODUCTION": "https://adcenterapi.microsoft.com/Api/Advertiser/v8/Optimizer/OptimizerService.svc?wsdl",
                "SANDBOX": None,
            },
            "ReportingService": {
                "PRODUCTION": "https://adcenterapi.microsoft.com/Api/Advertiser/v8/Reporting/ReportingService.svc?wsdl",
                "SANDBOX": None,
            },
        },
    }

    # Constants for the deprecated legacy login method
    LEGACY_LOGIN_CONFIG: Dict[str, str] = {
        "AUTH_SERVER": "https://www.microsoft.com",
        "LOGIN_SERVICE_NAME": "adcenter",
    }

    @classmethod
    def default_version(cls) -> str:
        return cls.DEFAULT_VERSION

    @classmethod
    def latest_version(cls) -> str:
        return cls.LATEST_VERSION

    @classmethod
    def default_environment(cls) -> str:
        return cls.DEFAULT_ENVIRONMENT

    @classmethod
    def api_name(cls) -> str:
        return cls.API_NAME

    @classmethod
    def default_config_filename(cls) -> str:
        return cls.DEFAULT_CONFIG_FILENAME

    @classmethod
    def versions(cls) -> List[str]:
        """Return the known API versions."""
        return list(cls.SERVICE_CONFIG.keys())

    @classmethod
    def services(cls, version: str) -> List[str]:
        """Return the services available in ``version`` (empty if unknown)."""
        return list(cls.SERVICE_CONFIG.get(version, []))

    @classmethod
    def has_service(cls, version: str, service: str) -> bool:
        return service in cls.SERVICE_CONFIG.get(version, [])

    @classmethod
    def environment_config(cls, environment: str, key: str) -> Optional[str]:
        """Return an environment constant, or None for unknown environments.

        :param environment: Environment name (PRODUCTION, SANDBOX)
        :type environment: str
        :param key: Constant name, e.g. ``oauth_scope`` or a version code
        :type key: str
        :return: The constant value or None
        :rtype: Optional[str]

        Example:
            >>> ApiConfig.environment_config("SANDBOX", "oauth_scope")
            'bingads.manage'
        """
        env = cls.ENVIRONMENT_CONFIG.get(environment)
        if env is None:
            return None
        return env.get(key)

    @classmethod
    def has_environment(cls, environment: str) -> bool:
        return environment in cls.ENVIRONMENT_CONFIG

    @classmethod
    def endpoint(cls, version: str, service: str, environment: str) -> Optional[str]:
        """Return the WSDL endpoint URL for a version/service/environment.

        :return: Endpoint URL, or None when the combination is not served
        :rtype: Optional[str]
        """
        return cls.ADDRESS_CONFIG.get(version, {}).get(service, {}).get(environment)

    @classmethod
    def legacy_login_config(cls, key: str) -> Optional[str]:
        return cls.LEGACY_LOGIN_CONFIG.get(key)

    @classmethod
    def header_namespace(cls, environment: str, version: str) -> Optional[str]:
        """Return the SOAP header namespace for an environment and version.

        Example:
            >>> ApiConfig.header_namespace("PRODUCTION", "v9")
            'https://adcenter.microsoft.com/api/adcenter/v9'
        """
        base = cls.environment_config(environment, "header_ns")
        if base is None:
            return None
        return f"{base}{version}"

    @classmethod
    def default_namespace(cls, version: str) -> str:
        return f"{cls.DEFAULT_NS_ROOT}{version}"

    @classmethod
    def adhoc_report_download_url(cls, environment: str, version: str) -> Optional[str]:
        """Return the download URL for ad hoc reports.

        :param environment: The service environment to be used
        :type environment: str
        :param version: The API version
        :type version: str
        :return: The download URL, or None if the environment has no base
            URL for that version
        :rtype: Optional[str]

        Example:
            >>> ApiConfig.adhoc_report_download_url("PRODUCTION", "v9")
            'https://api.bingads.microsoft.com/Api/Advertiser/reportdownload/v9'
        """
        base = cls.environment_config(environment, version)
        if not base:
            return None
        return f"{base}reportdownload/{version}"
