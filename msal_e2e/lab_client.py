"""Client for the identity lab API that hands out disposable test accounts."""

from dataclasses import dataclass
from typing import Any

import requests

from msal_e2e.config import LAB_API_BASE_URL, LAB_SCOPE, LAB_TENANT

LOGIN_BASE_URL = "https://login.microsoftonline.com"


class AzureEnvironments:
    CLOUD = "azurecloud"
    PPE = "azureppe"
    US_GOV = "azureusgovernment"
    CHINA = "azurechinacloud"


class AppTypes:
    CLOUD = "cloud"
    ONPREM = "onprem"


class LabClientError(RuntimeError):
    """Raised when the lab API cannot provide an account or secret."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class LabApiQueryParams:
    """Filters for selecting a lab account."""

    azure_environment: str | None = None
    app_type: str | None = None
    user_type: str | None = None
    federation_provider: str | None = None
    b2c_provider: str | None = None
    sign_in_audience: str | None = None

    def to_query(self) -> dict[str, str]:
        """Lab API query string, skipping unset filters."""
        names = {
            "azureenvironment": self.azure_environment,
            "apptype": self.app_type,
            "usertype": self.user_type,
            "federationprovider": self.federation_provider,
            "b2cprovider": self.b2c_provider,
            "signinaudience": self.sign_in_audience,
        }
        return {key: value for key, value in names.items() if value}


class LabClient:
    """Client for the lab API using requests."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        session: requests.Session | None = None,
        access_token: str | None = None,
        base_url: str = LAB_API_BASE_URL,
        tenant: str = LAB_TENANT,
        timeout: float = 30,
    ):
        """
        Initialize the lab client.

        Args:
            client_id: Lab application id used for the client credentials grant
            client_secret: Lab application secret
            session: Optional pre-configured requests.Session
            access_token: Optional bearer token, skips the credentials grant
            base_url: Lab API root
            tenant: Tenant that issues lab API tokens
            timeout: Request timeout in seconds
        """
        if access_token is None and not (client_id and client_secret):
            raise ValueError("Must provide either access_token or client_id and client_secret")

        self.session = session if session is not None else requests.Session()
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self.tenant = tenant
        self.timeout = timeout
        self._access_token = access_token

        self.session.headers.update({"Accept": "application/json"})

    def get_access_token(self) -> str:
        """Return a lab API bearer token, requesting one on first use."""
        if self._access_token:
            return self._access_token

        url = f"{LOGIN_BASE_URL}/{self.tenant}/oauth2/v2.0/token"
        response = self.session.post(
            url,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "scope": LAB_SCOPE,
            },
            timeout=self.timeout,
        )
        if response.status_code != 200:
            raise LabClientError(
                f"Could not get lab API token: HTTP {response.status_code}",
                response.status_code,
            )

        token = response.json().get("access_token")
        if not token:
            raise LabClientError("Lab token response has no access_token")
        self._access_token = token
        print("[OK] Acquired lab API token")
        return token

    def get(self, path: str, **kwargs: Any) -> requests.Response:
        """
        Make an authenticated GET request against the lab API.

        Args:
            path: Path relative to the lab API root, or an absolute URL
            **kwargs: Additional arguments passed to requests.get

        Returns:
            Response object
        """
        url = path if path.startswith("http") else f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self.get_access_token()}"}
        headers.update(kwargs.pop("headers", {}))
        kwargs.setdefault("timeout", self.timeout)
        return self.session.get(url, headers=headers, **kwargs)

    def _get_json(self, path: str, params: dict[str, str]) -> Any:
        response = self.get(path, params=params)
        if response.status_code != 200:
            raise LabClientError(
                f"Lab API {path} failed: HTTP {response.status_code}",
                response.status_code,
            )
        return response.json()

    def get_vars_by_cloud_environment(self, params: LabApiQueryParams) -> list[dict[str, Any]]:
        """
        Get lab accounts matching the given filters.

        Args:
            params: Environment and app type filters

        Returns:
            Non-empty list of account descriptions (upn, labName, ...)
        """
        data = self._get_json("/user", params.to_query())
        accounts = data if isinstance(data, list) else [data] if data else []
        if not accounts:
            raise LabClientError(f"No lab accounts match {params.to_query()}")
        print(f"[OK] Lab returned {len(accounts)} account(s)")
        return accounts

    def get_secret(self, lab_name: str) -> str:
        """
        Get a lab secret (the account password for a lab).

        Args:
            lab_name: Name of the lab that owns the account

        Returns:
            Secret value
        """
        data = self._get_json("/LabSecret", {"secret": lab_name})
        value = data.get("value") if isinstance(data, dict) else None
        if not value:
            raise LabClientError(f"Lab secret for {lab_name} is empty")
        return value


def setup_credentials(account: dict[str, Any], lab_client: LabClient) -> tuple[str, str]:
    """
    Turn a lab account description into a username/password pair.

    Args:
        account: One entry from get_vars_by_cloud_environment
        lab_client: Client used to fetch the account password

    Returns:
        Tuple of (username, password)
    """
    username = account.get("upn")
    lab_name = account.get("labName")
    if not username or not lab_name:
        raise LabClientError("Lab account is missing upn or labName")

    password = lab_client.get_secret(lab_name)
    print(f"[OK] Provisioned test user {username}")
    return username, password


def provision_test_user(
    lab_client: LabClient,
    azure_environment: str = AzureEnvironments.PPE,
    app_type: str = AppTypes.CLOUD,
) -> tuple[str, str]:
    """Fetch the account pool for an environment and set up its first account."""
    params = LabApiQueryParams(azure_environment=azure_environment, app_type=app_type)
    accounts = lab_client.get_vars_by_cloud_environment(params)
    return setup_credentials(accounts[0], lab_client)
