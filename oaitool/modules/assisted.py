"""
Assisted Installer API client module.
"""
import logging
from http import HTTPStatus
from typing import Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..config import DEFAULT_CLIENT_ID, DEFAULT_PULL_SECRET_URL, DEFAULT_SSO_URL
from ..exceptions import APIError, AuthenticationError, InvalidResponseError
from ..utils import redact_sensitive_data
from .models import (
    Cluster,
    ClusterCreateParams,
    ClusterNetworkPatch,
    Host,
    HostName,
    HostNameList,
    ImageCreateParams,
    PullSecret,
)
from .validators import DownloadableFile, ImageType, validate

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=BaseModel)


def _status_text(response: requests.Response) -> str:
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return response.reason or "unknown status"


def get_access_token(
    offline_token: str,
    sso_url: str = DEFAULT_SSO_URL,
    client_id: str = DEFAULT_CLIENT_ID,
    session: Optional[requests.Session] = None,
    timeout: float = 30,
) -> str:
    """
    Exchange an offline (refresh) token for a short-lived access token.

    Args:
        offline_token: The offline token; a trailing newline is ignored
        sso_url: Token endpoint of the identity provider
        client_id: OAuth client id to present
        session: Session to send the request on
        timeout: Request timeout in seconds

    Returns:
        The bearer access token

    Raises:
        AuthenticationError: if the identity provider does not answer 200
    """
    session = session or requests.Session()
    params = {
        'client_id': client_id,
        'grant_type': 'refresh_token',
        'refresh_token': offline_token.rstrip('\n'),
    }

    logger.debug(f"asking {sso_url} for access token")
    resp = session.post(sso_url, data=params, timeout=timeout)
    if resp.status_code != 200:
        raise AuthenticationError(f"failed to acquire token: {_status_text(resp)}")

    try:
        return resp.json()['access_token']
    except (ValueError, KeyError) as e:
        raise AuthenticationError(f"failed to acquire token: malformed response: {e}") from e


class AssistedClient:
    """Client for the Assisted Installer REST API.

    Every operation sends exactly one request and expects exactly one
    status code back; anything else raises APIError.
    """

    def __init__(
        self,
        api_url: str,
        access_token: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        pull_secret_url: str = DEFAULT_PULL_SECRET_URL,
    ):
        """Initialize the client.

        Args:
            api_url: Base URL of the API (e.g. 'https://api.openshift.com/api/assisted-install/v1')
            access_token: Bearer token attached to every request
            session: Optional requests session; a new one is created if omitted
            timeout: Request timeout in seconds
            pull_secret_url: Account management endpoint serving the pull secret
        """
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.pull_secret_url = pull_secret_url
        self.session = session or requests.Session()
        self.session.headers.update({'Authorization': f"Bearer {access_token}"})
        self.logger = logging.getLogger(f"{__name__}.AssistedClient")

    @classmethod
    def from_config(cls, config, session: Optional[requests.Session] = None) -> 'AssistedClient':
        """Authenticate with the offline token from ``config`` and return a client."""
        config.validate()
        session = session or requests.Session()
        token = get_access_token(
            config.offline_token,
            sso_url=config.sso_url,
            client_id=config.client_id,
            session=session,
            timeout=config.api_timeout,
        )
        return cls(
            config.api_url,
            token,
            session=session,
            timeout=config.api_timeout,
            pull_secret_url=config.pull_secret_url,
        )

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        url: str,
        expected: int,
        action: str,
        body: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        if not url.startswith('http'):
            url = f"{self.api_url}{url}"

        self.logger.debug(f"creating {method} request for {url}")
        headers = {'Content-Type': 'application/json'} if body is not None else None
        resp = self.session.request(
            method, url, data=body, params=params, headers=headers, timeout=self.timeout
        )

        if resp.status_code != expected:
            raise APIError(action, resp.status_code, _status_text(resp), resp.text or "unknown error")
        return resp

    def _parse(self, model: Type[M], resp: requests.Response, action: str) -> M:
        try:
            return model.model_validate(resp.json())
        except (ValueError, PydanticValidationError) as e:
            raise InvalidResponseError(f"failed to {action}: unexpected response: {e}") from e

    def _parse_list(self, model: Type[M], resp: requests.Response, action: str) -> List[M]:
        try:
            return [model.model_validate(item) for item in resp.json()]
        except (ValueError, TypeError, PydanticValidationError) as e:
            raise InvalidResponseError(f"failed to {action}: unexpected response: {e}") from e

    # ------------------------------------------------------------------
    # Clusters
    # ------------------------------------------------------------------

    def list_clusters(self) -> List[Cluster]:
        resp = self._request('GET', '/clusters', 200, 'list clusters')
        return self._parse_list(Cluster, resp, 'list clusters')

    def get_cluster(self, cluster_id: str) -> Cluster:
        action = f"get cluster {cluster_id}"
        resp = self._request('GET', f"/clusters/{cluster_id}", 200, action)
        return self._parse(Cluster, resp, action)

    def create_cluster(self, params: ClusterCreateParams) -> Cluster:
        """
        Create a cluster.

        Args:
            params: Creation parameters; name, openshift_version and pull_secret are required

        Returns:
            The cluster as created by the server

        Raises:
            ValidationError: if a required parameter is missing, before anything is sent
        """
        params.check()
        self.logger.debug(
            f"creating cluster with parameters: {redact_sensitive_data(params.model_dump(exclude_none=True))}"
        )
        resp = self._request('POST', '/clusters', 201, 'create cluster', body=params.to_json())
        return self._parse(Cluster, resp, 'create cluster')

    def patch_cluster(self, cluster_id: str, patch: BaseModel) -> Cluster:
        """
        Apply a partial update to a cluster.

        The returned cluster is the server's authoritative copy and should
        replace whatever the caller holds.
        """
        body = patch.model_dump_json(exclude_none=True)
        self.logger.debug(f"patching cluster {cluster_id} with: {redact_sensitive_data(patch.model_dump())}")
        resp = self._request('PATCH', f"/clusters/{cluster_id}", 201, 'patch cluster', body=body)
        return self._parse(Cluster, resp, 'patch cluster')

    def set_vips(self, cluster_id: str, api_vip: str, ingress_vip: str) -> Cluster:
        patch = ClusterNetworkPatch(api_vip=api_vip, ingress_vip=ingress_vip, vip_dhcp_allocation=False)
        return self.patch_cluster(cluster_id, patch)

    def install_cluster(self, cluster_id: str) -> None:
        self._request('POST', f"/clusters/{cluster_id}/actions/install", 202, f"install cluster {cluster_id}")

    def cancel_cluster(self, cluster_id: str) -> None:
        self._request('POST', f"/clusters/{cluster_id}/actions/cancel", 202, f"cancel cluster {cluster_id}")

    def reset_cluster(self, cluster_id: str) -> None:
        self._request('POST', f"/clusters/{cluster_id}/actions/reset", 202, f"reset cluster {cluster_id}")

    def delete_cluster(self, cluster_id: str) -> None:
        self._request('DELETE', f"/clusters/{cluster_id}", 204, f"delete cluster {cluster_id}")

    # ------------------------------------------------------------------
    # Hosts
    # ------------------------------------------------------------------

    def get_host(self, cluster_id: str, host_id: str) -> Host:
        action = f"get host {host_id}"
        resp = self._request('GET', f"/clusters/{cluster_id}/hosts/{host_id}", 200, action)
        return self._parse(Host, resp, action)

    def delete_host(self, cluster_id: str, host_id: str) -> None:
        self._request('DELETE', f"/clusters/{cluster_id}/hosts/{host_id}", 204, f"delete host {host_id}")

    def set_hostnames(self, cluster_id: str, hostnames: List[HostName]) -> Cluster:
        """Assign requested hostnames to several hosts in one request."""
        return self.patch_cluster(cluster_id, HostNameList(hosts_names=hostnames))

    # ------------------------------------------------------------------
    # Pull secret, images and downloads
    # ------------------------------------------------------------------

    def get_pull_secret(self) -> PullSecret:
        """Fetch the organization's pull secret from the account management service."""
        resp = self._request('POST', self.pull_secret_url, 200, 'get pull secret')
        return self._parse(PullSecret, resp, 'get pull secret')

    def create_discovery_image(self, cluster_id: str, image_type: str, ssh_public_key: str = '') -> Cluster:
        validate(ImageType, image_type)
        params = ImageCreateParams(image_type=image_type, ssh_public_key=ssh_public_key)
        resp = self._request(
            'POST', f"/clusters/{cluster_id}/downloads/image", 201,
            'create discovery image', body=params.to_json()
        )
        return self._parse(Cluster, resp, 'create discovery image')

    def get_file(self, cluster_id: str, filename: str) -> bytes:
        validate(DownloadableFile, filename)
        resp = self._request(
            'GET', f"/clusters/{cluster_id}/downloads/files", 200,
            f"fetch {filename}", params={'file_name': filename}
        )
        return resp.content

    def get_kubeconfig(self, cluster_id: str) -> bytes:
        resp = self._request('GET', f"/clusters/{cluster_id}/downloads/kubeconfig", 200, 'fetch kubeconfig')
        return resp.content
