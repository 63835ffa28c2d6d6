# ============================================================================
# KUBERNETES API CLIENT
# ============================================================================
# STATUS: Infrastructure - Cluster API access for preflight checks
# PURPOSE: kubeconfig loading, API URLs, version and namespace queries
# ============================================================================
"""
Kubernetes API Client

Thin async wrapper over the Kubernetes REST API, covering only what the
preflight checks need:

- url_for(namespace, path): namespaced API URL
- new_client(): authenticated httpx.AsyncClient
- get_version_info(client): GET /version
- check_version(info, minimum): minimum-version policy
- check_namespace_exists(client, namespace): GET /api/v1/namespaces/<ns>

Credentials come from a kubeconfig file (explicit path, $KUBECONFIG, or
~/.kube/config). Supported user entries: bearer token (inline or tokenFile),
client certificate/key (file or inline data), and basic auth.

All transport failures are translated into core.errors types at the call
site so the check observer sees a consistent taxonomy.
"""

import base64
import os
import ssl
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx
import yaml
from pydantic import ValidationError

from core.errors import (
    CheckTimeoutError,
    ClientInitError,
    ClusterConnectionError,
    HealthCheckError,
    NamespaceNotFoundError,
    ProtocolError,
)
from core.logging import ComponentType, get_logger
from core.models.kubernetes import KubernetesVersionInfo
from core.versioning import VersionTriple, check_minimum_version

logger = get_logger(__name__, ComponentType.KUBERNETES)

DEFAULT_KUBECONFIG = Path.home() / ".kube" / "config"


# ============================================================================
# KUBECONFIG
# ============================================================================

def _named(entries: Optional[List[Dict[str, Any]]], name: str, kind: str) -> Dict[str, Any]:
    """Find ``name`` in a kubeconfig list of {name, <kind>: {...}} entries."""
    for entry in entries or []:
        if entry.get("name") == name:
            return entry.get(kind) or {}
    raise ClientInitError(f"{kind} \"{name}\" not found in kubeconfig")


def _resolve_kubeconfig_path(path: Optional[str]) -> Path:
    # Explicit or $KUBECONFIG, both may be an os.pathsep list; first entry wins
    for candidate in (path or os.environ.get("KUBECONFIG", "")).split(os.pathsep):
        if candidate:
            return Path(candidate).expanduser()
    return DEFAULT_KUBECONFIG


@dataclass
class KubeConfig:
    """Resolved cluster and user settings for the current context."""
    server: str
    namespace: str = "default"
    ca_file: Optional[str] = None
    ca_data: Optional[str] = None
    insecure_skip_tls_verify: bool = False
    client_cert_file: Optional[str] = None
    client_key_file: Optional[str] = None
    client_cert_data: Optional[bytes] = None
    client_key_data: Optional[bytes] = None
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    source: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Optional[str] = None, context: Optional[str] = None) -> "KubeConfig":
        """
        Load a kubeconfig file and resolve the requested (or current) context.

        Raises:
            ClientInitError: If the file is missing, unparsable or incomplete.
        """
        config_path = _resolve_kubeconfig_path(path)
        try:
            with open(config_path) as f:
                raw = yaml.safe_load(f) or {}
        except OSError as e:
            raise ClientInitError(
                f"error configuring Kubernetes API client: cannot read {config_path}: {e.strerror}"
            ) from e
        except yaml.YAMLError as e:
            raise ClientInitError(
                f"error configuring Kubernetes API client: invalid kubeconfig {config_path}: {e}"
            ) from e

        return cls.from_dict(raw, context=context, base_dir=config_path.parent, source=str(config_path))

    @classmethod
    def from_dict(
        cls,
        raw: Dict[str, Any],
        context: Optional[str] = None,
        base_dir: Optional[Path] = None,
        source: Optional[str] = None,
    ) -> "KubeConfig":
        """Resolve a parsed kubeconfig document."""
        if not isinstance(raw, dict):
            raise ClientInitError("error configuring Kubernetes API client: kubeconfig is not a mapping")

        context_name = context or raw.get("current-context")
        if not context_name:
            raise ClientInitError(
                "error configuring Kubernetes API client: no current-context set in kubeconfig"
            )

        ctx = _named(raw.get("contexts"), context_name, "context")
        cluster = _named(raw.get("clusters"), ctx.get("cluster", ""), "cluster")
        user = _named(raw.get("users"), ctx["user"], "user") if ctx.get("user") else {}

        server = cluster.get("server")
        if not server:
            raise ClientInitError(
                f"error configuring Kubernetes API client: cluster \"{ctx.get('cluster')}\" has no server"
            )

        def _path(value: Optional[str]) -> Optional[str]:
            if not value:
                return None
            p = Path(value).expanduser()
            if not p.is_absolute() and base_dir is not None:
                p = base_dir / p
            return str(p)

        def _b64(value: Optional[str]) -> Optional[bytes]:
            if not value:
                return None
            try:
                return base64.b64decode(value)
            except ValueError as e:
                raise ClientInitError(
                    f"error configuring Kubernetes API client: invalid base64 data: {e}"
                ) from e

        token = user.get("token")
        token_file = _path(user.get("tokenFile"))
        if not token and token_file:
            try:
                token = Path(token_file).read_text().strip()
            except OSError as e:
                raise ClientInitError(
                    f"error configuring Kubernetes API client: cannot read token file {token_file}"
                ) from e

        ca_data = _b64(cluster.get("certificate-authority-data"))

        return cls(
            server=server.rstrip("/"),
            namespace=ctx.get("namespace") or "default",
            ca_file=_path(cluster.get("certificate-authority")),
            ca_data=ca_data.decode() if ca_data else None,
            insecure_skip_tls_verify=bool(cluster.get("insecure-skip-tls-verify", False)),
            client_cert_file=_path(user.get("client-certificate")),
            client_key_file=_path(user.get("client-key")),
            client_cert_data=_b64(user.get("client-certificate-data")),
            client_key_data=_b64(user.get("client-key-data")),
            token=token,
            username=user.get("username"),
            password=user.get("password"),
            source=source,
        )

    def ssl_context(self) -> ssl.SSLContext:
        """Build the TLS context for the API server connection."""
        ctx = ssl.create_default_context(cafile=self.ca_file, cadata=self.ca_data)
        if self.insecure_skip_tls_verify:
            ctx.check_hostname = False
            ctx.verify_mode = ssl.CERT_NONE

        if self.client_cert_file and self.client_key_file:
            ctx.load_cert_chain(self.client_cert_file, self.client_key_file)
        elif self.client_cert_data and self.client_key_data:
            # load_cert_chain only accepts paths
            with tempfile.TemporaryDirectory() as tmp:
                cert_path = os.path.join(tmp, "client.crt")
                key_path = os.path.join(tmp, "client.key")
                with open(cert_path, "wb") as f:
                    f.write(self.client_cert_data)
                with open(key_path, "wb") as f:
                    f.write(self.client_key_data)
                ctx.load_cert_chain(cert_path, key_path)
        return ctx

    def auth(self) -> Tuple[Dict[str, str], Optional[httpx.Auth]]:
        """Request headers and httpx auth for the configured user."""
        headers = dict(self.headers)
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
            return headers, None
        if self.username and self.password:
            return headers, httpx.BasicAuth(self.username, self.password)
        return headers, None


# ============================================================================
# API
# ============================================================================

class KubernetesAPI:
    """Kubernetes API access bound to one kubeconfig context."""

    def __init__(self, config: KubeConfig, timeout: float = 5.0):
        self.config = config
        self.timeout = timeout

    @classmethod
    def from_kubeconfig(
        cls,
        path: Optional[str] = None,
        timeout: float = 5.0,
        context: Optional[str] = None,
    ) -> "KubernetesAPI":
        """
        Build an API handle from a kubeconfig file.

        Raises:
            ClientInitError: If the kubeconfig cannot be loaded.
        """
        config = KubeConfig.load(path, context=context)
        logger.debug(f"Loaded kubeconfig from {config.source} (server={config.server})")
        return cls(config, timeout=timeout)

    @property
    def host(self) -> str:
        return self.config.server

    def url_for(self, namespace: str, path: str) -> str:
        """
        Namespaced API URL: ``{host}/api/v1/namespaces/{namespace}{path}``.

        Raises:
            ValueError: If path does not start with "/".
        """
        if not path.startswith("/"):
            raise ValueError(f"Path must start with a [/], was [{path}]")
        return f"{self.host}/api/v1/namespaces/{namespace}{path}"

    def new_client(self) -> httpx.AsyncClient:
        """
        Create an authenticated client for the API server.

        Raises:
            ClientInitError: If TLS material cannot be loaded.
        """
        try:
            verify = self.config.ssl_context()
        except (ssl.SSLError, OSError) as e:
            raise ClientInitError(f"error instantiating Kubernetes API client: {e}") from e

        headers, auth = self.config.auth()
        return httpx.AsyncClient(
            base_url=self.host,
            headers=headers,
            auth=auth,
            verify=verify,
            timeout=self.timeout,
        )

    async def _get(self, client: httpx.AsyncClient, url: str, operation: str) -> httpx.Response:
        try:
            return await client.get(url, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise CheckTimeoutError(operation, self.timeout) from e
        except httpx.TransportError as e:
            raise ClusterConnectionError(
                f"{operation} failed: cannot reach {url}: {e}", url=url
            ) from e

    async def get_version_info(self, client: httpx.AsyncClient) -> KubernetesVersionInfo:
        """
        Fetch the API server version.

        Raises:
            ProtocolError: Non-200 response.
            CheckTimeoutError / ClusterConnectionError: Transport failure.
        """
        url = f"{self.host}/version"
        response = await self._get(client, url, "Kubernetes version query")

        if response.status_code != 200:
            raise ProtocolError(response.status_code, response.reason_phrase)

        try:
            info = KubernetesVersionInfo.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise HealthCheckError(f"invalid version document from {url}: {e}") from e

        logger.debug(f"Kubernetes API server version: {info.git_version}")
        return info

    def check_version(
        self,
        version_info: KubernetesVersionInfo,
        minimum: VersionTriple,
    ) -> VersionTriple:
        """
        Verify the server satisfies the minimum version.

        Raises:
            VersionParseError / VersionIncompatibleError
        """
        return check_minimum_version(str(version_info), minimum, subject="Kubernetes")

    async def check_namespace_exists(self, client: httpx.AsyncClient, namespace: str) -> None:
        """
        Verify the namespace exists.

        Raises:
            NamespaceNotFoundError: 404.
            ProtocolError: Any other non-200.
        """
        url = f"{self.host}/api/v1/namespaces/{namespace}"
        response = await self._get(client, url, "Namespace query")

        if response.status_code == 404:
            raise NamespaceNotFoundError(namespace)
        if response.status_code != 200:
            raise ProtocolError(response.status_code, response.reason_phrase)


__all__ = [
    "KubeConfig",
    "KubernetesAPI",
]
