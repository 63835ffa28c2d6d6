# ============================================================================
# KUBERNETES API CHECKS
# ============================================================================
# STATUS: Checks - Cluster reachability and compatibility
# PURPOSE: Client init, API query, minimum version, namespace presence
# ============================================================================
"""
Kubernetes API Checks (category "kubernetes-api")

1. can initialize the client                      fatal     writes kube_api
2. can query the Kubernetes API                   fatal     writes http_client, kube_version
3. is running the minimum Kubernetes API version  non-fatal reads kube_version
4. control plane namespace exists                 fatal     reads http_client
"""

from typing import List, Optional

from core.config.defaults import KubernetesDefaults
from health.context import PipelineContext
from health.core import Check, CheckCategory, LocalAction
from infrastructure.kubernetes import KubernetesAPI

CATEGORY = CheckCategory.KUBERNETES_API.value


def kubernetes_api_checks(
    ctx: PipelineContext,
    kubeconfig_path: Optional[str],
    namespace: str,
    defaults: Optional[KubernetesDefaults] = None,
) -> List[Check]:
    """Build the kubernetes-api checks bound to ``ctx``."""
    defaults = defaults or KubernetesDefaults()

    def init_client() -> None:
        ctx.kube_api = KubernetesAPI.from_kubeconfig(
            kubeconfig_path or defaults.kubeconfig_path,
            timeout=defaults.request_timeout_seconds,
        )

    async def query_api() -> None:
        kube_api = ctx.require("kube_api")
        ctx.http_client = kube_api.new_client()
        ctx.kube_version = await kube_api.get_version_info(ctx.http_client)

    def minimum_version() -> None:
        kube_api = ctx.require("kube_api")
        kube_api.check_version(ctx.require("kube_version"), defaults.min_version)

    async def namespace_exists() -> None:
        kube_api = ctx.require("kube_api")
        await kube_api.check_namespace_exists(ctx.require("http_client"), namespace)

    return [
        Check(CATEGORY, "can initialize the client", True, LocalAction(init_client)),
        Check(CATEGORY, "can query the Kubernetes API", True, LocalAction(query_api)),
        Check(
            CATEGORY,
            "is running the minimum Kubernetes API version",
            False,
            LocalAction(minimum_version),
        ),
        Check(CATEGORY, "control plane namespace exists", True, LocalAction(namespace_exists)),
    ]


__all__ = ["kubernetes_api_checks"]
