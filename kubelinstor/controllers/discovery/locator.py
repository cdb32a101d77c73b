"""Controller locator - finds the single LINSTOR controller in the cluster.

Two install shapes are supported, checked in a fixed order:

1. Operator v2 (``linstorclusters`` API installed): the controller workload
   carries the ``app.kubernetes.io/component=linstor-controller`` label.
2. Operator v1 (``linstorcontrollers`` API installed): exactly one
   ``LinstorController`` object exists and its deployment is named after it.

The v2 shape wins when both APIs are registered, e.g. during a migration.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from kubelinstor.constants.enums import EndpointKind
from kubelinstor.constants.values import (
    LINSTOR_CLUSTER_RESOURCE,
    LINSTOR_CONTROLLER_RESOURCE,
    NAMESPACED_NAMES_JSONPATH,
    RUNNING_POD_FIELD_SELECTOR,
)
from kubelinstor.models.endpoint import ControllerEndpoint
from kubelinstor.models.errors import (
    AmbiguousControllerError,
    DiscoveryError,
    KubectlCommandError,
    NoControllerFoundError,
    TransportError,
)
from kubelinstor.models.state.plugin_settings import PluginSettings

logger = logging.getLogger(__name__)

RunKubectl = Callable[[Sequence[str]], Awaitable[str]]

_WORKLOAD_RESOURCES: dict[EndpointKind, str] = {
    EndpointKind.DEPLOYMENT: "deployments",
    EndpointKind.POD: "pods",
}
_WORKLOAD_DESCRIPTIONS: dict[EndpointKind, str] = {
    EndpointKind.DEPLOYMENT: "LINSTOR Controller Deployment resource",
    EndpointKind.POD: "running LINSTOR Controller Pod",
}


class ControllerLocator:
    """Resolves the LINSTOR controller to one :class:`ControllerEndpoint`."""

    def __init__(
        self,
        run_kubectl_func: RunKubectl,
        settings: PluginSettings | None = None,
    ) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
            settings: Discovery settings (defaults if None)
        """
        self._run_kubectl = run_kubectl_func
        self.settings = settings or PluginSettings()

    async def fetch_api_resources(self) -> set[str]:
        """Return the plural names of all API resources installed in the cluster.

        Raises:
            TransportError: If the cluster APIs cannot be listed.
        """
        try:
            output = await self._run_kubectl(("api-resources", "-oname"))
        except KubectlCommandError as exc:
            raise TransportError(f"failed to fetch Cluster APIs: {exc}") from exc
        # "linstorclusters.piraeus.io" -> "linstorclusters"
        return {resource.partition(".")[0] for resource in output.split()}

    async def locate(self) -> ControllerEndpoint:
        """Locate the controller.

        Raises:
            NoControllerFoundError: If no controller exists.
            AmbiguousControllerError: If more than one candidate exists.
            DiscoveryError: If a listing call fails.
        """
        resources = await self.fetch_api_resources()
        if LINSTOR_CLUSTER_RESOURCE in resources:
            endpoint = await self._locate_labelled_workload()
        elif LINSTOR_CONTROLLER_RESOURCE in resources:
            endpoint = await self._locate_legacy_controller()
        else:
            raise NoControllerFoundError("could not find a managed LINSTOR Controller resource")

        logger.info("Using LINSTOR controller %s", endpoint)
        return endpoint

    async def _list_namespaced_names(
        self, args: Sequence[str], description: str
    ) -> list[tuple[str, str]]:
        try:
            output = await self._run_kubectl(tuple(args))
        except KubectlCommandError as exc:
            raise DiscoveryError(f"failed to fetch {description}: {exc}") from exc

        pairs: list[tuple[str, str]] = []
        for line in output.splitlines():
            line = line.strip()
            if not line:
                continue
            namespace, _, name = line.partition(",")
            pairs.append((namespace, name))
        return pairs

    @staticmethod
    def _require_single(pairs: list[tuple[str, str]], description: str) -> tuple[str, str]:
        if not pairs:
            raise NoControllerFoundError(f"could not find a {description}")
        if len(pairs) > 1:
            raise AmbiguousControllerError(
                description, [f"{namespace}/{name}" for namespace, name in pairs]
            )
        return pairs[0]

    @staticmethod
    def _workload_args(
        kind: EndpointKind, selector: str, namespace: str | None = None
    ) -> list[str]:
        args = ["get", _WORKLOAD_RESOURCES[kind]]
        if namespace:
            args.extend(["--namespace", namespace])
        else:
            args.append("--all-namespaces")
        args.extend(["--output", NAMESPACED_NAMES_JSONPATH, "--selector", selector])
        if kind is EndpointKind.POD:
            args.extend(["--field-selector", RUNNING_POD_FIELD_SELECTOR])
        return args

    async def _locate_labelled_workload(self) -> ControllerEndpoint:
        kind = self.settings.endpoint_kind
        description = _WORKLOAD_DESCRIPTIONS[kind]
        pairs = await self._list_namespaced_names(
            self._workload_args(kind, self.settings.controller_selector), description
        )
        namespace, name = self._require_single(pairs, description)
        return ControllerEndpoint(namespace=namespace, name=name, kind=kind)

    async def _locate_legacy_controller(self) -> ControllerEndpoint:
        description = "LinstorController resource"
        pairs = await self._list_namespaced_names(
            (
                "get",
                LINSTOR_CONTROLLER_RESOURCE,
                "--all-namespaces",
                "--output",
                NAMESPACED_NAMES_JSONPATH,
            ),
            description,
        )
        namespace, instance = self._require_single(pairs, description)
        deployment = f"{instance}{self.settings.legacy_controller_suffix}"
        logger.debug("LinstorController %s/%s owns deployment %s", namespace, instance, deployment)

        if self.settings.endpoint_kind is EndpointKind.DEPLOYMENT:
            return ControllerEndpoint(namespace=namespace, name=deployment)

        pod_description = _WORKLOAD_DESCRIPTIONS[EndpointKind.POD]
        selector = self.settings.legacy_pod_selector.replace("{name}", deployment)
        pod_pairs = await self._list_namespaced_names(
            self._workload_args(EndpointKind.POD, selector, namespace), pod_description
        )
        _, pod = self._require_single(pod_pairs, pod_description)
        return ControllerEndpoint(namespace=namespace, name=pod, kind=EndpointKind.POD)
