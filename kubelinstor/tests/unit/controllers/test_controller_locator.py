"""Tests for controller discovery."""

from __future__ import annotations

from collections.abc import Sequence
from unittest.mock import AsyncMock

import pytest

from kubelinstor.constants.enums import EndpointKind
from kubelinstor.controllers.discovery import ControllerLocator
from kubelinstor.models.endpoint import ControllerEndpoint
from kubelinstor.models.errors import (
    AmbiguousControllerError,
    DiscoveryError,
    KubectlCommandError,
    NoControllerFoundError,
    TransportError,
)
from kubelinstor.models.state import PluginSettings

V2_APIS = "pods\ndeployments.apps\nlinstorclusters.piraeus.io\nlinstorsatellites.piraeus.io\n"
V1_APIS = "pods\ndeployments.apps\nlinstorcontrollers.piraeus.linbit.com\n"


def fake_kubectl(api_resources: str, listings: dict[str, str]) -> AsyncMock:
    """Build a run_kubectl mock.

    ``listings`` maps the listed resource kind to its jsonpath output.
    """

    def _run(args: Sequence[str]) -> str:
        if args[0] == "api-resources":
            return api_resources
        return listings.get(args[1], "")

    return AsyncMock(side_effect=_run)


class TestControllerLocator:
    """Tests for ControllerLocator class."""

    def test_locator_init_default_settings(self) -> None:
        """Test the locator falls back to default settings."""
        run_kubectl = AsyncMock()
        locator = ControllerLocator(run_kubectl)
        assert locator._run_kubectl is run_kubectl
        assert locator.settings == PluginSettings()

    @pytest.mark.asyncio
    async def test_fetch_api_resources_strips_groups(self) -> None:
        """Test resource names are reduced to their plural."""
        locator = ControllerLocator(fake_kubectl(V2_APIS, {}))

        resources = await locator.fetch_api_resources()

        assert resources == {"pods", "deployments", "linstorclusters", "linstorsatellites"}

    @pytest.mark.asyncio
    async def test_api_resources_failure_is_transport_error(self) -> None:
        """Test a failing api-resources call is fatal."""
        run_kubectl = AsyncMock(
            side_effect=KubectlCommandError(["kubectl"], 1, "Unable to connect to the server")
        )

        with pytest.raises(TransportError, match="Unable to connect"):
            await ControllerLocator(run_kubectl).locate()

    @pytest.mark.asyncio
    async def test_v2_deployment(self) -> None:
        """Test the labelled deployment is found across all namespaces."""
        run_kubectl = fake_kubectl(
            V2_APIS, {"deployments": "piraeus-datastore,linstor-controller\n"}
        )

        endpoint = await ControllerLocator(run_kubectl).locate()

        assert endpoint == ControllerEndpoint("piraeus-datastore", "linstor-controller")
        listing = run_kubectl.await_args_list[1].args[0]
        assert listing[:3] == ("get", "deployments", "--all-namespaces")
        assert "--selector" in listing
        assert listing[listing.index("--selector") + 1] == (
            "app.kubernetes.io/component=linstor-controller"
        )

    @pytest.mark.asyncio
    async def test_v2_running_pod(self) -> None:
        """Test the pod variant selects running pods only."""
        run_kubectl = fake_kubectl(
            V2_APIS, {"pods": "piraeus-datastore,linstor-controller-7d9f-abcde\n"}
        )
        settings = PluginSettings(endpoint_kind=EndpointKind.POD)

        endpoint = await ControllerLocator(run_kubectl, settings).locate()

        assert endpoint == ControllerEndpoint(
            "piraeus-datastore", "linstor-controller-7d9f-abcde", EndpointKind.POD
        )
        listing = run_kubectl.await_args_list[1].args[0]
        assert listing[-2:] == ("--field-selector", "status.phase=Running")

    @pytest.mark.asyncio
    async def test_v2_no_deployment(self) -> None:
        """Test zero labelled deployments is an error."""
        run_kubectl = fake_kubectl(V2_APIS, {"deployments": ""})

        with pytest.raises(NoControllerFoundError, match="Deployment"):
            await ControllerLocator(run_kubectl).locate()

    @pytest.mark.asyncio
    async def test_v2_multiple_deployments(self) -> None:
        """Test several labelled deployments is an error naming all of them."""
        run_kubectl = fake_kubectl(
            V2_APIS,
            {"deployments": "ns-a,linstor-controller\nns-b,linstor-controller\n"},
        )

        with pytest.raises(AmbiguousControllerError) as exc_info:
            await ControllerLocator(run_kubectl).locate()

        assert exc_info.value.candidates == ["ns-a/linstor-controller", "ns-b/linstor-controller"]
        assert "ns-a/linstor-controller" in str(exc_info.value)
        assert "ns-b/linstor-controller" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_v1_controller_resource(self) -> None:
        """Test the legacy deployment name is derived from the instance name."""
        run_kubectl = fake_kubectl(V1_APIS, {"linstorcontrollers": "storage,piraeus-op-cs\n"})

        endpoint = await ControllerLocator(run_kubectl).locate()

        assert endpoint == ControllerEndpoint("storage", "piraeus-op-cs-controller")
        assert run_kubectl.await_count == 2

    @pytest.mark.asyncio
    async def test_v1_pod_uses_secondary_lookup(self) -> None:
        """Test the legacy pod variant looks the pod up in the instance namespace."""
        run_kubectl = fake_kubectl(
            V1_APIS,
            {
                "linstorcontrollers": "storage,piraeus-op-cs\n",
                "pods": "storage,piraeus-op-cs-controller-5c8-xyz\n",
            },
        )
        settings = PluginSettings(endpoint_kind=EndpointKind.POD)

        endpoint = await ControllerLocator(run_kubectl, settings).locate()

        assert endpoint == ControllerEndpoint(
            "storage", "piraeus-op-cs-controller-5c8-xyz", EndpointKind.POD
        )
        pod_listing = run_kubectl.await_args_list[2].args[0]
        assert pod_listing[:4] == ("get", "pods", "--namespace", "storage")
        assert pod_listing[pod_listing.index("--selector") + 1] == (
            "app.kubernetes.io/instance=piraeus-op-cs-controller"
        )

    @pytest.mark.asyncio
    async def test_v1_pod_selector_only_substitutes_name(self) -> None:
        """Test braces other than {name} pass through to the selector."""
        run_kubectl = fake_kubectl(
            V1_APIS,
            {
                "linstorcontrollers": "storage,piraeus-op-cs\n",
                "pods": "storage,piraeus-op-cs-controller-5c8-xyz\n",
            },
        )
        settings = PluginSettings(
            endpoint_kind=EndpointKind.POD,
            legacy_pod_selector="app={name},tier={other}",
        )

        endpoint = await ControllerLocator(run_kubectl, settings).locate()

        assert endpoint.name == "piraeus-op-cs-controller-5c8-xyz"
        pod_listing = run_kubectl.await_args_list[2].args[0]
        assert pod_listing[pod_listing.index("--selector") + 1] == (
            "app=piraeus-op-cs-controller,tier={other}"
        )

    @pytest.mark.asyncio
    async def test_two_controller_resources(self) -> None:
        """Test two LinstorController objects abort discovery naming both."""
        run_kubectl = fake_kubectl(
            V1_APIS, {"linstorcontrollers": "ns-a,linstor\nns-b,linstor\n"}
        )

        with pytest.raises(AmbiguousControllerError) as exc_info:
            await ControllerLocator(run_kubectl).locate()

        assert "ns-a/linstor" in str(exc_info.value)
        assert "ns-b/linstor" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_v2_takes_precedence_over_v1(self) -> None:
        """Test linstorclusters wins even when listed after linstorcontrollers."""
        apis = "linstorcontrollers.piraeus.linbit.com\nlinstorclusters.piraeus.io\n"
        run_kubectl = fake_kubectl(
            apis,
            {
                "deployments": "piraeus-datastore,linstor-controller\n",
                "linstorcontrollers": "storage,old\n",
            },
        )

        endpoint = await ControllerLocator(run_kubectl).locate()

        assert endpoint.name == "linstor-controller"
        listed = [call.args[0][1] for call in run_kubectl.await_args_list[1:]]
        assert listed == ["deployments"]

    @pytest.mark.asyncio
    async def test_no_linstor_apis(self) -> None:
        """Test a cluster without LINSTOR APIs is an error."""
        run_kubectl = fake_kubectl("pods\ndeployments.apps\n", {})

        with pytest.raises(NoControllerFoundError, match="managed LINSTOR Controller"):
            await ControllerLocator(run_kubectl).locate()

    @pytest.mark.asyncio
    async def test_listing_failure_is_discovery_error(self) -> None:
        """Test a failing listing call surfaces kubectl's message."""

        def _run(args: Sequence[str]) -> str:
            if args[0] == "api-resources":
                return V2_APIS
            raise KubectlCommandError(list(args), 1, "forbidden")

        with pytest.raises(DiscoveryError, match="forbidden"):
            await ControllerLocator(AsyncMock(side_effect=_run)).locate()
