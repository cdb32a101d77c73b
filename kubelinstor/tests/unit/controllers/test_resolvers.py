"""Tests for claim and pod resolvers."""

from __future__ import annotations

from collections.abc import Sequence
from unittest.mock import AsyncMock

import pytest

from kubelinstor.controllers.kubectl.lookup import ResourceLookup
from kubelinstor.controllers.resolvers import ClaimResolver, PodResolver
from kubelinstor.models.errors import (
    AmbiguousNamespaceError,
    EmptyResultError,
    InvalidReferenceError,
    KubectlCommandError,
    PodResolutionError,
)
from kubelinstor.models.refs import NamespacedRef, PodVolumes


def fake_cluster(
    claims: dict[str, str], pods: dict[str, str]
) -> AsyncMock:
    """Build a run_kubectl mock answering claim and pod lookups."""

    def _run(args: Sequence[str]) -> str:
        kind, name = args[1], args[2]
        table = claims if kind == "persistentvolumeclaims" else pods
        if name not in table:
            raise KubectlCommandError(list(args), 1, f'{kind} "{name}" not found')
        return table[name]

    return AsyncMock(side_effect=_run)


class TestClaimResolver:
    """Tests for ClaimResolver class."""

    @pytest.mark.asyncio
    async def test_resolve_bound_claim(self) -> None:
        """Test a bound claim resolves to its volume name."""
        run_kubectl = fake_cluster({"data-pvc": "pvc-123\n"}, {})
        resolver = ClaimResolver(ResourceLookup(run_kubectl))

        assert await resolver.resolve(NamespacedRef("data-pvc", "default")) == "pvc-123"
        called_args = run_kubectl.await_args_list[0].args[0]
        assert called_args[:3] == ("get", "persistentvolumeclaims", "data-pvc")
        assert called_args[3:5] == ("--output", "jsonpath={.spec.volumeName}")

    @pytest.mark.asyncio
    async def test_resolve_unbound_claim(self) -> None:
        """Test an unbound claim raises EmptyResultError naming the claim."""
        resolver = ClaimResolver(ResourceLookup(fake_cluster({"data-pvc": ""}, {})))

        with pytest.raises(EmptyResultError, match="could not find volume name for PVC 'default/data-pvc'"):
            await resolver.resolve(NamespacedRef("data-pvc", "default"))

    @pytest.mark.asyncio
    async def test_resolve_token_parses_reference(self) -> None:
        """Test resolve_token accepts the raw [namespace/]name form."""
        resolver = ClaimResolver(ResourceLookup(fake_cluster({"data-pvc": "pvc-123"}, {})))
        assert await resolver.resolve_token("default/data-pvc") == "pvc-123"

    @pytest.mark.asyncio
    async def test_resolve_token_rejects_empty_name(self) -> None:
        """Test an empty name is rejected before any lookup."""
        run_kubectl = fake_cluster({}, {})
        resolver = ClaimResolver(ResourceLookup(run_kubectl))

        with pytest.raises(InvalidReferenceError):
            await resolver.resolve_token("default/")
        run_kubectl.assert_not_awaited()

    def test_prefix(self) -> None:
        """Test the resolver handles the pvc prefix."""
        assert ClaimResolver(ResourceLookup(AsyncMock())).prefix == "pvc"


class TestPodResolver:
    """Tests for PodResolver class."""

    @staticmethod
    def _resolver(run_kubectl: AsyncMock) -> PodResolver:
        lookup = ResourceLookup(run_kubectl)
        return PodResolver(lookup, ClaimResolver(lookup))

    @pytest.mark.asyncio
    async def test_resolve_all_claims_in_order(self) -> None:
        """Test every claim is resolved, in the pod's claim order."""
        run_kubectl = fake_cluster({"c1": "v1", "c2": "v2"}, {"web-0": "c2 c1"})

        result = await self._resolver(run_kubectl).resolve(NamespacedRef("web-0", "default"))

        assert result == PodVolumes(volume_ids=("v2", "v1"), claim_names=("c2", "c1"))

    @pytest.mark.asyncio
    async def test_claims_are_requalified_with_pod_namespace(self) -> None:
        """Test claim lookups use the pod's namespace."""
        run_kubectl = fake_cluster({"c1": "v1"}, {"web-0": "c1"})

        await self._resolver(run_kubectl).resolve(NamespacedRef("web-0", "apps"))

        claim_args = run_kubectl.await_args_list[1].args[0]
        assert claim_args[1:3] == ("persistentvolumeclaims", "c1")
        assert claim_args[-2:] == ("--namespace", "apps")

    @pytest.mark.asyncio
    async def test_claims_are_resolved_sequentially(self) -> None:
        """Test one kubectl call per claim, after the pod lookup."""
        run_kubectl = fake_cluster({"c1": "v1", "c2": "v2"}, {"web-0": "c1 c2"})

        await self._resolver(run_kubectl).resolve(NamespacedRef("web-0", "default"))

        names = [call.args[0][2] for call in run_kubectl.await_args_list]
        assert names == ["web-0", "c1", "c2"]

    @pytest.mark.asyncio
    async def test_pod_without_claims(self) -> None:
        """Test a pod without claims resolves to nothing."""
        run_kubectl = fake_cluster({}, {"web-0": ""})

        result = await self._resolver(run_kubectl).resolve(NamespacedRef("web-0", "default"))

        assert result == PodVolumes()

    @pytest.mark.asyncio
    async def test_failing_claim_aborts_whole_resolution(self) -> None:
        """Test one unbound claim fails the pod, naming that claim."""
        run_kubectl = fake_cluster({"c1": "v1", "c2": ""}, {"web-0": "c1 c2"})

        with pytest.raises(PodResolutionError) as exc_info:
            await self._resolver(run_kubectl).resolve(NamespacedRef("web-0", "default"))

        assert exc_info.value.claim == "c2"
        assert isinstance(exc_info.value.cause, EmptyResultError)
        assert "c2" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_pod_without_namespace(self) -> None:
        """Test an unknown unqualified pod suggests the namespaced form."""
        run_kubectl = fake_cluster({}, {})

        with pytest.raises(AmbiguousNamespaceError, match="pod:<namespace>/web-0"):
            await self._resolver(run_kubectl).resolve(NamespacedRef("web-0"))
