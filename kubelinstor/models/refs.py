"""Reference models for ``[namespace/]name`` tokens and resolved pod volumes."""

from __future__ import annotations

from dataclasses import dataclass

from kubelinstor.models.errors import InvalidReferenceError


@dataclass(frozen=True, slots=True)
class NamespacedRef:
    """A Kubernetes object name, optionally qualified with a namespace."""

    name: str
    namespace: str | None = None

    def namespace_args(self) -> tuple[str, ...]:
        """Return the kubectl flags selecting this reference's namespace."""
        if self.namespace is None:
            return ()
        return ("--namespace", self.namespace)

    def requalify(self, name: str) -> NamespacedRef:
        """Return a reference to ``name`` in the same namespace."""
        return NamespacedRef(name=name, namespace=self.namespace)

    def __str__(self) -> str:
        if self.namespace is None:
            return self.name
        return f"{self.namespace}/{self.name}"


def parse_namespaced_ref(token: str) -> NamespacedRef:
    """Parse ``name`` or ``namespace/name`` into a NamespacedRef.

    Only the first ``/`` separates the namespace, so ``a/b/c`` yields the
    namespace ``a`` and the name ``b/c``. An empty namespace part (``/name``)
    is treated as unqualified.

    Raises:
        InvalidReferenceError: If the name part is empty.
    """
    head, sep, tail = token.partition("/")
    if not sep:
        if not head:
            raise InvalidReferenceError(f"empty reference '{token}'")
        return NamespacedRef(name=head)
    if not tail:
        raise InvalidReferenceError(f"missing name in reference '{token}'")
    return NamespacedRef(name=tail, namespace=head or None)


@dataclass(frozen=True, slots=True)
class PodVolumes:
    """Volume identifiers backing a pod, paired with the claims they came from."""

    volume_ids: tuple[str, ...] = ()
    claim_names: tuple[str, ...] = ()

    def mapping_text(self) -> str:
        """Render ``[claim -> volume]`` pairs separated by spaces."""
        return " ".join(
            f"[{claim} -> {volume}]"
            for claim, volume in zip(self.claim_names, self.volume_ids)
        )
