"""kubectl access: subprocess runner and object field lookup."""

from kubelinstor.controllers.kubectl.lookup import ResourceLookup
from kubelinstor.controllers.kubectl.runner import KubectlRunner

__all__ = ["KubectlRunner", "ResourceLookup"]
