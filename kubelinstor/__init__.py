"""kubectl-linstor - run LINSTOR client commands in the cluster's controller."""

__version__ = "0.3.0"

__all__ = ["__version__"]
