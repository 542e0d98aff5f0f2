"""aksctl - Manifest validation, deployment and decommissioning for the bigboy AKS cluster."""

__version__ = "0.1.0"
