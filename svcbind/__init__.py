"""Bind Kubernetes services and service-catalog instances to a Helm chart."""

__version__ = "0.1.0"
