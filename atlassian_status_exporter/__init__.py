"""Prometheus exporter for the /status endpoint of Atlassian applications."""

__version__ = "0.1.0"
