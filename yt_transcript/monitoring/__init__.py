"""Prometheus monitoring: HTTP middleware and extraction metrics."""
