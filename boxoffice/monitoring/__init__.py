"""Prometheus metrics and HTTP middleware."""
