"""Clients for upstream HTTP APIs."""
