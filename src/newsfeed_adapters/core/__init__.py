"""Shared collaborators used by every source adapter."""
