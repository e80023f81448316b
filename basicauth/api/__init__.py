"""Shared HTTP helpers for BasicAuth endpoints."""
