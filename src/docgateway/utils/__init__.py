"""Utility helpers for docgateway."""
