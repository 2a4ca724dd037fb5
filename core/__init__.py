"""Shared helpers for the scheduling and entitlement engines."""
