"""Shared helpers for transports, retry schedules and inline payloads."""
