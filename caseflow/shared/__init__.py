"""Shared cross-cutting code: enums, telemetry, utils."""
