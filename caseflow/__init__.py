"""caseflow: outbox-driven workflow orchestration."""

__version__ = "1.0.0"
