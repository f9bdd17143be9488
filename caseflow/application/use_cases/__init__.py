"""Application use cases (workflow engine, trigger matcher, outbox drain)."""
