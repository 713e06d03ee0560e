# One-off, idempotent database scripts. Run with ``python -m townhub.migrations.<name>``.
