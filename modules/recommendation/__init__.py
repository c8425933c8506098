"""modules/recommendation: Per-day suggestions."""
