"""Top-level muno commands (auto-discovered by the dispatcher)."""
