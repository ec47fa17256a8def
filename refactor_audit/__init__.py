"""refactor-audit: workflow refactor blockers, pooled and prioritized."""

__version__ = "0.1.0"
