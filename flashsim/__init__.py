"""Flash translation layer simulator with greedy garbage collection."""

__version__ = "0.1.0"

__all__ = ["config", "ftl", "cli"]