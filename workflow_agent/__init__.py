"""Workflow Agent Tools.

Named, schema-validated operations an LLM agent uses to edit workflow
versions, dispatched through an in-memory tool registry.
"""

__version__ = "1.0.0"

__all__ = ["clients", "core", "models", "observability", "tools"]
