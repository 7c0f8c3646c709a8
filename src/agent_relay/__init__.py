"""Hierarchical routing of chat requests between LLM agents with tool handoff."""

__version__ = "0.1.0"
