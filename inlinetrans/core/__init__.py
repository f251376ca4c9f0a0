"""Core models, session orchestration and annotation management."""
