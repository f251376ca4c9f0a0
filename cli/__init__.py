"""Command-line interface for InlineTrans."""
