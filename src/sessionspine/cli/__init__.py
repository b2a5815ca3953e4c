"""Typer CLI for session-spine (``session-spine`` console script)."""
