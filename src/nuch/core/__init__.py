"""Core types, constants and errors for nuch."""
