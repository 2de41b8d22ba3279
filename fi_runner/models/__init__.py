"""Models for fi_runner."""
