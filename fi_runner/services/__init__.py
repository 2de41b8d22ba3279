"""Services for fi_runner."""
