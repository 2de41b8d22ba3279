"""Engine for fi_runner."""
