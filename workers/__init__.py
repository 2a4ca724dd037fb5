"""Background jobs for subscription maintenance."""
