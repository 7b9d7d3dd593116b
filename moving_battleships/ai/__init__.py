"""AI opponents."""
