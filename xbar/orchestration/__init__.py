"""Run loop and logging."""
