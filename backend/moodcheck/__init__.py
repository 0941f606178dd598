"""Daily mood check-in backend."""
