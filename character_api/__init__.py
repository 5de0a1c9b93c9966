"""Character store API."""
