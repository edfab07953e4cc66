"""Case creation callbacks."""
