"""Domain models and pure rules."""
