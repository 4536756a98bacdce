"""Components built on the store port."""
