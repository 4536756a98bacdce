"""Core errors and port interfaces."""
