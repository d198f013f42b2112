"""Guardian brain: personal-safety companion backend."""
