"""Service layer for the boarding calendar."""
