"""Infrastructure package - storage for captured card images."""
