"""Application services: configuration loading and projection runs."""
