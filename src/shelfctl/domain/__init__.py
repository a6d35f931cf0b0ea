"""Domain layer: records, normalization, sorting, and search algorithms.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
