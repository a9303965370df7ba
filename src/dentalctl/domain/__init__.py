"""Domain layer — value objects, validators, and the permission table.

This layer depends only on the stdlib.
It must never import from services, commands, output, or config.
"""
