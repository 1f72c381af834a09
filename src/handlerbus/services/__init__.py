"""Service layer: registry, dispatcher, and CLI-facing services.

Services may import from domain and plugins layers.
They must never import from commands or output.
"""
