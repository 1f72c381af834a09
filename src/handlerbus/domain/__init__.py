"""Domain layer: handler capability, marker, events, and errors.

This layer depends only on stdlib.
It must never import from services, plugins, commands, or config.
"""
