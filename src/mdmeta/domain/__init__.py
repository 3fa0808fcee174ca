"""Domain layer — front-matter scanning, rewrite policy, and line rendering.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
