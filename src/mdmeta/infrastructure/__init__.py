"""Infrastructure layer — document files and vocabulary lists on disk.

The only layer that touches persistent storage.
It must never import from services, commands, or output.
"""
