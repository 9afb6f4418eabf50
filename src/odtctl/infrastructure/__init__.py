"""Infrastructure layer — filesystem writes, templates and process launching.

May import from domain. Must never import from services, commands, or output.
"""
