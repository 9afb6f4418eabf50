"""Domain layer — date resolution and ODT package rules.

This layer depends only on stdlib, pydantic, and Jinja2 templates.
It must never import from services, infrastructure, commands, or config.
"""
