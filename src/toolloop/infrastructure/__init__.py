"""
infrastructure - Configuration and external service integrations.

Depends on domain/ only.
"""
