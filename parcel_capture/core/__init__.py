"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants and default map view
- exceptions: Custom exception hierarchy
"""
