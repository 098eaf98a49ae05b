"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Namespaces, naming constants, defaults
- exceptions: Conversion exception hierarchy
"""
