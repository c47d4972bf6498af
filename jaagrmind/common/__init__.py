"""
Common Module

Shared infrastructure for the JaagrMind backend: logging, the error
taxonomy, API error mapping and database connection settings.
"""
