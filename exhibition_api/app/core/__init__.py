"""
Core infrastructure: settings, logging, persistence and caller identity.
"""
