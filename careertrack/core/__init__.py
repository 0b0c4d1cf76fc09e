"""
Core module - configuration, session tokens, errors and logging.
"""
