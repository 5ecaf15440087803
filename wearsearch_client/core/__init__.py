"""
Core configuration, errors and domain schemas.
"""
