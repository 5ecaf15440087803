"""
Client modules: normalization, session state, HTTP transport and services.
"""
