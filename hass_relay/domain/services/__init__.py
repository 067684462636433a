"""
Domain Services Package

Pure functions implementing the wire encoding rules: string escaping, the
minimal state scanner and discovery envelope partitioning.
"""
