"""
Core infrastructure: settings, logging, database access, password
hashing and the error taxonomy.
"""
