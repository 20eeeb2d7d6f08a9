"""
Core: configuration, logging, errors, hooks and the entity service contract.
"""
