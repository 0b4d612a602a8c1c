"""
Shared application layer.
"""
