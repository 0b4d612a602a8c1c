"""
Primitives feature: kinds, templates, ports and the registry.
"""
