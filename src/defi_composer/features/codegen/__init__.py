"""
Code generation feature: Move source emitted from a composition.
"""
