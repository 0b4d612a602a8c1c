"""
Application layer: engine facade, settings and domain events.
"""
