"""
Compositions feature: the composition snapshot and its copy-on-write store.
"""
