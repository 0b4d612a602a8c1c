"""
Validation feature: structural and semantic checks over a composition.
"""
