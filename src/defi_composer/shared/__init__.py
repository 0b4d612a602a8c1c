"""
Shared kernel: value objects, errors and the validation framework used by
every feature.
"""
