"""
Feature packages: primitives, connections, compositions, validation, codegen.
"""
