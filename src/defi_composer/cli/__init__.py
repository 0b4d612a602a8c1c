"""
Command Line Interface Module for DeFi Composer.
"""
from .main import main

__all__ = ['main']
