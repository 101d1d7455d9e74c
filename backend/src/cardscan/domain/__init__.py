"""
Domain package - Core contact model and rules with no external dependencies.

This package contains pure Python models and validation rules for the
contacts extracted from business cards.
"""
