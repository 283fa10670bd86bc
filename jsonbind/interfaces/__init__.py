"""
Interfaces package: protocols and shared type aliases.
"""
