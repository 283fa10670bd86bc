"""
Core package: descriptor data model and the resolution pipeline.

Architecture:
- reflection / introspection read class structure and generic bindings
- resolver discovers candidate bindings
- views and conflicts narrow them
- builder orchestrates one descriptor per request
"""
