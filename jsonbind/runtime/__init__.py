"""
Runtime package: process-wide shared state.

- registry: copy-on-write codec, factory and implementation registries
- extensions: ordered extension pipeline and object-factory memoization
"""
