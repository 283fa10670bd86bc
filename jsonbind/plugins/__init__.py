"""
Bundled extensions.
"""

from .custom_constructors import ConstructorExtension, ParameterSpec
from .naming import NamingStrategyExtension, to_camel_case, to_kebab_case, to_snake_case

__all__ = [
    "ConstructorExtension",
    "NamingStrategyExtension",
    "ParameterSpec",
    "to_camel_case",
    "to_kebab_case",
    "to_snake_case",
]
