"""jsonbind: binding resolution for JSON (de)serialization

Given a Python type, this package computes a reusable plan describing which
members map to which JSON property names, per direction.

Responsibilities:
    - Field, accessor and property discovery
    - Generic type-parameter resolution across base classes
    - Name conflict resolution
    - View-based filtering of encode plans
    - Extension hooks and process-wide codec registries

Cross-cutting Concerns:
    Thread Safety:
        - Descriptor builds share no state except the registries
        - Registries publish copy-on-write snapshots under per-registry locks

    Error Handling:
        - All errors derive from JsonBindError
        - Failures abort a build before any registry write

    Logging:
        - Module loggers under the ``jsonbind`` namespace, DEBUG level
"""

from jsonbind.core.base import Binding, WrapperDescriptor
from jsonbind.core.builder import ClassDescriptorBuilder
from jsonbind.core.constructors import (
    ConstructorDescriptor,
    ConstructorKind,
    NoConstructor,
    ObjectFactory,
    ParameterizedConstructor,
    StaticFactory,
    ZeroArgConstructor,
)
from jsonbind.core.descriptors import ClassDescriptor
from jsonbind.core.errors import (
    AccessorConstructionFailure,
    BindingNameConflict,
    JsonBindError,
    MissingConstructorError,
    UnresolvedTypeShape,
)
from jsonbind.core.introspection import collect_type_variable_lookup, resolve_type_variable, type_signature
from jsonbind.core.metadata import JsonView, Transient, annotate, json_view
from jsonbind.interfaces.protocols import Extension
from jsonbind.interfaces.types import Direction
from jsonbind.runtime.extensions import EmptyExtension
from jsonbind.spi import (
    add_new_decoder,
    add_new_encoder,
    build,
    can_create,
    create,
    dump,
    get_decoder,
    get_decoding_class_descriptor,
    get_encoder,
    get_encoding_class_descriptor,
    get_extensions,
    get_type_implementation,
    register_extension,
    register_property_decoder,
    register_property_encoder,
    register_type_decoder,
    register_type_encoder,
    register_type_implementation,
)

__version__ = "0.1.0"

__all__ = [
    "AccessorConstructionFailure",
    "Binding",
    "BindingNameConflict",
    "ClassDescriptor",
    "ClassDescriptorBuilder",
    "ConstructorDescriptor",
    "ConstructorKind",
    "Direction",
    "EmptyExtension",
    "Extension",
    "JsonBindError",
    "JsonView",
    "MissingConstructorError",
    "NoConstructor",
    "ObjectFactory",
    "ParameterizedConstructor",
    "StaticFactory",
    "Transient",
    "UnresolvedTypeShape",
    "WrapperDescriptor",
    "ZeroArgConstructor",
    "add_new_decoder",
    "add_new_encoder",
    "annotate",
    "build",
    "can_create",
    "collect_type_variable_lookup",
    "create",
    "dump",
    "get_decoder",
    "get_decoding_class_descriptor",
    "get_encoder",
    "get_encoding_class_descriptor",
    "get_extensions",
    "get_type_implementation",
    "json_view",
    "register_extension",
    "register_property_decoder",
    "register_property_encoder",
    "register_type_decoder",
    "register_type_encoder",
    "register_type_implementation",
    "resolve_type_variable",
    "type_signature",
]
