"""Fields, field collections, function keys and the form controller."""

from .collection import FieldCollection
from .controller import Controller, RunControl, RunState, StatusMonitor
from .field_kinds import BooleanDisplay, FieldKind, FieldValue
from .fields import (
    BooleanField,
    DateTimeField,
    DecimalField,
    Field,
    IntegerField,
    StringField,
    UnsignedField,
    create_field,
    derive_data_name,
)
from .function_keys import FunctionKeyBinding, FunctionKeyCollection
from .string_manager import StringManager

__all__ = [
    "BooleanDisplay",
    "BooleanField",
    "Controller",
    "DateTimeField",
    "DecimalField",
    "Field",
    "FieldCollection",
    "FieldKind",
    "FieldValue",
    "FunctionKeyBinding",
    "FunctionKeyCollection",
    "IntegerField",
    "RunControl",
    "RunState",
    "StatusMonitor",
    "StringField",
    "StringManager",
    "UnsignedField",
    "create_field",
    "derive_data_name",
]
