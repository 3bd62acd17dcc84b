# ============================================================================
# TYPE MAPPER
# ============================================================================
# STATUS: Core - Native type to SQL column type mapping
# PURPOSE: Pure lookup used by the schema extractor
# CREATED: 19 OCT 2026
# EXPORTS: TYPE_MAP, map_type, native_type_name, Int32, Int64, Float32, Float64
# DEPENDENCIES: typing
# ============================================================================
"""
Type Mapper.

Maps a field's native type to a SQL column type name. The lookup is on
the type's *name* and is case-sensitive.

    int, Int32       -> INT
    Int64            -> BIGINT
    str              -> VARCHAR(255)
    bool             -> BOOLEAN
    Float32          -> FLOAT
    float, Float64   -> DOUBLE
    datetime         -> DATETIME
    UUID             -> UUID
    other name       -> the name itself
    anything else    -> TEXT

Python's int and float carry no width, so the width-specific aliases
below let a record say which column size it wants:

    from core.schema.type_mapper import Int64

    @dataclass
    class Event:
        id: Int64
"""

import re
import types
from typing import Annotated, Any, NewType, Optional, Union, get_args, get_origin


# ============================================================================
# WIDTH-SPECIFIC ALIASES
# ============================================================================

Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)


# ============================================================================
# TYPE MAPPING
# ============================================================================

TYPE_MAP = {
    # 32-bit signed integer
    "int": "INT",
    "Int32": "INT",
    # 64-bit signed integer
    "Int64": "BIGINT",
    # Text
    "str": "VARCHAR(255)",
    # Boolean
    "bool": "BOOLEAN",
    # 32-bit float
    "Float32": "FLOAT",
    # 64-bit float
    "float": "DOUBLE",
    "Float64": "DOUBLE",
    # Naive date-time
    "datetime": "DATETIME",
    # UUID
    "UUID": "UUID",
}

FALLBACK_SQL_TYPE = "TEXT"

_TYPE_PATH = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")

_UNION_ORIGINS = (Union, getattr(types, "UnionType", Union))


def _unwrap(native_type: Any) -> Any:
    """Strip Optional[...] and Annotated[...] wrappers."""
    while True:
        origin = get_origin(native_type)
        if origin is Annotated:
            native_type = get_args(native_type)[0]
        elif origin in _UNION_ORIGINS:
            members = [a for a in get_args(native_type) if a is not type(None)]
            if len(members) != 1:
                return native_type
            native_type = members[0]
        else:
            return native_type


def native_type_name(native_type: Any) -> Optional[str]:
    """
    Get the simple name of a native type.

    Args:
        native_type: Class, NewType, typing construct, or type-name string

    Returns:
        The name, or None if the type is not a simple named type
    """
    native_type = _unwrap(native_type)

    if isinstance(native_type, str):
        name = native_type.strip()
        if not _TYPE_PATH.match(name):
            return None
        return name.rsplit(".", 1)[-1]

    # Parameterized generics (List[int], Dict[str, Any], leftover unions)
    if get_origin(native_type) is not None:
        return None

    if isinstance(native_type, type) or hasattr(native_type, "__supertype__"):
        return native_type.__name__

    return None


def map_type(native_type: Any) -> str:
    """
    Map a native type to a SQL column type.

    Never raises: unknown names pass through, unrecognizable types
    become TEXT.

    Args:
        native_type: Class, NewType, typing construct, or type-name string

    Returns:
        SQL column type name
    """
    name = native_type_name(native_type)
    if name is None:
        return FALLBACK_SQL_TYPE
    return TYPE_MAP.get(name, name)


__all__ = [
    "TYPE_MAP",
    "FALLBACK_SQL_TYPE",
    "Int32",
    "Int64",
    "Float32",
    "Float64",
    "map_type",
    "native_type_name",
]
