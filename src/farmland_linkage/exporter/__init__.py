from .json_exporter import (
    build_linkage_dict,
    export_linkage_json,
    serialize_linkage_to_json_string,
    to_json_compatible,
)

__all__ = [
    "build_linkage_dict",
    "export_linkage_json",
    "serialize_linkage_to_json_string",
    "to_json_compatible",
]
