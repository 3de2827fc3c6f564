"""
Lazy request body encoders (urlencoded and multipart forms).
"""
from .encoder import (
    ContentDescriptor,
    EncoderState,
    FieldQueue,
    FormContent,
    MultipartContent,
    create_form_content,
    create_multipart_content,
    encode_form_component,
    encode_uri_component,
)
from .filters import (
    DEFAULT_FILTERS,
    default_array_filter,
    default_filter,
    default_object_filter,
    select_filter,
    value_kind,
)

__all__ = [
    "ContentDescriptor",
    "EncoderState",
    "FieldQueue",
    "FormContent",
    "MultipartContent",
    "create_form_content",
    "create_multipart_content",
    "encode_form_component",
    "encode_uri_component",
    "DEFAULT_FILTERS",
    "default_array_filter",
    "default_filter",
    "default_object_filter",
    "select_filter",
    "value_kind",
]
