"""Component size policies."""

from artboard.components.registry import (
    SizePolicyRegistry,
    default_registry,
    get_size_policy,
)
from artboard.components.sizes import (
    BUILTIN_SIZE_POLICIES,
    DEFAULT_COMPONENT_TYPE,
    SizePolicy,
)

__all__ = [
    "BUILTIN_SIZE_POLICIES",
    "DEFAULT_COMPONENT_TYPE",
    "SizePolicy",
    "SizePolicyRegistry",
    "default_registry",
    "get_size_policy",
]
