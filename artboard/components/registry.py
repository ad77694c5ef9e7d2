"""Size policy registry keyed by component type."""

import logging
from functools import lru_cache
from typing import Iterable, Optional

from artboard.components.sizes import (
    BUILTIN_SIZE_POLICIES,
    DEFAULT_COMPONENT_TYPE,
    SizePolicy,
)

logger = logging.getLogger(__name__)


class SizePolicyRegistry:
    """Registry mapping component types to their size policies.

    Lookups never fail: an unknown type resolves to the ``default`` policy so
    an interaction on an unrecognised component still has sane limits.
    """

    def __init__(self, policies: Optional[dict[str, SizePolicy]] = None) -> None:
        """Initialize the registry.

        Args:
            policies: Initial policies by component type. Must contain a
                ``default`` entry or one is taken from the built-in table.
        """
        self._policies: dict[str, SizePolicy] = dict(policies or {})
        self._policies.setdefault(
            DEFAULT_COMPONENT_TYPE, BUILTIN_SIZE_POLICIES[DEFAULT_COMPONENT_TYPE]
        )

    @classmethod
    def with_builtins(cls) -> "SizePolicyRegistry":
        """Create a registry preloaded with the built-in component types."""
        return cls(BUILTIN_SIZE_POLICIES)

    def register(
        self, component_type: str, policy: SizePolicy, replace: bool = False
    ) -> SizePolicy:
        """Register a policy for a component type.

        Args:
            component_type: Component type identifier.
            policy: The size policy.
            replace: Overwrite an existing registration.

        Returns:
            The registered policy.

        Raises:
            ValueError: If the type is empty or already registered.
        """
        if not component_type:
            raise ValueError("Component type must be a non-empty string")

        if component_type in self._policies and not replace:
            raise ValueError(f"Size policy for '{component_type}' is already registered")

        self._policies[component_type] = policy
        return policy

    def unregister(self, component_type: str) -> None:
        """Remove a registration. The default policy cannot be removed."""
        if component_type == DEFAULT_COMPONENT_TYPE:
            return
        self._policies.pop(component_type, None)

    def get(self, component_type: Optional[str]) -> SizePolicy:
        """Get the policy for a type, falling back to the default policy."""
        policy = self._policies.get(component_type) if component_type else None
        if policy is None:
            logger.debug("No size policy for %r, using default", component_type)
            return self._policies[DEFAULT_COMPONENT_TYPE]
        return policy

    def get_or_raise(self, component_type: str) -> SizePolicy:
        """Get the policy for a type, raising if it is not registered.

        Raises:
            KeyError: If no policy is registered for the type.
        """
        policy = self._policies.get(component_type)
        if policy is None:
            raise KeyError(f"Size policy for '{component_type}' not found in registry")
        return policy

    def list_types(self) -> list[str]:
        """List registered component types."""
        return list(self._policies.keys())

    def update(self, policies: Iterable[tuple[str, SizePolicy]]) -> None:
        """Register or replace several policies at once."""
        for component_type, policy in policies:
            self.register(component_type, policy, replace=True)

    def __contains__(self, component_type: object) -> bool:
        return component_type in self._policies

    def __len__(self) -> int:
        return len(self._policies)


@lru_cache()
def default_registry() -> SizePolicyRegistry:
    """Process-wide registry preloaded with the built-in table."""
    return SizePolicyRegistry.with_builtins()


def get_size_policy(component_type: Optional[str]) -> SizePolicy:
    """Get a size policy from the default registry."""
    return default_registry().get(component_type)
