"""
Mixins for common functionality.
"""

from __future__ import annotations

from typing import Any


class Configurable:
    """
    Mixin class for handling configuration overrides.

    Classes using this mixin call apply_overrides with a Config instance;
    every attribute in attr_list is read from the overrides when present and
    from the upper-cased Config attribute otherwise.
    """

    def apply_overrides(
        self,
        overrides: dict[str, Any],
        config_obj: Any,
        attr_list: list[str] | None = None,
    ) -> None:
        """
        Apply overrides to the instance using the config object as defaults.

        Sets self.attr = overrides.get(attr, config_obj.ATTR) for each attr in attr_list.
        Overrides that are None fall back to the config default.

        Args:
            overrides: Dictionary of override values
            config_obj: Configuration object with uppercase attribute names
            attr_list: List of attribute names to set
        """
        if attr_list is None:
            attr_list = []

        for attr in attr_list:
            override = overrides.get(attr)
            if override is not None:
                setattr(self, attr, override)
                continue
            config_attr = attr.upper()
            if hasattr(config_obj, config_attr):
                setattr(self, attr, getattr(config_obj, config_attr))
            else:
                msg = f"No override or config default for '{attr}'"
                raise AttributeError(msg)
