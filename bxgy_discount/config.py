"""Dataclass-based function settings.

The discount function has no business thresholds of its own (those arrive
per evaluation in the discount configuration); what it does own are the
customer-facing messages and the metafield coordinates shared with the
merchant-side builders. Both live here as frozen dataclasses.
"""

from dataclasses import dataclass, field

from bxgy_discount.utils.logger import LEVELS


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MessageSettings:
    """Messages attached to each discount the function returns."""

    bxgy_message: str = "BXGY Bundle Discount"
    volume_message: str = "Volume Discount"
    fbt_message_template: str = "Bundle & Save {pct}% off"  # {pct} = group percentage

    def fbt_message(self, pct: str) -> str:
        # Plain substitution: any other braces in the template are literal text
        return self.fbt_message_template.replace("{pct}", pct)


@dataclass(frozen=True)
class MetafieldSettings:
    """Where configuration payloads are stored."""

    function_namespace: str = "$app:bxgy-discount"
    function_key: str = "function-configuration"
    storefront_namespace: str = "bxgy_bundle"
    tiered_key: str = "tiered_config"
    volume_key: str = "volume_config"
    complement_key: str = "complement_config"

    def display_key(self, bundle_kind: str) -> str:
        """Storefront metafield key for a bundle kind (tiered, volume, complement)."""
        keys = {
            "tiered": self.tiered_key,
            "volume": self.volume_key,
            "complement": self.complement_key,
        }
        if bundle_kind not in keys:
            raise ValueError(f"Unknown bundle kind: {bundle_kind!r}")
        return keys[bundle_kind]


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FunctionSettings:
    """Complete settings for the discount function.

    Usage::

        settings = FunctionSettings.from_env()
        result = run_discount(lines, raw_config, settings)
    """

    messages: MessageSettings = field(default_factory=MessageSettings)
    metafields: MetafieldSettings = field(default_factory=MetafieldSettings)
    log_level: str = "INFO"

    @classmethod
    def default(cls) -> "FunctionSettings":
        """Create settings with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "BXGY_") -> "FunctionSettings":
        """Create settings from environment variables.

        Example: BXGY_VOLUME_MESSAGE="Buy more, save more"
        """
        import os

        message_overrides = {}
        for name in ("bxgy_message", "volume_message", "fbt_message_template"):
            value = os.getenv(f"{prefix}{name.upper()}")
            if value:
                message_overrides[name] = value

        overrides = {}
        if message_overrides:
            overrides["messages"] = MessageSettings(**message_overrides)
        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level and log_level.strip().upper() in LEVELS:
            overrides["log_level"] = log_level.strip().upper()

        return cls(**overrides)
