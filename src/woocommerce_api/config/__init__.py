"""Configuration for the WooCommerce API client."""

from .settings import Settings, load_settings, with_api_version

__all__ = ["Settings", "load_settings", "with_api_version"]
