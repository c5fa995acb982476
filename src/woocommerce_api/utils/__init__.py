"""Utilities for the WooCommerce API client: HTTP core, pagination, secure logging."""
