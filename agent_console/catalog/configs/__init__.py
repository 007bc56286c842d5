"""Catalog agent declarations, one module per agent."""
