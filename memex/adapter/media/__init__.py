"""Media host adapters."""
