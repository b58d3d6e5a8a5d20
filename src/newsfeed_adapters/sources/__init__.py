"""Publisher-specific source adapters.  One sub-package per publisher."""
