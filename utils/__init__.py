"""utils package: config and exchange clients."""
