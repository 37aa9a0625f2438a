"""Small provider-agnostic helpers shared by the adapters."""
