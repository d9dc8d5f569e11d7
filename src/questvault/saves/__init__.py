"""Save folders."""
