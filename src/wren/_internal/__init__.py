"""Internal helpers shared across wren modules. Not public API."""
