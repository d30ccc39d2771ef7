"""Consumer-side helpers: logging, caching, presentation and export."""
