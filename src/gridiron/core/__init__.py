"""Overlay engine: catalog, mapping store, enrichment, integrity, search, sim."""
