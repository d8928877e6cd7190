"""In-memory graph materialization via NetworkX."""
