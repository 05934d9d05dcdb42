"""Products and customers REST API on top of a generic paginated repository."""
