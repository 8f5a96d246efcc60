"""Application layer: collaborator ports consumed by the log message view."""
