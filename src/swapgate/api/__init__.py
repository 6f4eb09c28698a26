"""HTTP layer: app factory, ingress middleware and routes."""
