"""HTTP controllers, schemas and error handlers."""
