"""Web adapter: FastAPI routes over the Enso client."""
