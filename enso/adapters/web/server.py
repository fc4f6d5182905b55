"""FastAPI application."""

from fastapi import FastAPI

from enso.adapters.web.routes import enso_client, enso_router, service
from enso.config import __version__

app = FastAPI(title="Enso Bundle Server", version=__version__)
app.include_router(enso_router)


@app.get("/status")
async def status():
    """Server status endpoint"""
    return {
        "version": __version__,
        "configured": enso_client.is_configured,
        "api_url": enso_client.get_api_url(),
        "chain_id": service.active_chain_id,
    }
