import uvicorn


def serve(host: str, port: int, reload: bool) -> None:
    """Run the API with uvicorn."""
    uvicorn.run("receptro.main:app", host=host, port=port, reload=reload)
