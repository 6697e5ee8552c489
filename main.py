if __name__ == "__main__":
    import os
    import uvicorn

    reload_enabled = os.environ.get("ADLIB_RELOAD") == "1"

    uvicorn.run(
        "app.main:app",
        host=os.environ.get("ADLIB_HOST", "0.0.0.0"),
        port=int(os.environ.get("ADLIB_PORT", "8000")),
        reload=reload_enabled,
    )
