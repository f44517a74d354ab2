"""Run the API server."""
import os
import uvicorn

if __name__ == "__main__":
    host = os.getenv('HOST', '0.0.0.0')
    port = int(os.getenv('PORT', 3000))
    print(f"Starting server on {host}:{port}...")

    # Long crawls hold the connection open; keep-alive must outlast them
    uvicorn.run(
        "screenshot_api.main:app",
        host=host,
        port=port,
        log_level="info",
        timeout_keep_alive=int(os.getenv('KEEP_ALIVE_TIMEOUT', 960)),
        reload=os.getenv('RELOAD', '').lower() in ('1', 'true', 'yes'),
    )
