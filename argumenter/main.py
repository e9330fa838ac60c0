from argumenter.api.main import app

if __name__ == "__main__":
    import os
    import uvicorn
    host = os.getenv("ARGUMENTER_HOST", "127.0.0.1")
    port = int(os.getenv("ARGUMENTER_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)
