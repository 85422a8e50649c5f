from contextlib import asynccontextmanager
from fastapi import FastAPI

from .settings import load_settings
from .storage import LocalBlobStore
from .routes.download import DownloadRouter
from .routes.smartdoc import router as smartdoc_router

# Configuration from environment variables
VERSION = "1.0.0"
settings = load_settings()
FILES_DIR = settings["files_dir"]
CHUNK_SIZE = settings["chunk_size"]

@asynccontextmanager
async def lifespan(app: FastAPI):
    if not FILES_DIR.exists():
        print(f"[Store] Files directory {FILES_DIR} does not exist, every download will 404")
    yield

app = FastAPI(title="Nomad Magazine API", version=VERSION, lifespan=lifespan)

# Initialize router with configuration
download_router = DownloadRouter(store=LocalBlobStore(FILES_DIR, chunk_size=CHUNK_SIZE))


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": VERSION}


# Include routers. The download gate matches every path, so it goes last.
app.include_router(smartdoc_router)
app.include_router(download_router.router)
