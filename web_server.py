# ======================================
# Chunk Source Server
# - FastAPI server publishing the chunk corpus
# - Reads the SQLite corpus written by build_corpus.py
# - CORS enabled so browser clients can fetch /chunks directly
# ======================================

# ===============================
# Standard Library
# ===============================
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TypedDict

# ===============================
# Third-party Libraries
# ===============================
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

# ===============================
# Local Imports
# ===============================
import config
from __version__ import __version__
from explorer.loader import load_local_chunk_store
from explorer.store import ChunkStore
from web.models import ChunksResponse, HealthResponse

logger = logging.getLogger(__name__)


# ===============================
# Type Definitions
# ===============================
class CorpusState(TypedDict):
    """Type definition for global corpus state."""

    store: ChunkStore
    db_path: Path
    loaded: bool


# ===============================
# Global State
# ===============================
corpus: CorpusState = {
    "store": ChunkStore.empty(),
    "db_path": Path(config.CORPUS_DB_PATH),
    "loaded": False,
}


def load_corpus(db_path: Path) -> ChunkStore:
    """Read the corpus into global state; a missing database serves nothing."""
    store = load_local_chunk_store(db_path)
    corpus["store"] = store
    corpus["db_path"] = db_path
    corpus["loaded"] = len(store) > 0
    return store


# ===============================
# Startup/Shutdown Handlers
# ===============================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the corpus on startup, release it on shutdown."""
    print("🚀 Loading chunk corpus...")
    store = load_corpus(corpus["db_path"])
    if corpus["loaded"]:
        print(f"✅ Serving {len(store)} chunks from {len(store.sources())} sources")
    else:
        print("⚠️ Corpus is empty. Run build_corpus.py first!")

    yield

    print("🔄 Shutting down chunk source...")
    corpus["store"] = ChunkStore.empty()
    corpus["loaded"] = False


# ===============================
# FastAPI App
# ===============================
app = FastAPI(
    title="TextScape Chunk Source",
    description="Serves embedded text chunks for the TextScape explorer",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


# ===============================
# API Endpoints
# ===============================
@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    store = corpus["store"]
    return HealthResponse(
        status="healthy" if corpus["loaded"] else "empty",
        version=__version__,
        corpus_loaded=corpus["loaded"],
        total_chunks=len(store),
        total_sources=len(store.sources()),
    )


@app.get("/chunks", response_model=ChunksResponse)
async def list_chunks():
    """Return the full chunk corpus in stored order."""
    store = corpus["store"]
    return ChunksResponse(
        chunks=list(store.chunks),
        total=len(store),
        sources=store.sources(),
    )


# ===============================
# Server Entry Point
# ===============================
def main() -> None:
    """Run the FastAPI server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(config.LOG_FILE, encoding="utf-8"),
        ],
    )
    print("🌐 Starting TextScape chunk source...")
    print(f"📚 Chunks available at: http://localhost:{config.SERVER_PORT}/chunks")

    uvicorn.run(
        app,
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
        reload=False,
        access_log=True,
    )


if __name__ == "__main__":
    main()
