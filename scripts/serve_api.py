# Path: scripts/serve_api.py
# Purpose: Launch the inspiration search HTTP API.
# Layer: scripts.
# Details: Loads the persisted index, builds the pipeline, and serves the FastAPI app with uvicorn.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import uvicorn

from inspomatch.api import create_app
from inspomatch.config import AppSettings
from inspomatch.core.embedders import build_embedder
from inspomatch.core.search import InspirationSearchPipeline
from inspomatch.core.vector_store import build_vector_store
from inspomatch.logging_config import get_logger, setup_logging


def main() -> None:
    """Serve the API on the given host and port."""

    parser = argparse.ArgumentParser(description="Serve the InspoMatch API")
    parser.add_argument("--host", type=str, default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    settings = AppSettings.from_env()
    setup_logging(settings.log_level)
    logger = get_logger("serve")

    embedder = build_embedder(settings.embedder)
    vector_store = build_vector_store(settings.vector_store)
    try:
        vector_store.load(str(settings.vector_store.index_path))
    except FileNotFoundError:
        logger.warning(f"No index at {settings.vector_store.index_path}; serving an empty index")

    pipeline = InspirationSearchPipeline(
        embedder=embedder,
        vector_store=vector_store,
        scoring=settings.scoring,
        search=settings.search,
    )
    uvicorn.run(create_app(pipeline), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
