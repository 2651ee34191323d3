# Path: scripts/index_services.py
# Purpose: CLI tool to embed the service media catalog and build the inspiration index.
# Layer: scripts.
# Details: Wires catalog loading, tagging, embedding, and vector store persistence together.

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from inspomatch.config import AppSettings
from inspomatch.core.analysis import ImageTagger
from inspomatch.core.embedders import build_embedder
from inspomatch.core.indexing import IndexBuilder, load_catalog
from inspomatch.core.vector_store import build_vector_store
from inspomatch.logging_config import setup_logging


def main() -> None:
    """Index every photo listed in the catalog manifest."""

    settings = AppSettings.from_env()
    parser = argparse.ArgumentParser(description="Index service media for inspiration matching")
    parser.add_argument("--catalog", type=Path, default=settings.catalog_path, help="JSON manifest of service media")
    parser.add_argument("--index", type=Path, default=settings.vector_store.index_path, help="Output index path prefix")
    parser.add_argument("--batch-size", type=int, default=settings.batch_size, help="Number of images to embed per batch")
    parser.add_argument("--no-auto-tags", action="store_true", help="Only use catalog tags, skip pixel tagging")
    args = parser.parse_args()

    setup_logging(settings.log_level)

    records = load_catalog(args.catalog)
    embedder = build_embedder(settings.embedder)
    vector_store = build_vector_store(settings.vector_store)
    tagger = None if args.no_auto_tags else ImageTagger()

    index_builder = IndexBuilder(embedder=embedder, vector_store=vector_store, tagger=tagger, batch_size=args.batch_size)
    indexed = index_builder.build_index(records)

    vector_store.save(str(args.index))
    print(f"Indexed {indexed}/{len(records)} service media into {args.index}")


if __name__ == "__main__":
    main()
