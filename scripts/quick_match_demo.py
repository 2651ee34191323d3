# Path: scripts/quick_match_demo.py
# Purpose: Simple CLI to match an inspiration photo against a stored index.
# Layer: scripts.
# Details: Loads embedder, vector store, and pipeline, then prints ranked matches.

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from PIL import Image

from inspomatch.config import AppSettings
from inspomatch.core.embedders import build_embedder
from inspomatch.core.models import LocationFilter
from inspomatch.core.search import InspirationSearchPipeline
from inspomatch.core.vector_store import build_vector_store
from inspomatch.logging_config import setup_logging


def main() -> None:
    """Execute a quick inspiration match from the command line."""

    parser = argparse.ArgumentParser(description="Match an inspiration photo against the service media index")
    parser.add_argument("image", type=Path, help="Inspiration photo to match")
    parser.add_argument("--notes", type=str, default=None, help="Extra context describing the look")
    parser.add_argument("--city", type=str, default=None, help="Restrict matches to providers in this city")
    parser.add_argument("--k", type=int, default=20, help="Number of neighbours to retrieve")
    parser.add_argument("--json", action="store_true", help="Print matches as JSON records")
    args = parser.parse_args()

    settings = AppSettings.from_env()
    setup_logging(settings.log_level)

    embedder = build_embedder(settings.embedder)
    vector_store = build_vector_store(settings.vector_store)
    vector_store.load(str(settings.vector_store.index_path))

    pipeline = InspirationSearchPipeline(
        embedder=embedder,
        vector_store=vector_store,
        scoring=settings.scoring,
        search=settings.search,
    )
    location = LocationFilter(city=args.city) if args.city else None
    with Image.open(args.image) as image:
        matches = pipeline.search_image(image, notes=args.notes, location=location, max_results=args.k)

    if not matches:
        print("No matches found")
        return
    if args.json:
        print(json.dumps([match.to_dict() for match in matches], indent=2))
        return
    for match in matches:
        tags = ", ".join(match.matching_tags) or "-"
        print(f"{match.final_score:3d}% media={match.media_id} distance={match.distance:.4f} tags={tags} [{match.breakdown}]")


if __name__ == "__main__":
    main()
