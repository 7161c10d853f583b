import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import config
from ingestion.pipeline import build_corpus


def validate_input_path(folder_path: str) -> Path:
    """Validate the input folder and refuse filesystem roots or the home directory.

    Args:
        folder_path: Path to validate

    Raises:
        SystemExit: If the path is missing or too broad
    """
    path = Path(folder_path).resolve()

    if not path.exists():
        print(f"❌ Error: Path does not exist: {folder_path}")
        sys.exit(1)

    if not path.is_dir():
        print(f"❌ Error: Path is not a directory: {folder_path}")
        sys.exit(1)

    if path.parent == path or path == Path.home().resolve():
        print(f"❌ Error: Refusing to scan {path}")
        print("   Please specify a specific folder (e.g., './docs')")
        sys.exit(1)

    return path


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for the corpus builder."""
    parser = argparse.ArgumentParser(
        description="Build a 3D chunk corpus (text/HTML -> embeddings -> SQLite)"
    )
    _ = parser.add_argument(
        "folder",
        help="Root folder of documents to process (e.g., './docs')",
    )
    _ = parser.add_argument(
        "--db",
        default=config.CORPUS_DB_PATH,
        help=f"SQLite corpus to write (default: {config.CORPUS_DB_PATH})",
    )
    _ = parser.add_argument(
        "--method",
        choices=["umap", "tsne"],
        default=config.REDUCTION_METHOD,
        help="Dimensionality reduction used to place chunks in 3D",
    )
    _ = parser.add_argument(
        "--append",
        action="store_true",
        help="Append to the existing corpus instead of replacing it",
    )
    _ = parser.add_argument(
        "--no-recurse",
        action="store_true",
        help="Only process files in the root folder, skip subdirectories",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(config.LOG_FILE, encoding="utf-8"),
        ],
    )
    for logger_name in ["sentence_transformers", "torch", "umap", "numba"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    folder = validate_input_path(args.folder)

    _ = build_corpus(
        folder,
        Path(args.db),
        method=args.method,
        recurse=not args.no_recurse,
        fresh=not args.append,
    )


__all__ = ["main"]
