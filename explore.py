"""Interactive terminal explorer for a TextScape chunk corpus."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

try:
    from prompt_toolkit import PromptSession
    from prompt_toolkit.completion import WordCompleter
    from prompt_toolkit.history import InMemoryHistory
except ImportError as e:
    print(f"Error: Required dependency not installed: {e}")
    print("Please install prompt_toolkit: pip install prompt_toolkit>=3.0.51")
    raise SystemExit(1)

import config
from __version__ import __version__
from explorer.configuration import DEFAULT_CONFIG, validate_config
from explorer.export import write_export
from explorer.loader import load_local_chunk_store, load_remote_chunk_store
from explorer.session import ExplorerSession
from explorer.store import ChunkStore
from explorer.visibility import search_preview
from types_models import ExplorerConfig
from utils.spinner import Spinner

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit", "q"}

HELP_TEXT = """Commands:
  show                 list visible chunks grouped by source
  search [text]        filter by text (no text clears the search)
  enter                open the first search result
  result <number>      open a search result by its number in `search`
  sources              list sources
  source <name|All>    show one source, or every source
  neighbors <n>        pin n nearest neighbours on each click (0 turns it off)
  click <number>       select a visible chunk by its number in `show`
  more                 show the full text of the selected chunk
  close                close the selected chunk
  clear                clear the neighbour filter
  markers              list visible chapter markers
  export [path]        write the visible chunks to CSV
  reset                restore every filter to its default
  quit                 leave the explorer"""


def _fmt_coord(value: float | None) -> str:
    return "—" if value is None else f"{value:.3f}"


def render_visible(session: ExplorerSession) -> str:
    """Numbered listing of the visible set, one block per plot series."""
    series = session.series()
    if not series:
        return "No visible chunks."

    lines: list[str] = []
    number = 0
    for s in series:
        lines.append(f"■ {s.name} ({len(s.points)} chunks, {s.color})")
        for x, y, z, text in s.points:
            number += 1
            coords = ", ".join(_fmt_coord(v) for v in (x, y, z))
            lines.append(f"  {number:>4}. ({coords}) {search_preview(text)}")

    state = session.state
    if state.neighbor_lock is not None:
        lines.append("(neighbour filter active, `clear` to remove)")
    elif state.search_active:
        lines.append(f"(search: {state.search_term!r})")
    return "\n".join(lines)


def render_selection(session: ExplorerSession) -> str:
    detail = session.selection_detail()
    if detail is None:
        return "Nothing selected."
    heading, body = detail
    return f"{heading}\n\n{body}"


def _visible_in_series_order(session: ExplorerSession) -> list[tuple[str, str]]:
    return [(p[3], s.name) for s in session.series() for p in s.points]


def handle_command(
    session: ExplorerSession, line: str, export_path: str = config.EXPORT_FILENAME
) -> str:
    """Apply one command line to the session and return the text to display."""
    command, _, raw_arg = line.lstrip().partition(" ")
    command = command.lower()
    arg = raw_arg.strip()

    handlers: dict[str, Callable[[], str]] = {
        "help": lambda: HELP_TEXT,
        "show": lambda: render_visible(session),
        "sources": lambda: "\n".join(session.store.sources()) or "No sources loaded.",
        "markers": lambda: _render_markers(session),
    }
    if command in handlers:
        return handlers[command]()

    if command == "more":
        session.expand_selection()
        return render_selection(session)

    if command == "search":
        # the term is matched as typed, surrounding spaces included
        session.search(raw_arg)
        results = session.search_results(config.SEARCH_RESULT_LIMIT)
        if not session.state.search_active:
            return "Search cleared."
        if not results:
            return "No matches."
        return "\n".join(
            f"  {i + 1}. [{c.source}] {search_preview(c.chunk)}" for i, c in enumerate(results)
        )

    if command == "enter":
        if session.select_first_search_result():
            return render_selection(session)
        return "No search results."

    if command == "result":
        results = session.search_results(config.SEARCH_RESULT_LIMIT)
        try:
            index = int(arg) - 1
        except ValueError as exc:
            raise ValueError(f"result needs a search result number, got: {arg!r}") from exc
        if not 0 <= index < len(results):
            raise ValueError(f"No search result numbered {arg}")
        picked = results[index]
        session.click(picked.chunk, picked.source)
        return render_selection(session)

    if command == "source":
        if not arg:
            return "Usage: source <name|All>"
        session.pick_source(arg)
        return f"Showing {len(session.visible())} chunks."

    if command == "neighbors":
        session.set_neighbor_count(arg)
        return f"Neighbour count set to {session.state.neighbor_count}."

    if command == "click":
        points = _visible_in_series_order(session)
        try:
            index = int(arg) - 1
        except ValueError as exc:
            raise ValueError(f"click needs a chunk number, got: {arg!r}") from exc
        if not 0 <= index < len(points):
            raise ValueError(f"No visible chunk numbered {arg}")
        text, source = points[index]
        session.click(text, source)
        return render_selection(session)

    if command == "close":
        session.close_selection()
        return "Selection closed."

    if command == "clear":
        session.clear_neighbors()
        return "Neighbour filter cleared."

    if command == "reset":
        session.reset()
        return "Filters reset."

    if command == "export":
        visible = session.visible()
        target = write_export(visible, Path(arg or export_path))
        return f"Wrote {len(visible)} chunks to {target}"

    raise ValueError(f"Unknown command: {command} (type `help`)")


def _render_markers(session: ExplorerSession) -> str:
    markers = session.markers()
    if not markers:
        return "No chapter markers in view."
    return "\n".join(
        f"  [{m.source}] ({m.x:.3f}, {m.y:.3f}, {m.z:.3f}) {search_preview(m.text)}"
        for m in markers
    )


def load_store(config_obj: ExplorerConfig, db_path: Path | None) -> ChunkStore:
    spinner_enabled = sys.stdout.isatty()
    message = f"Loading chunks from {db_path or config_obj.chunks_url}..."
    with Spinner(message, enabled=spinner_enabled):
        if db_path is not None:
            return load_local_chunk_store(db_path)
        return load_remote_chunk_store(config_obj)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the interactive explorer."""
    parser = argparse.ArgumentParser(description="Explore a 3D text chunk corpus")
    _ = parser.add_argument("--url", help="Chunk source endpoint")
    _ = parser.add_argument(
        "--db",
        nargs="?",
        const=str(DEFAULT_CONFIG.corpus_db_path),
        help="Read a local SQLite corpus instead of --url (default path when no value given)",
    )
    _ = parser.add_argument(
        "--neighbors", type=int, help="Initial neighbour count (0 disables)"
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(config.LOG_FILE, encoding="utf-8")],
    )

    config_obj = DEFAULT_CONFIG.model_copy()
    try:
        if args.url:
            config_obj.chunks_url = args.url
        if args.neighbors is not None:
            config_obj.default_neighbor_count = args.neighbors
        validate_config(config_obj)
    except ValueError as exc:
        print(f"❌ Configuration error: {exc}")
        sys.exit(1)

    store = load_store(config_obj, Path(args.db) if args.db else None)
    if not len(store):
        print(f"⚠️ No chunks loaded (details in {config.LOG_FILE}).")

    session = ExplorerSession(store, config_obj.default_neighbor_count)
    print(f"TextScape explorer (Version {__version__})")
    print(f"{len(store)} chunks from {len(store.sources())} sources. Type `help` for commands.")

    prompt = PromptSession(
        history=InMemoryHistory(),
        completer=WordCompleter(
            ["help", "show", "search", "enter", "result", "sources", "source", "neighbors",
             "click", "more", "close", "clear", "markers", "export", "reset", "quit",
             "All", *store.sources()],
            ignore_case=True,
        ),
    )

    while True:
        try:
            line = prompt.prompt("\ntextscape> ")
        except (KeyboardInterrupt, EOFError):
            print("\n👋 Goodbye!")
            break

        if line.strip().lower() in QUIT_COMMANDS:
            print("👋 Goodbye!")
            break

        if not line.strip():
            continue

        try:
            print(handle_command(session, line, config_obj.export_filename))
        except ValueError as exc:
            print(f"❌ {exc}")
        except OSError as exc:
            logger.error("Export failed: %s", exc)
            print(f"❌ Could not write file: {exc}")


if __name__ == "__main__":
    main()
