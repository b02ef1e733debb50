"""
Mood DJ CLI - Entry point

Runs the web API and talks to a running instance: bulk uploads,
mix requests and the leaderboard.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import requests
from rich.console import Console
from rich.table import Table

from mood_dj import api_client
from mood_dj.core import config as config_module
from mood_dj.core.output import setup_logging_from_config

console = Console()


def run_serve(host: str, port: int, reload: bool = False) -> int:
    """Run the FastAPI app with uvicorn."""
    import uvicorn

    uvicorn.run("web.backend.main:app", host=host, port=port, reload=reload)
    return 0


def run_upload(api_url: str, paths: List[str], supported_formats: List[str]) -> int:
    """Upload every audio file under the given paths, one request per file.

    Returns:
        Exit code (0 if every upload succeeded, 1 otherwise)
    """
    files = api_client.collect_audio_files([Path(p) for p in paths], supported_formats)
    if not files:
        print("No audio files found", file=sys.stderr)
        return 1

    failed = 0
    for path in files:
        try:
            result = api_client.upload_file(api_url, path)
            console.print(f"  ✓ {path.name} → {result['trackId']}")
        except (api_client.APIClientError, OSError, requests.RequestException) as e:
            failed += 1
            console.print(f"  ✗ {path.name}: {e}", style="red")

    console.print(f"Uploaded {len(files) - failed}/{len(files)} files")
    return 1 if failed else 0


def run_mix(api_url: str, mood: str) -> int:
    """Request a mix and print its tracks in play order."""
    try:
        mix = api_client.generate_mix(api_url, mood)
    except (api_client.APIClientError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    console.print(f"Mix for [bold]{mix['mood']}[/bold] ({mix['_id']})")
    for position, track in enumerate(mix["tracks"], 1):
        console.print(f"  {position}. {track['artist']} - {track['title']}")
    return 0


def run_top(api_url: str) -> int:
    """Print the leaderboard as a table."""
    try:
        top_tracks = api_client.get_top_tracks(api_url)
    except (api_client.APIClientError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    table = Table(title="Top Tracks")
    table.add_column("#", justify="right", style="magenta")
    table.add_column("Title")
    table.add_column("Artist", style="dim")
    table.add_column("Plays", justify="right")
    for rank, track in enumerate(top_tracks, 1):
        table.add_row(str(rank), track["title"], track["artist"], str(track["selectionCount"]))
    console.print(table)
    return 0


def run_init_config(force: bool = False) -> int:
    """Write the default config.toml to the user config directory."""
    config_path = config_module.get_config_dir() / "config.toml"
    if config_path.exists() and not force:
        print(f"Config already exists: {config_path} (use --force to overwrite)", file=sys.stderr)
        return 1

    config_module.ensure_directories()
    config_path.write_text(config_module.create_default_config() + "\n", encoding="utf-8")
    print(f"Created default configuration at: {config_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mood DJ - AI-curated playlists from your own uploads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--api-url",
        default=api_client.DEFAULT_API_URL,
        help=f"Base URL of a running Mood DJ API (default: {api_client.DEFAULT_API_URL})",
    )

    # SUPPRESS so an --api-url given before the subcommand is not reset
    api_parent = argparse.ArgumentParser(add_help=False)
    api_parent.add_argument(
        "--api-url", default=argparse.SUPPRESS, help="Base URL of a running Mood DJ API"
    )

    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the web API")
    serve_parser.add_argument("--host", help="Bind address (default from config)")
    serve_parser.add_argument("--port", type=int, help="Port (default from config)")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes (development)"
    )

    upload_parser = subparsers.add_parser(
        "upload", parents=[api_parent], help="Upload audio files or folders"
    )
    upload_parser.add_argument("paths", nargs="+", help="Audio files or folders")

    mix_parser = subparsers.add_parser(
        "mix", parents=[api_parent], help="Generate a mix for a mood"
    )
    mix_parser.add_argument("mood", nargs="+", help="Mood description")

    subparsers.add_parser("top", parents=[api_parent], help="Show the most selected tracks")

    init_parser = subparsers.add_parser("init-config", help="Write a default config.toml")
    init_parser.add_argument("--force", action="store_true", help="Overwrite existing config")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the mood-dj command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.subcommand:
        parser.print_help()
        sys.exit(1)

    if args.subcommand == "init-config":
        sys.exit(run_init_config(force=args.force))

    cfg = config_module.load_config()

    if args.subcommand == "serve":
        # The app lifespan configures logging for the server process
        sys.exit(
            run_serve(
                host=args.host or cfg.web.host,
                port=args.port or cfg.web.port,
                reload=args.reload,
            )
        )

    setup_logging_from_config(cfg.logging)

    if args.subcommand == "upload":
        sys.exit(run_upload(args.api_url, args.paths, cfg.upload.supported_formats))

    elif args.subcommand == "mix":
        sys.exit(run_mix(args.api_url, " ".join(args.mood)))

    elif args.subcommand == "top":
        sys.exit(run_top(args.api_url))


if __name__ == "__main__":
    main()
