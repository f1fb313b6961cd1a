#!/usr/bin/env python3
"""Story analysis CLI script.

Reads a folder of story files (markdown, text or HTML fragments) and reports:
- detected characters, locations and relationships (full enrichment), or
- only the entities not already known (``--detect``), with confidence tiers
- dialogue and mention details for a single entity (``--entity``)

Usage:
    python scripts/analyze_story.py stories/
    python scripts/analyze_story.py stories/ --detect --known-character Alex
    python scripts/analyze_story.py stories/ --entity Alex --json report.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from loguru import logger
from rich.console import Console
from rich.table import Table

# Allow running from a source checkout without installing the package.
sys.path.insert(0, str(Path(__file__).parent.parent))

from storylens.extraction.entity_merger import EntityAggregator  # noqa: E402
from storylens.extraction.models import DetectionResult, ParseResult  # noqa: E402
from storylens.ingestion.text_file_loader import TextFileLoader  # noqa: E402
from storylens.search.mention_search import MentionSearch  # noqa: E402
from storylens.utils.config import Config, load_config  # noqa: E402
from storylens.utils.logging import setup_logging  # noqa: E402

console = Console()


def _render_enrichment(result: ParseResult, limit: int) -> None:
    characters = Table(title="Characters")
    characters.add_column("Name", style="cyan")
    characters.add_column("Count", justify="right")
    characters.add_column("Example")
    for candidate in result.characters[:limit]:
        characters.add_row(candidate.name, str(candidate.count), (candidate.context or [""])[0][:80])
    console.print(characters)

    locations = Table(title="Locations")
    locations.add_column("Name", style="green")
    locations.add_column("Count", justify="right")
    for candidate in result.locations[:limit]:
        locations.add_row(candidate.name, str(candidate.count))
    console.print(locations)

    relationships = Table(title="Relationships")
    relationships.add_column("Pair", style="magenta")
    relationships.add_column("Strength", justify="right")
    for relationship in result.relationships[:limit]:
        relationships.add_row(f"{relationship.char1} / {relationship.char2}", str(relationship.strength))
    console.print(relationships)

    console.print(f"[dim]{len(result.dialogue)} dialogue lines extracted[/dim]")


def _render_detection(result: DetectionResult, limit: int) -> None:
    for title, entities in (("New characters", result.characters), ("New locations", result.locations)):
        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("Count", justify="right")
        table.add_column("Confidence")
        for entity in entities[:limit]:
            table.add_row(entity.name, str(entity.count), entity.confidence.value)
        console.print(table)
    if not result.characters and not result.locations:
        console.print("[yellow]No new suggestions found.[/yellow]")


def _render_entity(search: MentionSearch, name: str, limit: int) -> Dict[str, Any]:
    dialogue = search.dialogue_for(name)
    mentions = search.mentions_for(name)

    console.print(f"[bold]{name}[/bold]: {len(dialogue)} dialogue lines, {len(mentions)} mentions")
    table = Table(title=f"Dialogue by {name}")
    table.add_column("File", style="dim")
    table.add_column("Line")
    for entry in dialogue[:limit]:
        table.add_row(entry.file, entry.dialogue)
    console.print(table)

    table = Table(title=f"Mentions of {name}")
    table.add_column("File", style="dim")
    table.add_column("Sentence")
    for mention in mentions[:limit]:
        table.add_row(mention.file, mention.context)
    console.print(table)

    return {
        "name": name,
        "dialogue": [entry.model_dump() for entry in dialogue],
        "mentions": [mention.model_dump() for mention in mentions],
    }


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Detect characters, locations, dialogue and relationships in story files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("directory", type=Path, help="Folder containing story files")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to configuration file (default: config/config.yaml; defaults if missing)",
    )
    parser.add_argument("--detect", action="store_true", help="Only report entities not yet known")
    parser.add_argument(
        "--known-character",
        action="append",
        default=[],
        help="Character already tracked (repeatable; used with --detect)",
    )
    parser.add_argument(
        "--known-location",
        action="append",
        default=[],
        help="Location already tracked (repeatable; used with --detect)",
    )
    parser.add_argument("--entity", help="Show dialogue and mentions for one entity")
    parser.add_argument("--limit", type=int, default=25, help="Max rows per table")
    parser.add_argument("--json", type=Path, default=None, help="Also write results as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()

    config = load_config(args.config) if args.config.exists() else Config()
    setup_logging(config.logging, level="DEBUG" if args.verbose else None)

    loader = TextFileLoader(config.story_suffixes)
    documents = loader.load_directory(args.directory)

    payload: Dict[str, Any]
    if args.entity:
        payload = _render_entity(MentionSearch(documents), args.entity, args.limit)
    elif args.detect:
        detection = EntityAggregator(config).auto_detect_entities(
            documents, args.known_character, args.known_location
        )
        _render_detection(detection, args.limit)
        payload = detection.model_dump(mode="json")
    else:
        enrichment = EntityAggregator(config).parse_files(documents)
        _render_enrichment(enrichment, args.limit)
        payload = enrichment.model_dump(mode="json")

    if args.json is not None:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("Wrote JSON report to {}", args.json)


if __name__ == "__main__":
    main()
