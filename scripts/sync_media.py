#!/usr/bin/env python3
"""
Media Sync Script - pull one page from Pexels or YouTube into the content store

Runs the same pipeline as the /sync/{provider} endpoint: fetch, normalize,
skip duplicates, insert new items one at a time.

Usage:
    python scripts/sync_media.py pexels
    python scripts/sync_media.py youtube --max-items 25
    python scripts/sync_media.py pexels --collection ofymzs7 --force
    python scripts/sync_media.py youtube --probe
    python scripts/sync_media.py youtube --preview --max-items 5
    python scripts/sync_media.py youtube --published-after 2024-10-01 --category Travel
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from adapters.config import Settings
from adapters.repository import RepositoryRegistry
from contracts.errors import ContentSiteError
from contracts.models import VlogCategory
from services.sync_service import DEFAULT_MAX_ITEMS, PIPELINES, build_orchestrator
from utils.get_logger import get_logger

logger = get_logger(__name__)


async def run_sync(
    provider: str,
    collection_id: str | None,
    max_items: int,
    force: bool,
    probe: bool,
    env_file: str | None,
    published_after: datetime | None = None,
    category: VlogCategory | None = None,
    preview: bool = False,
) -> int:
    registry = None
    try:
        settings = Settings.from_env(env_file)
        registry = RepositoryRegistry(settings)
        orchestrator = build_orchestrator(provider, settings, registry)
        if probe:
            output = await orchestrator.probe(collection_id)
        elif preview:
            output = await orchestrator.preview(collection_id, max_items=max_items)
        else:
            result = await orchestrator.sync(
                collection_id,
                max_items=max_items,
                force=force,
                published_after=published_after,
                category=category,
            )
            output = result.to_response()
            for error in result.errors:
                logger.warning(f"  failed: {error}")
    except ContentSiteError as e:
        logger.error(f"{provider} sync failed ({type(e).__name__}): {e.message}")
        print(json.dumps({"success": False, "message": e.message, "error": type(e).__name__}, indent=2))
        return 1
    finally:
        if registry is not None:
            await registry.close()

    print(json.dumps(output, indent=2))
    return 0 if output.get("success", True) else 1


def main() -> None:
    """Main entry point for the media sync script."""
    parser = argparse.ArgumentParser(
        description="Sync media from an external provider into the content store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Sync the configured Pexels collection into photography
    python scripts/sync_media.py pexels

    # Sync the 25 newest uploads of the configured channel into vlogs
    python scripts/sync_media.py youtube --max-items 25

    # Check connectivity without writing anything
    python scripts/sync_media.py youtube --probe
        """,
    )

    parser.add_argument("provider", choices=sorted(PIPELINES), help="Provider to sync from")
    parser.add_argument(
        "--collection",
        type=str,
        default=None,
        help="Collection or channel id (default: PEXELS_COLLECTION_ID / YOUTUBE_CHANNEL_ID)",
    )
    parser.add_argument(
        "--max-items",
        type=int,
        default=DEFAULT_MAX_ITEMS,
        help=f"Items to fetch, 1-50 (default: {DEFAULT_MAX_ITEMS})",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Insert every fetched item, bypassing duplicate detection",
    )
    parser.add_argument("--probe", action="store_true", help="Only check provider connectivity")
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the normalized items of one page with suggested categories, without writing",
    )
    parser.add_argument(
        "--published-after",
        type=datetime.fromisoformat,
        default=None,
        help="Only sync items published at or after this ISO-8601 time (youtube only)",
    )
    parser.add_argument(
        "--category",
        type=VlogCategory,
        choices=list(VlogCategory),
        metavar="{" + ",".join(c.value for c in VlogCategory) + "}",
        default=None,
        help="Category for every synced vlog instead of keyword classification (youtube only)",
    )
    parser.add_argument("--env-file", type=str, default=None, help="Env file (default: ENV_FILE or config/local.env)")

    args = parser.parse_args()

    if not 1 <= args.max_items <= 50:
        parser.error("--max-items must be between 1 and 50")

    sys.exit(
        asyncio.run(
            run_sync(
                args.provider,
                args.collection,
                args.max_items,
                args.force,
                args.probe,
                args.env_file,
                published_after=args.published_after,
                category=args.category,
                preview=args.preview,
            )
        )
    )


if __name__ == "__main__":
    main()
