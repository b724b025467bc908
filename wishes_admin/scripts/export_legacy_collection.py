"""Export a collection of the legacy MongoDB store to CSV.

Usage:
    python -m wishes_admin.scripts.export_legacy_collection sharedwishes --filter last-month
    python -m wishes_admin.scripts.export_legacy_collection templates --status true --search birthday
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from pymongo import MongoClient

from wishes_admin.core.config import settings
from wishes_admin.models.shared_wish import WISH_STATUSES
from wishes_admin.services.listing import ChoiceFilter, FlagFilter, ListingParams, ListingProfile, export_rows
from wishes_admin.services.query_engine.mongo_store import MongoCollection

logger = logging.getLogger("wishes_admin.scripts.export_legacy_collection")

_LEGACY = dict(timestamp_field="createdAt", default_sort="createdAt")

# Keyed by the mongoose collection name; fields keep the legacy camelCase.
LEGACY_PROFILES: dict[str, ListingProfile] = {
    "templates": ListingProfile(
        entity="templates",
        search_fields=("title", "category"),
        sort_fields=("createdAt", "title", "category"),
        export_fields=("id", "title", "category", "tags", "isActive", "previewUrl", "createdAt"),
        flag_filters=(FlagFilter("status", "isActive"),),
        **_LEGACY,
    ),
    "sharedfiles": ListingProfile(
        entity="files",
        search_fields=("fileName", "originalName", "description", "owner"),
        sort_fields=("createdAt", "fileName", "size"),
        export_fields=("id", "fileName", "originalName", "mimeType", "size", "owner", "description", "createdAt"),
        **_LEGACY,
    ),
    "sharedwishes": ListingProfile(
        entity="shared-wishes",
        search_fields=("recipientName", "recipientEmail", "senderName", "senderEmail"),
        sort_fields=("createdAt", "views", "status"),
        export_fields=(
            "shortCode",
            "recipientName",
            "recipientEmail",
            "senderName",
            "senderEmail",
            "message",
            "views",
            "status",
            "createdAt",
        ),
        choice_filters=(ChoiceFilter("status", "status", WISH_STATUSES),),
        **_LEGACY,
    ),
    "admobs": ListingProfile(
        entity="ad-units",
        search_fields=("name", "adUnitCode"),
        sort_fields=("createdAt", "name"),
        export_fields=("id", "name", "adType", "adUnitCode", "platform", "isActive", "createdAt"),
        flag_filters=(FlagFilter("status", "isActive"),),
        **_LEGACY,
    ),
    "users": ListingProfile(
        entity="users",
        search_fields=("name", "email"),
        sort_fields=("createdAt", "name", "email"),
        export_fields=(
            "id",
            "name",
            "email",
            "role",
            "isActive",
            "lastLogin",
            "settings.theme",
            "settings.notifications.email",
            "settings.notifications.push",
            "createdAt",
        ),
        flag_filters=(FlagFilter("status", "isActive"),),
        **_LEGACY,
    ),
}


def export_collection(
    collection: MongoCollection,
    profile: ListingProfile,
    args: argparse.Namespace,
    out_dir: Path,
) -> Path:
    params = ListingParams(
        search=args.search,
        filter=args.filter,
        start_date=args.start_date,
        end_date=args.end_date,
    )
    body, filename = export_rows(collection, profile, params, {"status": args.status}, max_rows=args.max_rows)
    out_dir.mkdir(parents=True, exist_ok=True)
    target = out_dir / filename
    target.write_text(body, encoding="utf-8")
    return target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Export a legacy MongoDB collection to CSV")
    parser.add_argument("collection", choices=sorted(LEGACY_PROFILES))
    parser.add_argument("--search", default=None)
    parser.add_argument("--status", default=None, help="true/false, or a wish status for sharedwishes")
    parser.add_argument("--filter", default=None, help="today, DD/MM/YYYY, this-month, last-month, all-time")
    parser.add_argument("--start-date", dest="start_date", default=None)
    parser.add_argument("--end-date", dest="end_date", default=None)
    parser.add_argument("--out", default=".", help="directory for the CSV file")
    parser.add_argument("--max-rows", dest="max_rows", type=int, default=settings.EXPORT_MAX_ROWS)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    args = build_parser().parse_args(argv)
    client = MongoClient(settings.MONGODB_URI, serverSelectionTimeoutMS=5000)
    try:
        collection = MongoCollection(client[settings.MONGODB_DB][args.collection], name=args.collection)
        target = export_collection(collection, LEGACY_PROFILES[args.collection], args, Path(args.out))
    finally:
        client.close()
    print(f"legacy export done: collection={args.collection}, file={target}")


if __name__ == "__main__":
    main()
