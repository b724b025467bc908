import os
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock, patch

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from wishes_admin.scripts import export_legacy_collection as script
from wishes_admin.services.query_engine.errors import InvalidFilter
from wishes_admin.services.query_engine.mongo_store import MongoCollection


def _raw_collection(count, documents):
    raw = MagicMock()
    raw.count_documents.return_value = count
    cursor = raw.find.return_value.sort.return_value
    cursor.limit.return_value = cursor
    cursor.__iter__.return_value = iter(documents)
    return raw


class LegacyExportTests(unittest.TestCase):
    def test_exports_filtered_wishes_to_csv(self):
        raw = _raw_collection(
            1,
            [
                {
                    "_id": "65f0",
                    "__v": 0,
                    "shortCode": "ABC123",
                    "recipientName": "Ann",
                    "views": 4,
                    "status": "viewed",
                    "createdAt": datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
                }
            ],
        )
        args = script.build_parser().parse_args(
            ["sharedwishes", "--status", "viewed", "--search", "ann", "--filter", "02/03/2026"]
        )
        with tempfile.TemporaryDirectory() as tmp:
            target = script.export_collection(
                MongoCollection(raw, name="sharedwishes"),
                script.LEGACY_PROFILES["sharedwishes"],
                args,
                Path(tmp),
            )
            self.assertTrue(target.name.startswith("shared-wishes-02-Mar-2026-"))
            lines = target.read_text(encoding="utf-8").splitlines()

        self.assertEqual(lines[0].split(",")[:2], ["shortCode", "recipientName"])
        self.assertTrue(lines[1].startswith('"ABC123","Ann"'))
        raw.find.return_value.sort.return_value.limit.assert_called_once_with(args.max_rows + 1)

        query = raw.count_documents.call_args.args[0]
        self.assertEqual(query["$and"][0]["$or"][0], {"recipientName": {"$regex": "ann", "$options": "i"}})
        self.assertEqual(query["$and"][1], {"status": "viewed"})
        self.assertEqual(query["$and"][2]["createdAt"]["$gte"], datetime(2026, 3, 2, tzinfo=timezone.utc))

    def test_legacy_keywords_are_refused(self):
        args = script.build_parser().parse_args(["templates", "--filter", "week"])
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(InvalidFilter):
                script.export_collection(
                    MongoCollection(_raw_collection(0, [])),
                    script.LEGACY_PROFILES["templates"],
                    args,
                    Path(tmp),
                )

    def test_main_wires_client_from_settings(self):
        raw = _raw_collection(0, [])
        client = MagicMock()
        client.__getitem__.return_value.__getitem__.return_value = raw
        with tempfile.TemporaryDirectory() as tmp:
            with patch.object(script, "MongoClient", return_value=client) as factory:
                script.main(["admobs", "--out", tmp])
            written = list(Path(tmp).glob("ad-units-All-Time-*.csv"))
            self.assertEqual(len(written), 1)
            self.assertEqual(
                written[0].read_text(encoding="utf-8"),
                "id,name,adType,adUnitCode,platform,isActive,createdAt\n",
            )
        factory.assert_called_once()
        client.close.assert_called_once()
