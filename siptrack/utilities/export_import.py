"""
Export and Import functionality for drink logs and mood entries.
"""
import csv
import io
import json
import zipfile
from datetime import datetime
from pathlib import Path
from typing import List
import logging

from siptrack.domain.DrinkLog import DrinkLog
from siptrack.domain.MoodEntry import MoodEntry
from siptrack.infra.Drink_Repository import DrinkRepository
from siptrack.infra.Mood_Repository import MoodRepository
from siptrack.infra.json_store import read_json_list

logger = logging.getLogger(__name__)

DRINK_CSV_FIELDS = ['timestamp', 'brand', 'name', 'quantity', 'volume_ml', 'abv_percent',
                    'calories', 'carbs_g', 'sugar_g', 'unit_price', 'total_price']
MOOD_CSV_FIELDS = ['timestamp', 'mood_level', 'notes', 'tags']


class DataExporter:
    """Export a user's drink logs and mood entries."""

    def __init__(self, drinks_file: Path, moods_file: Path):
        self.drinks_file = Path(drinks_file)
        self.moods_file = Path(moods_file)

    def drinks_csv(self, user_id: str) -> str:
        """Drink logs of one user as CSV text, oldest first."""
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=DRINK_CSV_FIELDS)
        writer.writeheader()
        for log in reversed(DrinkRepository(self.drinks_file).list(user_id)):
            row = {k: v for k, v in log.to_dict().items() if k in DRINK_CSV_FIELDS}
            row['total_price'] = round(log.total_price, 2)
            writer.writerow(row)
        return out.getvalue()

    def moods_csv(self, user_id: str) -> str:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=MOOD_CSV_FIELDS)
        writer.writeheader()
        for entry in reversed(MoodRepository(self.moods_file).list(user_id)):
            writer.writerow({
                'timestamp': entry.timestamp,
                'mood_level': entry.mood_level,
                'notes': entry.notes or '',
                'tags': ', '.join(entry.tags),
            })
        return out.getvalue()

    def export_to_csv(self, data_type: str, user_id: str, output_path: Path = None) -> Path:
        """Write drinks or moods CSV to a file."""
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"{data_type}_export_{timestamp}.csv")
        if data_type == "drinks":
            text = self.drinks_csv(user_id)
        elif data_type == "moods":
            text = self.moods_csv(user_id)
        else:
            raise ValueError(f"Unknown data type: {data_type!r}")
        output_path.write_text(text, encoding='utf-8', newline='')
        logger.info(f"Exported {data_type} to CSV: {output_path}")
        return output_path

    def export_all(self, output_path: Path = None) -> Path:
        """Export the raw data files as a ZIP archive with metadata."""
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = Path(f"siptrack_backup_{timestamp}.zip")
        files = [f for f in (self.drinks_file, self.moods_file) if f.exists()]
        with zipfile.ZipFile(output_path, 'w', zipfile.ZIP_DEFLATED) as zipf:
            for data_file in files:
                zipf.write(data_file, arcname=data_file.name)
            metadata = {
                'export_date': datetime.now().isoformat(),
                'version': '1.0',
                'files': [f.name for f in files],
            }
            zipf.writestr('metadata.json', json.dumps(metadata, indent=2))
        logger.info(f"Exported all data to {output_path}")
        return output_path


class DataImporter:
    """Import drink logs and mood entries exported from SipTrack or the old browser client."""

    def __init__(self, drinks_file: Path, moods_file: Path):
        self.drinks_file = Path(drinks_file)
        self.moods_file = Path(moods_file)

    def import_drinks(self, input_path: Path, user_id: str) -> int:
        """Append logs from a JSON array, skipping ids already stored. Returns the count added."""
        repo = DrinkRepository(self.drinks_file)
        known = {log.id for log in repo.list(user_id)}
        added = 0
        for raw in read_json_list(input_path):
            log = DrinkLog.from_dict(raw)
            if log is None or log.id in known:
                continue
            log.user_id = user_id
            repo.append(log)
            known.add(log.id)
            added += 1
        logger.info(f"Imported {added} drink logs from {input_path}")
        return added

    def import_moods(self, input_path: Path, user_id: str) -> int:
        """Import mood entries for days without an entry. Returns the count added."""
        entries: List[MoodEntry] = [
            e for e in (MoodEntry.from_dict(raw) for raw in read_json_list(input_path)) if e is not None
        ]
        return MoodRepository(self.moods_file).migrate(user_id, entries)


# CLI interface
if __name__ == "__main__":
    import argparse
    from siptrack.infra.paths import DRINKS_FILE, MOODS_FILE
    from siptrack.utilities.config import DEFAULT_USER_ID

    parser = argparse.ArgumentParser(description='Export/Import SipTrack data')
    parser.add_argument('action', choices=['export', 'import'], help='Action to perform')
    parser.add_argument('--type', choices=['drinks', 'moods', 'all'], default='all', help='Data type')
    parser.add_argument('--user', default=DEFAULT_USER_ID, help='User id')
    parser.add_argument('--file', help='Input/output file path')

    args = parser.parse_args()

    if args.action == 'export':
        exporter = DataExporter(DRINKS_FILE, MOODS_FILE)
        target = Path(args.file) if args.file else None
        if args.type == 'all':
            result = exporter.export_all(target)
        else:
            result = exporter.export_to_csv(args.type, args.user, target)
        print(f"✓ Exported to: {result}")

    else:
        if not args.file or args.type == 'all':
            parser.error("import needs --file and --type drinks|moods")
        importer = DataImporter(DRINKS_FILE, MOODS_FILE)
        if args.type == 'drinks':
            count = importer.import_drinks(Path(args.file), args.user)
        else:
            count = importer.import_moods(Path(args.file), args.user)
        print(f"✓ Imported {count} {args.type} from: {args.file}")
