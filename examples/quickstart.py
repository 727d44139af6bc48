"""Quickstart: mirror a local directory into a store and back with ossify.

Demonstrates:
- Creating a StorageConfig for the local filesystem provider
- Uploading a directory tree (``put -r``)
- Listing and measuring it (``ls -R``, ``du -s``)
- Downloading it again (``get``)
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from ossify import StorageClient, StorageConfig

if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        source = Path(tmp) / "reports"
        (source / "2024").mkdir(parents=True)
        (source / "summary.txt").write_text("all good\n")
        (source / "2024" / "q4.csv").write_text("revenue,profit\n100,20\n")

        with StorageClient.from_config(StorageConfig.fs(str(Path(tmp) / "store"))) as client:
            client.backend.create_dir("backup")

            # Upload the tree; it lands under backup/reports/
            client.upload_files(source, "/backup", recursive=True)

            # List everything, then in long format
            client.list_directory("/backup", recursive=True)
            client.list_directory("/backup/reports", long=True)

            # Disk usage: one line per child, then the summary
            client.disk_usage("/backup/reports")
            client.disk_usage("/backup/reports", summary=True)

            # Download it back
            restored = Path(tmp) / "restored"
            client.download_files("/backup/reports", restored)
            print(f"Restored: {(restored / '2024' / 'q4.csv').read_text().strip()}")

    print("Done! Temp directory cleaned up automatically.")
