#!/usr/bin/env python3
"""
Basic search example for RingScan.

This example demonstrates how to:
1. Search a galaxy dump for ringed, landable atmospheric planets
2. Print the run report
3. Query the resulting DuckDB file
"""

from pathlib import Path

from ringscan.core.pipeline import format_report, run_search
from ringscan.database import queries
from ringscan.database.store import open_store


def main():
    input_file = Path("galaxy_1month.json.gz")

    if not input_file.exists():
        print(f"❌ Input file {input_file} not found")
        print("Download a galaxy dump (JSON array or JSON Lines, optionally gzipped)")
        return

    output_file = Path("galaxy_results.duckdb")

    print(f"🚀 Searching {input_file}")
    print(f"📁 Output database: {output_file}")

    try:
        result = run_search(input_file, output_file, workers=2, progress=True)
    except Exception as e:
        print(f"❌ Error: {e}")
        return

    print("\n✅ Success!")
    for line in format_report(result):
        print(f"📊 {line}")

    con = open_store(output_file)
    try:
        print("\n🎯 Ten nearest matches:")
        print(queries.nearest_systems(con, limit=10).to_string(index=False))
    finally:
        con.close()


if __name__ == "__main__":
    main()
