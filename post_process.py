import argparse
import json
import os
import sys
import time

import duckdb

from utils import find_latest_file

# =============================================================================
# CONFIGURATION
# =============================================================================
SOURCE_SURVEY_DIR = 'generated_survey'
REPORT_OUTPUT_DIR = 'reports'

# =============================================================================
# QUERIES
# =============================================================================

def create_survey_view(con, parquet_file_path):
    con.read_parquet(parquet_file_path).create_view("survey", replace=True)
    return con.execute("SELECT COUNT(*) FROM survey").fetchone()[0]


def find_violations(con):
    """Boards whose generated maze is not a perfect spanning tree."""
    return con.execute("""
        SELECT width, height, nodes, matched_edges, is_spanning_tree, dangling_stubs
        FROM survey
        WHERE NOT is_spanning_tree
           OR matched_edges <> nodes - 1
           OR dangling_stubs <> 0
           OR lit_nodes <> nodes
        ORDER BY width, height;
    """).fetchdf()


def radius_by_side(con):
    """Radius and diameter growth, grouped by the longer side of the board."""
    return con.execute("""
        SELECT
            GREATEST(width, height) AS longest_side,
            COUNT(*) AS boards,
            MIN(radius) AS min_radius,
            MAX(radius) AS max_radius,
            CAST(AVG(diameter) AS REAL) AS avg_diameter,
            CAST(AVG(diameter * 1.0 / nodes) AS REAL) AS avg_diameter_per_node
        FROM survey
        GROUP BY longest_side
        ORDER BY longest_side;
    """).fetchdf()


def tile_shape_totals(con):
    return con.execute("""
        SELECT
            SUM(dead_ends) AS dead_ends,
            SUM(straights) AS straights,
            SUM(corners) AS corners,
            SUM(junctions) AS junctions,
            SUM(crosses) AS crosses
        FROM survey;
    """).fetchdf()


def square_boards(con):
    return con.execute("""
        SELECT width, radius, diameter, source_eccentricity
        FROM survey
        WHERE width = height
        ORDER BY width;
    """).fetchdf()


def to_builtin(value):
    """json.dump fallback for numpy scalars."""
    if hasattr(value, "item"):
        return value.item()
    return str(value)


# =============================================================================
# MAIN
# =============================================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Summarize the newest maze survey.")
    parser.add_argument("--input-dir", default=SOURCE_SURVEY_DIR)
    parser.add_argument("--output-dir", default=REPORT_OUTPUT_DIR)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    start_time = time.time()
    print("=" * 50)
    print("SUMMARIZING MAZE SURVEY")
    print("=" * 50)

    parquet_file, error = find_latest_file(args.input_dir, "survey")
    if error:
        print(f"❌ ERROR: {error}")
        return 1
    print(f"✅ Survey file found: '{parquet_file}'")

    try:
        con = duckdb.connect()
        total = create_survey_view(con, parquet_file)
        print(f"  -> {total:,} boards in the survey.")

        violations = find_violations(con)
        by_side = radius_by_side(con)
        shapes = tile_shape_totals(con)
        squares = square_boards(con)
        con.close()
    except duckdb.Error as e:
        print(f"❌ ERROR while querying the survey: {e}")
        return 1

    if violations.empty:
        print("✅ Every surveyed board is a perfect maze.")
    else:
        print(f"❌ {len(violations)} boards break the spanning-tree invariant:")
        print(violations.to_string(index=False))

    print("\nRadius by longest side:")
    print(by_side.to_string(index=False))

    summary = {
        "source_file": parquet_file,
        "boards": int(total),
        "violations": violations.to_dict(orient="records"),
        "radius_by_side": by_side.to_dict(orient="records"),
        "tile_shapes": {k: int(v) for k, v in shapes.iloc[0].items()},
        "square_boards": squares.to_dict(orient="records"),
    }

    os.makedirs(args.output_dir, exist_ok=True)
    json_path = os.path.join(args.output_dir, 'survey_summary.json')
    with open(json_path, 'w') as f:
        json.dump(summary, f, indent=2, default=to_builtin)
    print(f"\n✅ Summary saved to '{json_path}'.")
    print(f"  -> Took {time.time() - start_time:.2f} s.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
