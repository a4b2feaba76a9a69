# main.py
import argparse
import glob
import logging
import multiprocessing
import os

import duckdb

from analysis import calculate_board_stats
from board import Board
from logger import setup_logging
from utils import SurveyWriter, get_next_filename

# --- Constants for the main script ---
CHUNK_SIZE = 1_000
TEMP_DIR = "temp_survey"
OUTPUT_DIR = "generated_survey"

logger = logging.getLogger(__name__)


def board_sizes(min_size, max_size):
    """Every valid (width, height) pair with both sides in [min_size, max_size]."""
    return [
        (width, height)
        for width in range(min_size, max_size + 1)
        for height in range(min_size, max_size + 1)
        if width >= 2 and height >= 1 or width >= 1 and height >= 2
    ]


def survey_stats(sizes):
    for width, height in sizes:
        yield calculate_board_stats(Board(width, height))


def survey_for_task(task_config):
    worker_id = task_config['id']
    temp_file_path = os.path.join(task_config['temp_dir'], f"survey_{worker_id}.parquet")

    with SurveyWriter(temp_file_path, CHUNK_SIZE, silent=True, worker_id=worker_id) as writer:
        writer.process_stats(survey_stats(task_config['sizes']))

    logger.debug("Worker %d surveyed %d boards", worker_id, writer.total_rows)
    return writer.total_rows


def clear_temp_dir(temp_dir):
    """Creates `temp_dir`, dropping parquet files left behind by an interrupted run."""
    os.makedirs(temp_dir, exist_ok=True)
    stale_files = glob.glob(os.path.join(temp_dir, "*.parquet"))
    for f in stale_files:
        os.remove(f)
    if stale_files:
        logger.warning("Removed %d stale files from '%s'", len(stale_files), temp_dir)
    return len(stale_files)


def merge_parquet_files(temp_dir, final_output_path):
    """
    Merges every temporary parquet file into a single file using DuckDB,
    then removes the temporary files.
    """
    print("\nMerging worker results with DuckDB...")

    temp_files_pattern = os.path.join(temp_dir, "*.parquet")

    try:
        temp_files_list = sorted(glob.glob(temp_files_pattern))
        if not temp_files_list:
            print("No temporary files found to merge.")
            return False

        con = duckdb.connect()
        con.read_parquet(temp_files_list).order("width, height").write_parquet(final_output_path)
        con.close()

        for f in temp_files_list:
            os.remove(f)
        os.rmdir(temp_dir)
        print(f"✅ Files merged into '{final_output_path}' and temporary files removed.")
        return True
    except (duckdb.Error, OSError) as e:
        print(f"❌ An error occurred while merging with DuckDB: {e}")
        return False


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Survey the generated mazes over a range of board sizes.")
    parser.add_argument("--min-size", type=int, default=1, help="Smallest side length.")
    parser.add_argument("--max-size", type=int, default=24, help="Largest side length.")
    parser.add_argument("--workers", type=int, default=os.cpu_count(), help="Number of worker processes.")
    parser.add_argument("--output-dir", default=OUTPUT_DIR, help="Where the merged survey file is written.")
    parser.add_argument("--log-file", default="survey.log")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file)

    # --- 1. PREPARE TASKS ---
    sizes = board_sizes(args.min_size, args.max_size)
    if not sizes:
        print("❌ No valid board sizes in the requested range.")
        return

    workers = max(1, min(args.workers or 1, len(sizes)))
    print(f"Preparing {len(sizes)} board sizes for {workers} workers...")
    tasks = [
        {'id': worker_id, 'sizes': sizes[worker_id::workers], 'temp_dir': TEMP_DIR}
        for worker_id in range(workers)
    ]

    # --- 2. RUN IN PARALLEL ---
    stale = clear_temp_dir(TEMP_DIR)
    if stale:
        print(f"Removed {stale} leftover files from '{TEMP_DIR}'.")
    with multiprocessing.Pool(workers) as pool:
        results = pool.map(survey_for_task, tasks)

    # --- 3. MERGE AND FINALIZE ---
    final_parquet_path = get_next_filename(args.output_dir, "survey")
    merge_parquet_files(TEMP_DIR, final_parquet_path)

    print("\n-------------------------------------------")
    print(f"✅ All tasks complete. Surveyed {sum(results):,} boards.")
    print("-------------------------------------------")


if __name__ == "__main__":
    main()
