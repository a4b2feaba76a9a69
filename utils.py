# utils.py
import os
import re
import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

SURVEY_COLUMNS = [
    "width", "height", "nodes", "matched_edges", "is_spanning_tree",
    "dangling_stubs", "diameter", "radius", "source_eccentricity",
    "dead_ends", "straights", "corners", "junctions", "crosses", "lit_nodes"
]


def get_next_filename(directory, base_name="survey", extension="parquet"):
    """
    Finds the next available indexed filename in a directory.
    Example: If survey_1.parquet exists, this will return 'directory/survey_2.parquet'.
    """
    os.makedirs(directory, exist_ok=True)

    pattern = re.compile(rf"{re.escape(base_name)}_(\d+)\.{re.escape(extension)}$")

    max_index = 0
    for filename in os.listdir(directory):
        match = pattern.match(filename)
        if match:
            max_index = max(max_index, int(match.group(1)))

    return os.path.join(directory, f"{base_name}_{max_index + 1}.{extension}")


def find_latest_file(directory, base_name="survey", extension="parquet"):
    """Returns (path, error) for the highest-indexed file in `directory`."""
    if not os.path.isdir(directory):
        return None, f"Directory '{directory}' not found."

    pattern = re.compile(rf"{re.escape(base_name)}_(\d+)\.{re.escape(extension)}$")
    highest_index = -1
    latest_file_path = None
    for filename in os.listdir(directory):
        match = pattern.match(filename)
        if match and int(match.group(1)) > highest_index:
            highest_index = int(match.group(1))
            latest_file_path = os.path.join(directory, filename)

    if latest_file_path:
        return latest_file_path, None
    return None, f"No file matching '{base_name}_*.{extension}' found in '{directory}'."


class SurveyWriter:
    """Manages writing board statistics to a Parquet file in chunks."""
    def __init__(self, file_path, chunk_size=1_000, silent=False, worker_id=None):
        self.file_path = file_path
        self.chunk_size = chunk_size
        self.silent = silent
        self.worker_id = worker_id
        self.writer = None
        self._rows_chunk = []
        self.total_rows = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._rows_chunk:
            self._write_chunk()
        if self.writer:
            self.writer.close()
        if not self.silent and exc_type is None:
            print(f"✅ Finished! Wrote {self.total_rows} boards to '{self.file_path}'.")

    def _get_schema(self):
        """Column dtypes for the DataFrame."""
        schema = {col: 'uint32' for col in SURVEY_COLUMNS}
        schema["is_spanning_tree"] = 'bool'
        return schema

    def _write_chunk(self):
        """Converts the chunk to a DataFrame, applies the schema, and writes to Parquet."""
        if not self._rows_chunk:
            return

        df = pd.DataFrame(self._rows_chunk, columns=SURVEY_COLUMNS)
        df = df.astype(self._get_schema())

        table = pa.Table.from_pandas(df, preserve_index=False)

        if self.writer is None:
            self.writer = pq.ParquetWriter(self.file_path, table.schema)
        self.writer.write_table(table)

        if not self.silent:
            log_prefix = f"[Worker #{self.worker_id}]" if self.worker_id is not None else ""
            print(f"{log_prefix} ... Wrote chunk. Total boards for this worker: {self.total_rows}")
        self._rows_chunk = []

    def write(self, stats):
        self._rows_chunk.append({col: stats[col] for col in SURVEY_COLUMNS})
        self.total_rows += 1
        if len(self._rows_chunk) >= self.chunk_size:
            self._write_chunk()

    def process_stats(self, stats_iter):
        for stats in stats_iter:
            self.write(stats)
