import logging
import os


def setup_logging(log_file="debug.log", level=logging.DEBUG):
    """
    Configures the root logger to write to a file.

    Args:
        log_file (str): The path to the log file. It is overwritten on each run.
        level (int): Minimum level written to the file.
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logging.basicConfig(
        filename=log_file,
        filemode='w',
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger(__name__).info("Logging initialized.")
