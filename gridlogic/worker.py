# worker.py
"""
Runs a link-puzzle solve in its own process so a caller (e.g. an editor UI)
stays responsive. One solve per process.
"""

import logging
import multiprocessing
from queue import Empty

from . import config
from .puzzles import numberlink

logger = logging.getLogger(__name__)


def solver_worker(mode, data, queue):
    """
    Solver task entry point; defined at module level so it can be pickled.

    :param mode: config.MODE_SOLVE or config.MODE_DEDUCT
    :param data: the puzzle object list
    :param queue: receives the resulting object list, or None on failure
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(format=config.LOG_FORMAT, level=logging.INFO)
    try:
        if mode == config.MODE_SOLVE:
            result = numberlink.solve(data)
        elif mode == config.MODE_DEDUCT:
            result = numberlink.deduce(data)
        else:
            raise ValueError(f"Unknown solver mode {mode!r}")
        queue.put(result)
    except Exception:
        logger.exception("solver worker failed in mode %s", mode)
        queue.put(None)


def run_in_process(mode, data, timeout=None):
    """
    Runs solver_worker in a child process and waits for its result.

    :param timeout: seconds to wait for a result; on expiry the child is
        terminated and None is returned
    """
    queue = multiprocessing.Queue()
    process = multiprocessing.Process(target=solver_worker, args=(mode, data, queue))
    process.start()
    try:
        result = queue.get(timeout=timeout)
    except Empty:
        logger.warning("solver process produced no result within %s s", timeout)
        process.terminate()
        result = None
    process.join()
    return result
