"""
Parallel execution of match attempts.

Provides MatchParallelExecutor for distributing the match attempts of one merge
pass across CPU cores using multiprocessing. Workers only read the base
snapshot; merging the results is left to the caller.
"""

from __future__ import annotations

import logging
import time
from multiprocessing import Pool, cpu_count
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


def _worker_wrapper(args: Tuple[int, Any, Callable, Dict[str, Any]]) -> Tuple[int, Any, Optional[str]]:
    """
    Worker wrapper for parallel match attempts.

    Must be at module level for pickling on Windows.

    Args:
        args: Tuple of (candidate_index, candidate, worker_fn, worker_kwargs)

    Returns:
        Tuple of (candidate_index, result, error_message)
    """
    idx, candidate, worker_fn, worker_kwargs = args
    try:
        result = worker_fn(candidate, **worker_kwargs)
        return (idx, result, None)
    except Exception as e:
        error_msg = f"{type(e).__name__}: {str(e)}"
        logger.error(f"Worker error on candidate {idx}: {error_msg}")
        return (idx, None, error_msg)


class MatchParallelExecutor:
    """
    Parallel executor for per-pass match attempts.

    Manages the worker pool, distributes candidates to workers and collects
    results in input order.

    Example:
        executor = MatchParallelExecutor(n_workers=4)
        results = executor.map_candidates(
            candidates=pending_scanners,
            worker_fn=match_against_base,
            worker_kwargs={'base': base_snapshot, 'matcher': matcher}
        )
    """

    def __init__(self, n_workers: Optional[int] = None):
        """
        Initialize parallel executor.

        Args:
            n_workers: Number of worker processes. If None, uses cpu_count - 1
                to leave one core for coordination. Minimum is 1.
        """
        if n_workers is None:
            n_workers = max(1, cpu_count() - 1)
        else:
            n_workers = max(1, int(n_workers))

        self.n_workers = n_workers

        logger.info(
            f"Initialized MatchParallelExecutor with {self.n_workers} workers "
            f"(total CPUs: {cpu_count()})"
        )

    def map_candidates(
        self,
        candidates: List[Any],
        worker_fn: Callable,
        worker_kwargs: Dict[str, Any],
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> List[Any]:
        """
        Map worker function over candidates in parallel.

        Args:
            candidates: Items to process (typically Scanner objects)
            worker_fn: Function to apply to each candidate. Must be picklable and
                have signature: worker_fn(candidate, **worker_kwargs) -> result
            worker_kwargs: Fixed keyword arguments passed to each worker call
            progress_callback: Optional callback called after each candidate
                completes. Signature: callback(completed_count, total_count)

        Returns:
            List of results in same order as input candidates

        Raises:
            RuntimeError: If any worker fails
        """
        n_items = len(candidates)

        if n_items == 0:
            logger.warning("No candidates to process")
            return []

        start_time = time.time()

        # No pool overhead for a single worker or a single candidate
        if self.n_workers == 1 or n_items == 1:
            logger.debug(f"Sequential match attempts for {n_items} candidate(s)")
            results = []
            for i, candidate in enumerate(candidates):
                try:
                    results.append(worker_fn(candidate, **worker_kwargs))
                except Exception as e:
                    logger.error(f"Error processing candidate {i}: {e}", exc_info=True)
                    raise RuntimeError(f"Match attempt failed: {e}") from e
                if progress_callback:
                    progress_callback(i + 1, n_items)
            return results

        logger.info(f"Processing {n_items} candidates with {self.n_workers} workers")
        results = self._parallel_map(candidates, worker_fn, worker_kwargs, progress_callback)

        total_time = time.time() - start_time
        logger.info(
            f"Parallel match attempts complete: {n_items} candidates in {total_time:.2f}s"
        )
        return results

    def _parallel_map(
        self,
        candidates: List[Any],
        worker_fn: Callable,
        worker_kwargs: Dict[str, Any],
        progress_callback: Optional[Callable],
    ) -> List[Any]:
        """
        Execute parallel mapping using multiprocessing.Pool.

        Uses imap_unordered for responsiveness, then reorders results to match
        input order.
        """
        n_items = len(candidates)
        worker_args = [(i, c, worker_fn, worker_kwargs) for i, c in enumerate(candidates)]

        results_dict = {}
        errors = []
        with Pool(processes=min(self.n_workers, n_items)) as pool:
            for completed, (idx, result, error) in enumerate(
                pool.imap_unordered(_worker_wrapper, worker_args), start=1
            ):
                if error:
                    errors.append((idx, error))
                    logger.error(f"Candidate {idx} failed: {error}")
                else:
                    results_dict[idx] = result

                if progress_callback:
                    progress_callback(completed, n_items)

        if errors:
            error_msg = f"{len(errors)} match attempts failed out of {n_items}"
            logger.error(error_msg)
            for idx, error in errors[:5]:
                logger.error(f"  Candidate {idx}: {error}")
            if len(errors) > 5:
                logger.error(f"  ... and {len(errors) - 5} more errors")
            raise RuntimeError(error_msg)

        return [results_dict[i] for i in range(n_items)]
