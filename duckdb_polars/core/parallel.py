"""Thread-pool parallel map that preserves input order."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Optional, Sequence, TypeVar

from duckdb_polars.core.exceptions import DuckDBPolarsError, InternalError

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class ParallelMapper:
    """Fixed-size thread pool that maps a function over indexed work items.

    Results are written into a pre-sized list at the index of the item that
    produced them, so the output order always equals the input order no matter
    in which order the workers finish. The first failure cancels the work that
    has not started yet and is raised to the caller.

    Use one mapper per level of nesting: a task running on a mapper must not
    wait on work submitted to the same mapper.
    """

    def __init__(self, parallelism: int, thread_name_prefix: str = "duckdb_polars"):
        """Initialize parallel mapper.

        Args:
            parallelism: Maximum number of worker threads (1 = run inline)
            thread_name_prefix: Prefix for worker thread names
        """
        if parallelism < 1:
            raise ValueError("parallelism must be at least 1")
        self.parallelism = parallelism
        self._executor: Optional[ThreadPoolExecutor] = None
        if parallelism > 1:
            self._executor = ThreadPoolExecutor(
                max_workers=parallelism, thread_name_prefix=thread_name_prefix
            )

    def __enter__(self) -> "ParallelMapper":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker threads."""
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None

    def map(self, func: Callable[[int, T], R], items: Sequence[T]) -> list[R]:
        """Apply ``func(index, item)`` to every item.

        Args:
            func: Function receiving the item index and the item
            items: Work items

        Returns:
            List of results in the same order as ``items``

        Raises:
            DuckDBPolarsError: The error raised by the failing work item
            InternalError: If a work item fails with any other exception
        """
        item_list = list(items)

        if not item_list:
            return []

        if self._executor is None or len(item_list) == 1:
            results = []
            for index, item in enumerate(item_list):
                try:
                    results.append(func(index, item))
                except DuckDBPolarsError:
                    raise
                except Exception as e:
                    raise self._wrap(index, e) from e
            return results

        ordered: list[Optional[R]] = [None] * len(item_list)
        futures: dict[Future, int] = {
            self._executor.submit(func, index, item): index
            for index, item in enumerate(item_list)
        }

        try:
            for future in as_completed(futures):
                index = futures[future]
                error = future.exception()
                if error is None:
                    ordered[index] = future.result()
                elif isinstance(error, DuckDBPolarsError):
                    raise error
                else:
                    raise self._wrap(index, error) from error
        except BaseException:
            for future in futures:
                future.cancel()
            raise

        return ordered  # type: ignore[return-value]

    def _wrap(self, index: int, error: BaseException) -> InternalError:
        logger.debug(f"Work item {index} failed: {error!r}")
        return InternalError(
            f"Work item {index} failed: {error}",
            context={"item_index": index, "parallelism": self.parallelism},
        )
