"""Parallel processing of independent chromosomes with joblib."""

import logging
import os
from typing import Any, Callable, List

from joblib import Parallel, delayed
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .utils.logging import console

logger = logging.getLogger(__name__)


class ParallelProcessor:
    """Maps a function over work items with joblib, optionally showing progress."""

    def __init__(self, n_jobs: int = 1, backend: str = "threading", verbose: int = 0):
        """
        Initialize parallel processor.

        Args:
            n_jobs: Number of parallel jobs (-1 for all CPUs)
            backend: joblib backend ('threading', 'loky', 'multiprocessing', 'sequential')
            verbose: joblib verbosity level
        """
        self.n_jobs = n_jobs if n_jobs > 0 else os.cpu_count() or 1
        self.backend = backend
        self.verbose = verbose

    def map(
        self,
        func: Callable,
        items: List[Any],
        description: str = "Processing",
        show_progress: bool = True,
    ) -> List[Any]:
        """
        Map function over items in parallel.

        Results are returned in the order of `items`.
        """
        if not items:
            return []

        parallel = Parallel(
            n_jobs=min(self.n_jobs, len(items)),
            backend=self.backend,
            verbose=self.verbose,
            return_as="generator",
        )
        jobs = (delayed(func)(item) for item in items)

        if not show_progress:
            return list(parallel(jobs))

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task(f"[cyan]{description}...", total=len(items))
            results = []
            for result in parallel(jobs):
                results.append(result)
                progress.update(task, advance=1)
            return results

    def starmap(
        self,
        func: Callable,
        items: List[tuple],
        description: str = "Processing",
        show_progress: bool = True,
    ) -> List[Any]:
        """Like `map`, unpacking each item as positional arguments."""
        return self.map(_Star(func), items, description, show_progress)


class _Star:
    """Picklable wrapper that unpacks an argument tuple."""

    def __init__(self, func: Callable):
        self.func = func

    def __call__(self, args: tuple) -> Any:
        return self.func(*args)
