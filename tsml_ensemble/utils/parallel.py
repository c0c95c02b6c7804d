"""Execution of independent units of work (learner fits, scoring tasks)."""

from typing import Any, Callable, Iterable

from joblib import Parallel, delayed


def run_tasks(
    function: Callable[..., Any],
    tasks: Iterable[tuple],
    n_jobs: int = 1,
) -> list[Any]:
    """
    Apply function to each argument tuple, returning results in task order.

    Runs in-process when n_jobs == 1, otherwise through joblib workers.
    Any failing task aborts the whole call with that task's exception.
    """
    if n_jobs == 1:
        return [function(*args) for args in tasks]

    return Parallel(n_jobs=n_jobs)(delayed(function)(*args) for args in tasks)
