# src/sra2otu/utils/pool.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List

from sra2otu.utils.logger import get_logger

LOG = get_logger("pool")


@dataclass
class PoolReport:
    succeeded: List[str] = field(default_factory=list)
    failed: Dict[str, BaseException] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)


def run_bounded(
    keys: Iterable[str],
    job: Callable[[str], None],
    *,
    max_workers: int,
) -> PoolReport:
    """
    Run job(key) for every key on a fixed-size thread pool.

    At most max_workers jobs are in flight. Every job runs to completion;
    exceptions are collected per key rather than cancelling the others.
    """
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1")

    keys = list(keys)
    report = PoolReport()
    if not keys:
        return report

    workers = min(max_workers, len(keys))
    LOG.debug("Starting pool: %d job(s), %d worker(s)", len(keys), workers)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="fetch") as ex:
        futures = {ex.submit(job, k): k for k in keys}
        for fut in as_completed(futures):
            key = futures[fut]
            exc = fut.exception()
            if exc is None:
                report.succeeded.append(key)
                LOG.debug("[%d/%d] %s done", report.total, len(keys), key)
            else:
                report.failed[key] = exc
                LOG.error("[%d/%d] %s failed: %s", report.total, len(keys), key, exc)

    # completion order is arbitrary; report in submission order
    order = {k: i for i, k in enumerate(keys)}
    report.succeeded.sort(key=order.__getitem__)
    report.failed = dict(sorted(report.failed.items(), key=lambda kv: order[kv[0]]))
    return report
