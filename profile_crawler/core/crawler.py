"""
Generation-by-generation BFS over the profile graph.

Starting from a seed list of profile handles, every generation fetches
each handle's full media feed with a bounded worker pool and queues the
people who liked or commented on those images for the next generation.
The crawl stops when the depth budget runs out or a generation discovers
nobody new.
"""

from typing import Callable, Iterable

import requests

from profile_crawler.config import BASE_URL, DEFAULT_DEPTH, DEFAULT_WORKERS
from profile_crawler.core.fetcher import PaginationFetcher
from profile_crawler.core.frontier import IdentifierSet, WorkList
from profile_crawler.core.pool import WorkerPool
from profile_crawler.core.storage import ProfileStore
from profile_crawler.models import CrawlReport, TerminationReason
from profile_crawler.session import build_session
from profile_crawler.utils.handles import normalise_handle
from profile_crawler.utils.log import log


class Crawler:
    """
    Depth-bounded, concurrency-limited crawler of the like/comment graph.

    Generations run strictly one after another; within a generation up to
    *workers* profiles are fetched at once.  *skip* is consulted for every
    newly seen handle before it joins a work list (e.g. "already on disk").
    """

    def __init__(
        self,
        seeds: Iterable[str],
        depth: int = DEFAULT_DEPTH,
        workers: int = DEFAULT_WORKERS,
        store: ProfileStore | None = None,
        skip: Callable[[str], bool] | None = None,
        session: requests.Session | None = None,
        base_url: str = BASE_URL,
        verify_ssl: bool = True,
        progress: bool = False,
    ) -> None:
        self.seeds = list(seeds)
        self.depth = depth
        self.workers = max(1, workers)
        self.store = store
        self.skip = skip
        self.progress = progress
        self.session = session or build_session(
            verify_ssl=verify_ssl, pool_size=max(self.workers, 10)
        )
        self.fetcher = PaginationFetcher(self.session, base_url)
        self.identifiers = IdentifierSet()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self) -> CrawlReport:
        report = CrawlReport()
        pool = WorkerPool(
            self.fetcher,
            self.identifiers,
            admit=self._admit,
            sink=self.store.submit if self.store is not None else None,
            progress=self.progress,
        )

        work_list = self.seed(self.seeds)
        remaining = self.depth
        log.info("Seeds            : %d profile(s)", len(work_list))
        log.info("Max depth        : %d", self.depth)
        log.info("Workers          : %d", self.workers)

        try:
            while True:
                if not work_list:
                    report.reason = TerminationReason.QUEUE_EMPTY
                    break
                log.info("[GEN] generation %d – %d profile(s), depth left %d",
                         len(report.generations), len(work_list), remaining)
                generation = pool.run_generation(work_list, self.workers, remaining)
                report.generations.append(generation)
                log.info(
                    "[GEN] generation %d done. ok=%d  err=%d  discovered=%d",
                    len(report.generations) - 1,
                    len(generation.succeeded),
                    len(generation.failed),
                    len(generation.discovered),
                )

                remaining -= 1
                if not generation.discovered:
                    report.reason = TerminationReason.QUEUE_EMPTY
                    break
                if remaining <= 0:
                    report.reason = TerminationReason.MAX_DEPTH
                    break
                work_list = WorkList(generation.discovered)
        finally:
            if self.store is not None:
                self.store.flush()

        outcomes = report.outcomes
        log.info(
            "Crawl complete. seen=%d  ok=%d  err=%d",
            len(self.identifiers),
            sum(1 for o in outcomes if o.ok),
            sum(1 for o in outcomes if not o.ok),
        )
        log.info("[DONE] Finished (%s)", report.reason.value)
        return report

    def seed(self, raw_handles: Iterable[str]) -> WorkList:
        """Build the first work list from *raw_handles*, dropping blanks,
        duplicates and skipped handles."""
        work_list = WorkList()
        for raw in raw_handles:
            handle = normalise_handle(raw)
            if not handle or not self.identifiers.mark_and_check(handle):
                continue
            if self._admit(handle):
                work_list.append(handle)
        return work_list

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _admit(self, handle: str) -> bool:
        if self.skip is not None and self.skip(handle):
            log.info("[SKIP] %s already crawled", handle)
            return False
        return True
