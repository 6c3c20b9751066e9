"""
Bounded worker pool that processes one generation of identifiers.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable

from tqdm import tqdm

from profile_crawler.core.expander import expand
from profile_crawler.core.fetcher import PaginationFetcher
from profile_crawler.core.frontier import IdentifierSet, WorkList
from profile_crawler.errors import CrawlError
from profile_crawler.models import CrawlOutcome, FetchResult, GenerationResult
from profile_crawler.utils.log import log

Sink = Callable[[str, FetchResult], object]


class WorkerPool:
    """
    Fetch and expand every identifier of a work list with at most
    *concurrency* of them in flight.

    A failing identifier is recorded as a failed :class:`CrawlOutcome`;
    it never cancels its siblings, and :meth:`run_generation` returns only
    once every identifier has reached an outcome.
    """

    def __init__(
        self,
        fetcher: PaginationFetcher,
        identifiers: IdentifierSet,
        admit: Callable[[str], bool] | None = None,
        sink: Sink | None = None,
        progress: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.identifiers = identifiers
        self.admit = admit
        self.sink = sink
        self.progress = progress

    def run_generation(
        self,
        work_list: Iterable[str],
        concurrency: int,
        remaining_depth: int,
    ) -> GenerationResult:
        handles = list(work_list)
        result = GenerationResult()
        if not handles:
            return result

        next_list = WorkList()
        max_workers = max(1, min(concurrency, len(handles)))
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="crawl") as executor, tqdm(
            total=len(handles), desc="Crawling", unit="profile",
            dynamic_ncols=True, disable=not self.progress,
        ) as bar:
            future_map = {
                executor.submit(self._process, handle, remaining_depth, next_list): handle
                for handle in handles
            }
            for future in as_completed(future_map):
                handle = future_map[future]
                try:
                    outcome = future.result()
                except Exception as exc:
                    log.exception("[ERR] unexpected failure while crawling %s", handle)
                    outcome = CrawlOutcome(handle=handle, ok=False, error=str(exc))
                result.outcomes.append(outcome)
                bar.update(1)
                bar.set_postfix(queued=len(next_list), err=len(result.failed))

        result.discovered = next_list.snapshot()
        return result

    def _process(self, handle: str, remaining_depth: int, next_list: WorkList) -> CrawlOutcome:
        try:
            fetched = self.fetcher.fetch(handle)
        except CrawlError as exc:
            log.warning("[ERR] error during %s crawl: %s", handle, exc)
            return CrawlOutcome(handle=handle, ok=False, error=str(exc))

        admitted = 0
        for found in sorted(expand(fetched, remaining_depth, self.identifiers)):
            if self.admit is None or self.admit(found):
                next_list.append(found)
                admitted += 1
        if admitted:
            log.debug("  [QUEUE] +%d from %s", admitted, handle)

        if self.sink is not None:
            self.sink(handle, fetched)

        log.info("[OK] %s – %d images in %d page(s), +%d queued",
                 handle, len(fetched.items), fetched.pages, admitted)
        return CrawlOutcome(
            handle=handle, ok=True, items=len(fetched.items), discovered=admitted
        )
