"""
Profile persistence – JSON metadata, image lists and image downloads.

Layout per crawled profile::

    <output>/<handle>/profile.json
    <output>/<handle>/images.json
    <output>/<handle>/<image id>.jpg
"""

import json
import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any, Iterator

import requests

from profile_crawler.config import (
    IMAGE_DOWNLOAD_WORKERS,
    IMAGE_SUFFIX,
    IMAGES_FILENAME,
    PROFILE_FILENAME,
    SAVE_WORKERS,
    STREAM_CHUNK,
)
from profile_crawler.errors import TransportError
from profile_crawler.models import FetchResult, Item
from profile_crawler.session import stream_get

log = logging.getLogger("profile-crawler")


def write_json(local_path: Path, data: Any) -> None:
    """Write *data* as indented UTF-8 JSON, creating parent directories."""
    local_path.parent.mkdir(parents=True, exist_ok=True)
    local_path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
    )
    log.debug("Saved → %s", local_path)


def stream_to_file(local_path: Path, chunks: Iterator[bytes]) -> int:
    """Write streaming *chunks* to *local_path*.

    Returns the total number of bytes written.  Creates parent
    directories as needed.
    """
    local_path.parent.mkdir(parents=True, exist_ok=True)
    total = 0
    with local_path.open("wb") as fh:
        for chunk in chunks:
            if chunk:
                fh.write(chunk)
                total += len(chunk)
    log.debug("Streamed → %s (%d bytes)", local_path, total)
    return total


def _safe_name(name: str) -> str:
    """Return *name* as a single path component or raise ``ValueError``."""
    clean = Path(name).name
    if clean != name or clean in ("", ".", ".."):
        raise ValueError(f"unsafe path component: {name!r}")
    return clean


class ProfileStore:
    """
    Persistence sink for crawled profiles.

    :meth:`submit` hands a result to a background executor and returns at
    once so crawl workers never wait on disk or image downloads;
    :meth:`flush` blocks until everything submitted so far is written.
    """

    def __init__(
        self,
        output_dir: Path,
        session: requests.Session,
        download_images: bool = True,
        workers: int = SAVE_WORKERS,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.session = session
        self.download_images = download_images
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="save")
        self._pending: list[Future] = []

    def __enter__(self) -> "ProfileStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def profile_dir(self, handle: str) -> Path:
        return self.output_dir / _safe_name(handle)

    def already_crawled(self, handle: str) -> bool:
        """True when an output directory for *handle* already exists."""
        try:
            return self.profile_dir(handle).exists()
        except ValueError:
            return False

    def submit(self, handle: str, result: FetchResult) -> Future:
        future = self._executor.submit(self._save_logged, handle, result)
        self._pending.append(future)
        return future

    def flush(self) -> None:
        pending, self._pending = self._pending, []
        wait(pending)

    def close(self) -> None:
        self.flush()
        self._executor.shutdown(wait=True)

    def save(self, handle: str, result: FetchResult) -> int:
        """Write everything for one profile; return the number of images
        downloaded."""
        dirname = self.profile_dir(handle)
        dirname.mkdir(parents=True, exist_ok=True)
        write_json(dirname / PROFILE_FILENAME, result.profile)
        saved = self.save_images(dirname, result.items) if self.download_images else 0
        write_json(dirname / IMAGES_FILENAME, [item.to_dict() for item in result.items])
        return saved

    def save_images(self, dirname: Path, items: list[Item]) -> int:
        """Download *items* into *dirname*, at most
        ``IMAGE_DOWNLOAD_WORKERS`` at a time.  Failed downloads are logged
        and skipped."""
        if not items:
            return 0
        with ThreadPoolExecutor(
            max_workers=IMAGE_DOWNLOAD_WORKERS, thread_name_prefix="image"
        ) as executor:
            results = list(executor.map(lambda item: self._download(dirname, item), items))
        return sum(results)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _download(self, dirname: Path, item: Item) -> bool:
        try:
            local = dirname / (_safe_name(item.id) + IMAGE_SUFFIX)
            resp = stream_get(self.session, item.src)
        except (TransportError, ValueError) as exc:
            log.warning("  [ERR] image %s not saved: %s", item.id, exc)
            return False
        try:
            with resp:
                stream_to_file(local, resp.iter_content(chunk_size=STREAM_CHUNK))
        except (OSError, requests.RequestException) as exc:
            # A truncated image must not look like a finished download.
            local.unlink(missing_ok=True)
            log.warning("  [ERR] image %s not saved: %s", item.id, exc)
            return False
        return True

    def _save_logged(self, handle: str, result: FetchResult) -> None:
        try:
            saved = self.save(handle, result)
        except (OSError, ValueError) as exc:
            log.error("[ERR] could not save %s: %s", handle, exc)
            return
        log.info("  [SAVE] %s → %s (%d/%d images)",
                 handle, self.profile_dir(handle), saved, len(result.items))
