"""
Network download to temporary files.

This module provides downloading of release archives with:
- HTTP/HTTPS downloads with TLS verification
- Uniquely named temporary destination files
- Progress reporting (bytes, percentage, speed, ETA)
- Timeout handling

Failures are returned as ``Failed`` results tagged ``DOWNLOAD_FAILURE``;
nothing is raised and nothing is retried.
"""

import logging
import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlparse

import requests
from requests.exceptions import RequestException

from kubetreekit.core.result import ErrorKind, Result, Succeeded, fail

logger = logging.getLogger(__name__)

TEMP_PREFIX = "kubetreekit-"
_KNOWN_SUFFIXES = (".tar.gz", ".tgz", ".tar.xz", ".tar.bz2", ".tar", ".zip")


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second
    eta_seconds: float  # estimated time remaining

    def __str__(self) -> str:
        """Format progress for display."""
        return format_progress(self)


def temp_suffix(url: str) -> str:
    """
    Pick a temporary file suffix matching the archive in ``url``.

    Example:
        >>> temp_suffix("https://example.com/x_linux_amd64.tar.gz")
        '.tar.gz'
    """
    name = os.path.basename(urlparse(url).path).lower()
    for suffix in _KNOWN_SUFFIXES:
        if name.endswith(suffix):
            return suffix
    return ".download"


class Downloader:
    """
    Fetches URLs into uniquely named temporary files.

    Attributes:
        timeout: Request timeout in seconds
        temp_dir: Directory for temporary files (None: system default)
        progress_callback: Optional callback for progress updates
    """

    def __init__(
        self,
        timeout: int = 60,
        temp_dir: Optional[Path] = None,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.temp_dir = temp_dir
        self.progress_callback = progress_callback
        self.session = session or requests.Session()

    def to_temp_file(self, url: str) -> Result[str]:
        """
        Download ``url`` to a new temporary file.

        Args:
            url: URL to download from

        Returns:
            Succeeded with the temporary file path, or a DOWNLOAD_FAILURE
            carrying the underlying error message. A partial file is removed.

        Example:
            >>> result = Downloader().to_temp_file("https://example.com/a.tar.gz")
            >>> if result.succeeded:
            ...     print(result.value)
        """
        if not url:
            return fail(ErrorKind.DOWNLOAD_FAILURE, "URL cannot be empty")

        try:
            fd, temp_path = tempfile.mkstemp(
                prefix=TEMP_PREFIX,
                suffix=temp_suffix(url),
                dir=str(self.temp_dir) if self.temp_dir else None,
            )
        except OSError as e:
            return fail(
                ErrorKind.DOWNLOAD_FAILURE, f"Cannot create temporary file: {e}"
            )

        logger.info(f"Downloading from {url}")
        try:
            with os.fdopen(fd, "wb") as f:
                self._stream_to(url, f)
        except (RequestException, OSError) as e:
            logger.error(f"Error during download: {e}")
            Path(temp_path).unlink(missing_ok=True)
            return fail(ErrorKind.DOWNLOAD_FAILURE, str(e))

        logger.info(f"Download complete: {temp_path}")
        return Succeeded(temp_path)

    def _stream_to(self, url: str, f) -> None:
        response = self.session.get(
            url, stream=True, timeout=self.timeout, allow_redirects=True
        )
        with response:
            response.raise_for_status()

            content_length = response.headers.get("content-length")
            total_size = int(content_length) if content_length else 0

            downloaded = 0
            start_time = time.time()
            last_progress_time = start_time

            for chunk in response.iter_content(chunk_size=8192):
                if not chunk:
                    continue
                f.write(chunk)
                downloaded += len(chunk)

                # Report progress at most twice per second
                current_time = time.time()
                if self.progress_callback and (
                    current_time - last_progress_time >= 0.5
                    or downloaded == total_size
                ):
                    elapsed = current_time - start_time
                    speed = downloaded / elapsed if elapsed > 0 else 0
                    remaining = total_size - downloaded if total_size > 0 else 0
                    self.progress_callback(
                        DownloadProgress(
                            bytes_downloaded=downloaded,
                            total_bytes=total_size if total_size > 0 else downloaded,
                            percentage=(downloaded / total_size * 100)
                            if total_size > 0
                            else 0,
                            speed_bps=speed,
                            eta_seconds=remaining / speed if speed > 0 else 0,
                        )
                    )
                    last_progress_time = current_time


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576, 50)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s ETA: 50s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.total_bytes > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s "
            f"ETA: {progress.eta_seconds:.0f}s"
        )
    else:
        return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"


__all__ = ["Downloader", "DownloadProgress", "format_progress", "temp_suffix"]
