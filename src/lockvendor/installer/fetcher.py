"""
Archive fetcher.

Downloads a package's distribution archive with a single HTTP GET and
persists the response body to a local file.
"""

import logging
import pathlib
from typing import Optional, Union

import requests

from lockvendor.lock_models import Package
from lockvendor.lockvendor_exceptions import UnexpectedStatusError
from lockvendor.lockvendor_logger import LockvendorLogger


class ArchiveFetcher:
    """
    Fetches distribution archives over HTTP.

    The session is injected so that callers (and tests) control the transport;
    no retries are made and no timeout is applied unless one is configured.
    """

    CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        logger: LockvendorLogger,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            logger: Logger for download events
            session: HTTP session to issue requests with, a new one if omitted
            timeout: Request timeout in seconds, None waits indefinitely
        """
        self.logger = logger
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, package: Package, target_path: Union[str, pathlib.Path]) -> pathlib.Path:
        """
        Download the package's archive to ``target_path``.

        The file is created or truncated. If writing fails partway the partial
        file is left behind.

        Args:
            package: Package whose ``dist.url`` is downloaded
            target_path: Local file to write the response body to

        Returns:
            The path written

        Raises:
            UnexpectedStatusError: If the server answers with anything but 200
            requests.RequestException: On transport failures
            OSError: If the target file cannot be written
        """
        url = package.dist.url
        target = pathlib.Path(target_path)

        self.logger.log(
            "Downloading",
            logging.INFO,
            **{"dist.url": url, "name": package.name, "version": package.version},
        )

        response = self.session.get(url, stream=True, timeout=self.timeout)
        try:
            if response.status_code != 200:
                raise UnexpectedStatusError(url, response.status_code)

            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as f:
                for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        finally:
            response.close()

        return target
