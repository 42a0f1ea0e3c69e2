"""Classification client for a detection web service reached over HTTP."""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path

import requests
from loguru import logger
from urllib3.exceptions import ReadTimeoutError

from symbol_annotator.exceptions import (
    ClassificationCancelledError,
    ClassifierConnectionError,
    ClassifierHTTPStatusError,
    ClassifierTimeoutError,
    DecodeError,
    NormalizationError,
)
from symbol_annotator.inference.base import BaseClassificationClient

IMAGE_FIELD = "image"


def _is_read_timeout(exc: requests.ConnectionError) -> bool:
    """requests reports a read timeout while streaming as a ConnectionError."""
    causes = [*exc.args, exc.__cause__, exc.__context__]
    return any(isinstance(cause, ReadTimeoutError) for cause in causes)


class HttpClassificationClient(BaseClassificationClient):
    """Post the page image as a multipart upload and read back the answer.

    When a ``cancel_event`` is given, the request runs in a worker thread
    while the caller polls the event.  Setting it closes the session, which
    tears down the connection, and the call raises at once.  The body is
    streamed so that cancellation also applies between chunks.

    Args:
        url: Endpoint of the detection web service.
        connect_timeout: Seconds allowed to establish the connection.
        read_timeout: Seconds allowed between bytes of the response.
        session: Optional ``requests.Session`` to reuse connections.
        chunk_size: Bytes read per chunk of the streamed response.
        cancel_poll_interval: Seconds between checks of the cancel event
            while waiting for the response.
    """

    def __init__(
        self,
        url: str,
        connect_timeout: float = 10.0,
        read_timeout: float = 300.0,
        session: requests.Session | None = None,
        chunk_size: int = 64 * 1024,
        cancel_poll_interval: float = 0.05,
    ) -> None:
        self.url = url
        self.timeout = (connect_timeout, read_timeout)
        self.session = session if session is not None else requests.Session()
        self.chunk_size = chunk_size
        self.cancel_poll_interval = cancel_poll_interval

    def classify(
        self,
        image_path: Path,
        response_path: Path,
        cancel_event: threading.Event | None = None,
    ) -> str:
        self._check_cancelled(cancel_event)
        logger.info(f"Posting image {image_path} to {self.url}")
        start = time.monotonic()
        try:
            response = self._post(image_path, cancel_event)
            try:
                if not response.ok:
                    raise ClassifierHTTPStatusError(
                        response.status_code,
                        f"Classifier answered HTTP {response.status_code} "
                        f"{response.reason}",
                    )
                body = self._read_body(response, cancel_event)
            finally:
                response.close()
        except requests.Timeout as exc:
            raise ClassifierTimeoutError(
                f"Timed out waiting for classification response from {self.url}"
            ) from exc
        except requests.ConnectionError as exc:
            if _is_read_timeout(exc):
                raise ClassifierTimeoutError(
                    f"Timed out reading classification response from {self.url}"
                ) from exc
            raise ClassifierConnectionError(
                f"Failed to call classifier at {self.url}: {exc}"
            ) from exc
        except requests.RequestException as exc:
            raise ClassifierConnectionError(
                f"Failed to call classifier at {self.url}: {exc}"
            ) from exc
        except OSError as exc:
            # requests errors are OSErrors too, so this only sees file errors
            raise NormalizationError(f"Could not read {image_path}: {exc}") from exc
        logger.info(f"Duration= {time.monotonic() - start:.1f} seconds")

        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Response is not valid UTF-8: {exc}") from exc
        logger.debug(f"Answer= {text}")

        # Kept beside the uploaded image to ease later debugging
        try:
            response_path.write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.warning(f"Could not save response to {response_path}: {exc}")
        return text

    def _send(self, image_path: Path) -> requests.Response:
        with open(image_path, "rb") as f:
            files = {IMAGE_FIELD: (image_path.name, f, "image/png")}
            logger.info("Waiting for response...")
            return self.session.post(
                self.url, files=files, timeout=self.timeout, stream=True
            )

    def _post(
        self, image_path: Path, cancel_event: threading.Event | None
    ) -> requests.Response:
        if cancel_event is None:
            return self._send(image_path)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="classify")
        future = executor.submit(self._send, image_path)
        executor.shutdown(wait=False)
        while True:
            try:
                return future.result(timeout=self.cancel_poll_interval)
            except FutureTimeoutError:
                if cancel_event.is_set():
                    future.add_done_callback(_close_late_response)
                    self.session.close()
                    raise ClassificationCancelledError(
                        "Classification request cancelled while waiting for "
                        "the response"
                    ) from None

    def _read_body(
        self, response: requests.Response, cancel_event: threading.Event | None
    ) -> bytes:
        chunks: list[bytes] = []
        for chunk in response.iter_content(chunk_size=self.chunk_size):
            self._check_cancelled(cancel_event)
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _check_cancelled(cancel_event: threading.Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ClassificationCancelledError("Classification request cancelled")


def _close_late_response(future: Future[requests.Response]) -> None:
    """Release the response of a request that finished after cancellation."""
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()
