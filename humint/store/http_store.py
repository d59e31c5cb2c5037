"""
HTTP client for a remote content store.

Only transport failures are retried; the bundles are opaque here and no
cryptographic work happens on this path.
"""

from __future__ import annotations

import logging
import time

import requests
from pydantic import ValidationError

from humint.common.config import Config
from humint.common.exceptions import StoreError
from humint.common.models import PostBundle
from humint.store.persistence import validate_post_id

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NO_CONTENT = 204
HTTP_NOT_FOUND = 404
HTTP_SERVER_ERROR = 500

logger = logging.getLogger(__name__)


class HttpContentStore:
    """``PUT``/``GET {base_url}/posts/{post_id}`` with JSON bundles."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int | None = None,
        max_retries: int | None = None,
        backoff: float = 1.0,
    ):
        config = Config()
        base_url = base_url or config.STORE_URL
        if not base_url:
            msg = "No content store URL configured (set HUMINT_STORE_URL)"
            raise StoreError(msg)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else config.STORE_TIMEOUT
        self.max_retries = (
            max_retries if max_retries is not None else config.STORE_MAX_RETRIES
        )
        if self.max_retries < 1:
            msg = f"max_retries must be at least 1, got {self.max_retries}"
            raise StoreError(msg)
        self.backoff = backoff

    def _url(self, post_id: str) -> str:
        return f"{self.base_url}/posts/{validate_post_id(post_id)}"

    def _request(self, method: str, url: str, **kwargs: object) -> requests.Response:
        retry_count = 0
        backoff = self.backoff
        last_error = ""
        while retry_count < self.max_retries:
            try:
                r = requests.request(method, url, timeout=self.timeout, **kwargs)
            except requests.RequestException as err:
                last_error = str(err)
            else:
                if r.status_code < HTTP_SERVER_ERROR:
                    return r
                last_error = f"HTTP {r.status_code}"
            retry_count += 1
            logger.warning(
                "Content store %s %s failed (%s), attempt %d/%d",
                method,
                url,
                last_error,
                retry_count,
                self.max_retries,
            )
            if retry_count < self.max_retries:
                time.sleep(backoff)
                backoff *= 2
        msg = f"Content store unreachable after {self.max_retries} attempts: {last_error}"
        raise StoreError(msg)

    def put(self, post_id: str, bundle: PostBundle) -> None:
        r = self._request("PUT", self._url(post_id), json=bundle.model_dump())
        if r.status_code not in (HTTP_OK, HTTP_CREATED, HTTP_NO_CONTENT):
            msg = f"Content store rejected post {post_id}: HTTP {r.status_code}"
            raise StoreError(msg)

    def get(self, post_id: str) -> PostBundle | None:
        r = self._request("GET", self._url(post_id))
        if r.status_code == HTTP_NOT_FOUND:
            return None
        if r.status_code != HTTP_OK:
            msg = f"Content store returned HTTP {r.status_code} for post {post_id}"
            raise StoreError(msg)
        try:
            return PostBundle.model_validate(r.json())
        except (ValueError, ValidationError) as err:
            msg = f"Content store returned an invalid bundle for post {post_id}"
            raise StoreError(msg) from err
