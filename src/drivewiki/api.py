"""Google Drive API client with optional caching."""

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import requests

from drivewiki.config import API_CACHE_PREFIX, API_TOKEN_FILES, DRIVE_API_URL
from drivewiki.errors import NotFoundError, PermissionDeniedError, StoreError


class DriveApi:
    """Encapsulated Drive v3 API with caching."""

    def __init__(self, *, from_cache: bool = False) -> None:
        self.from_cache = from_cache
        self.sess = requests.Session()
        self.logger = logging.getLogger("api")

        api_token_name: str | None = None
        for token_path in API_TOKEN_FILES:
            try:
                self.api_token = token_path.read_text(encoding="utf-8").strip()
                api_token_name = str(token_path)
                break
            except FileNotFoundError:
                pass
        else:
            msg = f"Cannot find drive token file, was looking at {API_TOKEN_FILES!r}"
            raise RuntimeError(msg)

        self.sess.headers["Authorization"] = f"Bearer {self.api_token}"
        self.api_cache_prefix: str | None = API_CACHE_PREFIX

        if not self.from_cache:
            self.api_cache_prefix = None

        self.logger.debug(
            f"API ready: token from {api_token_name!r}, "
            f"from_cache {self.from_cache!r}, api_cache_prefix {self.api_cache_prefix!r}"
        )

        if self.api_cache_prefix:
            Path(self.api_cache_prefix).parent.mkdir(parents=True, exist_ok=True)

    def _cache_name(self, path: str, args: dict[str, Any]) -> str | None:
        if not self.api_cache_prefix:
            return None
        name_last = path
        if args:
            params_str = json.dumps(args, sort_keys=True, separators=(",", ":"))
            if len(params_str) > 64:
                params_str = hashlib.sha1(params_str.encode("utf-8")).hexdigest()
            name_last += "--" + params_str
        return self.api_cache_prefix + name_last.replace("/", "--")

    def _get(self, path: str, args: dict[str, Any]) -> requests.Response:
        self.logger.debug(f"Making request: {path!r} {repr(args)[:32]}")
        try:
            r = self.sess.get(f"{DRIVE_API_URL}/{path}", params=args)
        except requests.RequestException as e:
            msg = f"Request failed: ({path!r}, {args!r}) -> {e}"
            raise StoreError(msg) from e
        if r.status_code == 404:
            msg = f"Not found: ({path!r}, {args!r})"
            raise NotFoundError(msg)
        if r.status_code == 403:
            msg = f"Permission denied: ({path!r}, {args!r})"
            raise PermissionDeniedError(msg)
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            msg = f"API call failed: ({path!r}, {args!r}) -> {e}"
            raise StoreError(msg) from e
        return r

    def call(self, path: str, args: dict[str, Any]) -> dict[str, Any]:
        """Invoke a Drive API endpoint, return json."""
        log_name = self._cache_name(path, args)
        if self.from_cache and log_name and Path(log_name).exists():
            self.logger.debug(f"Filled from cache: {log_name!r}")
            with open(log_name, encoding="utf-8") as f:
                return json.load(f)  # type: ignore[no-any-return]

        r = self._get(path, args)
        rv: dict[str, Any] = r.json()
        if log_name:
            with open(log_name, "w", encoding="utf-8") as f:
                f.write(r.text)

        return rv

    def call_text(self, path: str, args: dict[str, Any]) -> str:
        """Invoke a Drive API endpoint returning a non-JSON body, e.g. an export."""
        log_name = self._cache_name(path, args)
        if self.from_cache and log_name and Path(log_name).exists():
            self.logger.debug(f"Filled from cache: {log_name!r}")
            return Path(log_name).read_text(encoding="utf-8")

        r = self._get(path, args)
        if log_name:
            Path(log_name).write_text(r.text, encoding="utf-8")
        return r.text
