"""Minimal Gerrit REST client: post one review on a change revision."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Callable, Optional
from urllib import error, parse, request

from pkg.lintreview import FileComment

# Gerrit starts JSON responses with a ")]}'" line to defeat XSSI.
_XSSI_PREFIX = ")]}"

Opener = Callable[..., object]


class GerritError(Exception):
    """Gerrit rejected the request or could not be reached."""


def review_input(message: str, comments: dict[str, list[FileComment]]) -> dict[str, object]:
    """Build a Gerrit ReviewInput payload."""
    return {
        "message": message,
        "comments": {
            path: [{"line": c.line, "message": c.message} for c in items]
            for path, items in comments.items()
        },
    }


def _decode_response(body: bytes) -> dict:
    text = body.decode("utf-8", errors="replace")
    if text.startswith(_XSSI_PREFIX):
        text = text.split("\n", 1)[1] if "\n" in text else ""
    text = text.strip()
    if not text:
        return {}
    data = json.loads(text)
    return data if isinstance(data, dict) else {}


@dataclass(frozen=True)
class GerritClient:
    base_url: str
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = 30.0

    @property
    def authenticated(self) -> bool:
        return bool(self.username and self.password)

    def review_url(self, change_id: str, revision: str) -> str:
        # Authenticated REST endpoints live under /a/.
        prefix = "/a" if self.authenticated else ""
        return (
            f"{self.base_url.rstrip('/')}{prefix}/changes/{parse.quote(change_id, safe='~')}"
            f"/revisions/{parse.quote(revision, safe='')}/review"
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json; charset=UTF-8"}
        if self.authenticated:
            token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
            headers["Authorization"] = f"Basic {token}"
        return headers

    def set_review(
        self,
        change_id: str,
        revision: str,
        review: dict[str, object],
        *,
        urlopen: Optional[Opener] = None,
    ) -> dict:
        req = request.Request(
            self.review_url(change_id, revision),
            data=json.dumps(review).encode(),
            method="POST",
            headers=self._headers(),
        )
        opener = urlopen or request.urlopen
        try:
            with opener(req, timeout=self.timeout) as resp:
                body = resp.read()
        except error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace").strip()
            raise GerritError(f"gerrit returned HTTP {exc.code}: {detail or exc.reason}") from exc
        except error.URLError as exc:
            raise GerritError(f"unable to reach gerrit: {exc.reason}") from exc

        try:
            return _decode_response(body)
        except json.JSONDecodeError as exc:
            raise GerritError(f"invalid JSON from gerrit: {exc}") from exc
