#!/usr/bin/env python3
"""Golden path demo for AI Studio (drives a running server over HTTP)."""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

TERMINAL = {"succeeded", "failed", "canceled"}


def _env(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value


class HttpClient:
    def __init__(self, base_url: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers: dict[str, str] = {"Content-Type": "application/json"}

    def request_json(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        query: dict[str, Any] | None = None,
        timeout: float = 10.0,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        if query:
            url = f"{url}?{urlencode(query)}"

        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")

        req = Request(url, data=data, method=method)
        for key, value in self.headers.items():
            req.add_header(key, value)

        try:
            with urlopen(req, timeout=timeout) as response:
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            raise RuntimeError(f"{method} {url} failed: {exc.code} {exc.reason}: {detail}") from None

        if not raw:
            return {}
        return json.loads(raw.decode("utf-8"))


def follow(client: HttpClient, feature: str, poll_seconds: float, limit_seconds: float) -> dict[str, Any]:
    """Poll a feature's current task, printing progress until it is terminal."""
    deadline = time.monotonic() + limit_seconds
    last = None
    while True:
        task = client.request_json("GET", f"/v1/features/{feature}/tasks/current")
        line = f"  {int(task['progress'] * 100):3d}% - {task['status_message']}"
        if line != last:
            print(line)
            last = line
        if task["status"] in TERMINAL:
            return task
        if time.monotonic() > deadline:
            raise RuntimeError(f"{feature} task still {task['status']} after {limit_seconds}s")
        time.sleep(poll_seconds)


def main() -> int:
    base_url = _env("AISTUDIO_URL", "http://localhost:8080")
    query = _env("AISTUDIO_DEMO_QUERY", "cats")
    poll_seconds = float(_env("AISTUDIO_DEMO_POLL_SECONDS", "0.25"))

    client = HttpClient(base_url)

    print("Checking health...")
    health = client.request_json("GET", "/v1/health")
    if health.get("status") != "healthy":
        raise RuntimeError(f"Unexpected health response: {health}")

    print(f"Searching for {query!r}...")
    client.request_json("POST", "/v1/features/web_search/tasks", payload={"query": query})
    search = follow(client, "web_search", poll_seconds, 30)
    if search["status"] != "succeeded":
        raise RuntimeError(f"Search did not succeed: {search}")
    for result in search["result"]["results"]:
        print(f"  - {result['title']} <{result['url']}>")

    print("Generating a movie...")
    script = (
        "A lighthouse keeper finds a message in a bottle. It is addressed to him, "
        "dated fifty years in the future, and written in his own handwriting."
    )
    client.request_json(
        "POST",
        "/v1/features/script_to_movie/tasks",
        payload={"script": script, "style": "Animated"},
    )
    movie = follow(client, "script_to_movie", poll_seconds, 60)
    if movie["status"] != "succeeded":
        raise RuntimeError(f"Movie generation did not succeed: {movie}")
    print(f"  movie written to {movie['result']['file_path']}")

    print("Starting and canceling a download...")
    client.request_json(
        "POST",
        "/v1/features/youtube/tasks",
        payload={"url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ", "quality": "720p"},
    )
    canceled = client.request_json("POST", "/v1/features/youtube/tasks/current/cancel")
    if canceled.get("status") != "canceled":
        raise RuntimeError(f"Download was not canceled: {canceled}")

    usage = client.request_json("GET", "/v1/usage")
    print(f"Golden path complete: {usage['total_usage']} tasks started.")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        raise
