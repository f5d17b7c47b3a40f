from __future__ import annotations

import asyncio

import httpx

from stats_monitor.errors import FailureKind, PollError


def _describe(exc: BaseException) -> str:
    msg = str(exc).strip()
    return f"{type(exc).__name__}: {msg}" if msg else type(exc).__name__


async def _get_body(client: httpx.AsyncClient, url: str, timeout: float) -> bytes:
    try:
        async with client.stream("GET", url, timeout=timeout, follow_redirects=True) as resp:
            # Drain before looking at the status so the connection can be reused.
            try:
                body = await resp.aread()
            except httpx.TimeoutException as e:
                raise PollError(FailureKind.TRANSPORT, _describe(e)) from e
            except httpx.RequestError as e:
                raise PollError(FailureKind.READ, _describe(e)) from e

            if resp.status_code != httpx.codes.OK:
                raise PollError(
                    FailureKind.PROTOCOL,
                    f"unexpected status: {resp.status_code} {resp.reason_phrase}".rstrip(),
                )
            return body
    except httpx.RequestError as e:
        raise PollError(FailureKind.TRANSPORT, _describe(e)) from e


async def fetch_stats(client: httpx.AsyncClient, url: str, *, timeout: float) -> bytes:
    """GET ``url`` and return the raw body of a 200 response.

    ``timeout`` bounds the whole request (connect, headers and body), not
    just each socket operation.
    """
    try:
        return await asyncio.wait_for(_get_body(client, url, timeout), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise PollError(FailureKind.TRANSPORT, f"request exceeded {timeout:g}s") from e
