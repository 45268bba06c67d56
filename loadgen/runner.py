import asyncio
import time
from collections import Counter

import httpx

from hasher.work import compute_digest


async def run_hash_test(
    server_url: str,
    num_requests: int,
    concurrency: int,
    timeout: float,
    poll_interval: float = 0.5,
    job_wait: float = 30.0,
) -> tuple[list[float], list[float], int, int, Counter]:
    """Submit N passwords with bounded concurrency and poll each until hashed.

    Returns (accept_latencies_ms, completion_latencies_ms, error_count,
    digest_mismatches, error_details). Every returned digest is checked
    against a locally computed one.
    """
    semaphore = asyncio.Semaphore(concurrency)
    accept_latencies: list[float] = []
    completion_latencies: list[float] = []
    errors = 0
    mismatches = 0
    error_details: Counter = Counter()
    lock = asyncio.Lock()

    async def send_one(i: int, client: httpx.AsyncClient) -> None:
        nonlocal errors, mismatches
        password = f"loadgen-password-{i}"
        async with semaphore:
            start = time.monotonic()
            try:
                resp = await client.post(
                    f"{server_url}/hash", data={"password": password}, timeout=timeout
                )
            except httpx.TimeoutException:
                async with lock:
                    errors += 1
                    error_details["timeout"] += 1
                return
            except httpx.RequestError as e:
                async with lock:
                    errors += 1
                    error_details[f"exception: {type(e).__name__}"] += 1
                return

            elapsed = round((time.monotonic() - start) * 1000, 2)
            if resp.status_code != 202:
                async with lock:
                    errors += 1
                    error_details[f"{resp.status_code}: {_extract_error(resp)}"] += 1
                return
            async with lock:
                accept_latencies.append(elapsed)
            location = resp.headers["Location"]

        # Polling happens outside the semaphore so slow jobs don't starve submits
        deadline = start + job_wait
        while time.monotonic() < deadline:
            await asyncio.sleep(poll_interval)
            try:
                poll = await client.get(f"{server_url}{location}", timeout=timeout)
            except httpx.RequestError as e:
                async with lock:
                    errors += 1
                    error_details[f"poll exception: {type(e).__name__}"] += 1
                return
            if poll.status_code == 202:
                continue
            if poll.status_code == 200:
                done = round((time.monotonic() - start) * 1000, 2)
                async with lock:
                    completion_latencies.append(done)
                    if poll.text != compute_digest(password):
                        mismatches += 1
            else:
                async with lock:
                    errors += 1
                    error_details[f"poll {poll.status_code}: {_extract_error(poll)}"] += 1
            return

        async with lock:
            errors += 1
            error_details["job never completed"] += 1

    async with httpx.AsyncClient() as client:
        tasks = [send_one(i, client) for i in range(num_requests)]
        await asyncio.gather(*tasks)

    return accept_latencies, completion_latencies, errors, mismatches, error_details


async def fetch_stats(server_url: str, timeout: float) -> dict | None:
    async with httpx.AsyncClient() as client:
        try:
            resp = await client.get(f"{server_url}/stats", timeout=timeout)
        except httpx.RequestError:
            return None
    if resp.status_code != 200:
        return None
    return resp.json()


def _extract_error(resp: httpx.Response) -> str:
    """Extract a short error description from an HTTP response."""
    text = resp.text.strip()
    if text:
        return text[:80]
    return resp.reason_phrase or "unknown"
