"""
Entropy mixing for the "enhanced" generator.

Sources, hashed together with SHA-256 on every draw:
1. OS CSPRNG (16 fresh bytes, always present)
2. Wall clock and a high-resolution timer
3. Recent system samples (e.g. numbers fetched from random.org)
4. Recent user samples (pointer position / key timing sent by the browser)

External samples only add to the digest; with an empty pool the output is
still driven by the CSPRNG bytes.
"""
import hashlib
import logging
import math
import secrets
import threading
import time
from collections import deque
from typing import Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import ExternalEntropyUnavailable, InvalidRangeError

logger = logging.getLogger(__name__)

RANDOM_ORG_URL = "https://www.random.org/integers/"
RANDOM_ORG_QUOTA_URL = "https://www.random.org/quota/?format=plain"
DEFAULT_TIMEOUT = 5.0
DEFAULT_HEADERS = {
    "User-Agent": "LottoResearch/1.0",
    "Accept": "text/plain",
}

SYSTEM_POOL_SIZE = 100
USER_POOL_SIZE = 50
SYSTEM_MIX_COUNT = 10
USER_MIX_COUNT = 5


def _to_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, int):
        data = [data]
    return bytes(int(v) & 0xFF for v in data)


def _low_byte(value) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"entropy value must be finite, got {value}")
    return int(value) & 0xFF


class EntropyPool:
    """Bounded rings of system and user entropy plus the SHA-256 mixer.

    One instance lives for the whole process (see ``create_app``). Ring
    mutation and snapshots happen under a lock, so concurrent request
    handlers may feed and draw from it.
    """

    def __init__(self, system_size: int = SYSTEM_POOL_SIZE, user_size: int = USER_POOL_SIZE):
        self._system = deque(maxlen=system_size)
        self._user = deque(maxlen=user_size)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._system)

    @property
    def user_samples(self) -> int:
        with self._lock:
            return len(self._user)

    def add_system_sample(self, source: str, data) -> None:
        entry = {"source": source, "bytes": _to_bytes(data), "timestamp": time.time()}
        with self._lock:
            self._system.append(entry)

    def add_user_sample(self, x=None, y=None, timestamp=None, key_timing=None) -> bytes:
        """Keep the low byte of each provided field (the noisiest part)."""
        bits = []
        if x is not None:
            bits.append(_low_byte(x))
        if y is not None:
            bits.append(_low_byte(y))
        if timestamp:
            bits.append(_low_byte(timestamp))
        if key_timing:
            bits.append(_low_byte(key_timing))
        sample = bytes(bits)
        with self._lock:
            self._user.append(sample)
        return sample

    def mixed_digest(self) -> bytes:
        with self._lock:
            system = [e["bytes"] for e in list(self._system)[-SYSTEM_MIX_COUNT:]]
            user = list(self._user)[-USER_MIX_COUNT:]

        parts = [
            secrets.token_bytes(16),
            int(time.time() * 1000).to_bytes(8, "big", signed=True),
            (time.perf_counter_ns() & 0xFFFFFFFF).to_bytes(4, "big"),
        ]
        parts.extend(system)
        parts.extend(user)
        return hashlib.sha256(b"".join(parts)).digest()

    def mixed_int(self, min_value: int, max_value: int) -> int:
        """Integer in ``[min_value, max_value]`` from the digest's first 4 bytes.

        The modulo reduction is slightly biased for ranges that do not divide
        2**32. Kept as is: this path sits under optional external randomness.
        """
        value = int.from_bytes(self.mixed_digest()[:4], "big")
        return min_value + value % (max_value - min_value + 1)


class RandomOrgClient:
    """Plain-text client for the random.org integer generator."""

    def __init__(self, url: str = RANDOM_ORG_URL, quota_url: str = RANDOM_ORG_QUOTA_URL,
                 timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.url = url
        self.quota_url = quota_url
        self.timeout = timeout
        self.session = session or self._create_session()

    @staticmethod
    def _create_session() -> requests.Session:
        session = requests.Session()
        session.headers.update(DEFAULT_HEADERS)

        # 한 번만 재시도: 생성 요청이 timeout 안에 끝나야 함
        retry_strategy = Retry(
            total=1,
            backoff_factor=0.2,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def fetch_integers(self, count: int, min_value: int, max_value: int) -> List[int]:
        params = {
            "num": count, "min": min_value, "max": max_value,
            "col": 1, "base": 10, "format": "plain", "rnd": "new",
        }
        try:
            resp = self.session.get(self.url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            numbers = [int(line) for line in resp.text.split()]
        except (requests.exceptions.RequestException, ValueError) as exc:
            raise ExternalEntropyUnavailable(f"random.org failed: {type(exc).__name__}: {exc}") from exc

        logger.info("fetched %s numbers from random.org", len(numbers))
        return numbers

    def check_quota(self) -> int:
        """Remaining bit quota, or -1 when it cannot be read."""
        try:
            resp = self.session.get(self.quota_url, timeout=self.timeout)
            resp.raise_for_status()
            return int(resp.text.strip())
        except (requests.exceptions.RequestException, ValueError) as exc:
            logger.warning("random.org quota check failed: %s", exc)
            return -1


def _external_numbers(pool: EntropyPool, client: Optional[RandomOrgClient],
                      count: int, min_value: int, max_value: int) -> List[int]:
    client = client or RandomOrgClient()
    try:
        numbers = client.fetch_integers(count + 5, min_value, max_value)
    except ExternalEntropyUnavailable as exc:
        logger.warning("external entropy unavailable, using local mixer only: %s", exc)
        return []
    if numbers:
        pool.add_system_sample("random.org", numbers)
    return numbers


def generate_enhanced(pool: EntropyPool, min_value: int, max_value: int, count: int,
                      use_external: bool = True, client: Optional[RandomOrgClient] = None,
                      sort: bool = True) -> List[int]:
    """``count`` distinct numbers seeded from random.org and topped up by the mixer.

    With ``sort=False`` numbers keep the order in which they were first seen.
    """
    if max_value - min_value + 1 < count:
        raise InvalidRangeError(min_value, max_value, count)

    results: List[int] = []
    picked = set()
    if use_external:
        for num in _external_numbers(pool, client, count, min_value, max_value):
            if len(results) < count and min_value <= num <= max_value and num not in picked:
                picked.add(num)
                results.append(num)

    while len(results) < count:
        num = pool.mixed_int(min_value, max_value)
        if num not in picked:
            picked.add(num)
            results.append(num)

    return sorted(results) if sort else results


def generate_enhanced_unsorted(pool: EntropyPool, min_value: int, max_value: int, count: int,
                               use_external: bool = True,
                               client: Optional[RandomOrgClient] = None) -> List[int]:
    return generate_enhanced(pool, min_value, max_value, count, use_external, client, sort=False)


def record_user_entropy(pool: EntropyPool, sample: Dict) -> bytes:
    """Accept both ``x/y/key_timing`` and the browser hook's ``mouseX/mouseY/keyTiming``."""
    return pool.add_user_sample(
        x=sample.get("x", sample.get("mouseX")),
        y=sample.get("y", sample.get("mouseY")),
        timestamp=sample.get("timestamp"),
        key_timing=sample.get("key_timing", sample.get("keyTiming")),
    )


def record_system_entropy(pool: EntropyPool, tag: str, data) -> None:
    pool.add_system_sample(tag, data)
