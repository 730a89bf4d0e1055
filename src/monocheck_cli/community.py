import json
import logging
import time
from pathlib import Path
from typing import List

import requests
from pydantic import TypeAdapter, ValidationError

from .config import DEFAULT_COMMUNITY_URL
from .models import CommunityRuleModel

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path.home() / ".monocheck" / "cache"
CACHE_FILE_NAME = "special-cases.json"
CACHE_TTL_SECONDS = 24 * 60 * 60
REQUEST_TIMEOUT = 5.0

_rules_adapter = TypeAdapter(List[CommunityRuleModel])


def _is_fresh(cache_path: Path, ttl: float) -> bool:
    try:
        return time.time() - cache_path.stat().st_mtime < ttl
    except OSError:
        return False


def _download(url: str, timeout: float):
    """GET a JSON document, giving up once `timeout` seconds have passed in total.

    The requests timeout applies to each socket operation, so a server that
    trickles bytes could otherwise hold the scan far longer than `timeout`.
    """
    deadline = time.monotonic() + timeout
    with requests.get(url, timeout=timeout, stream=True) as response:
        response.raise_for_status()
        body = bytearray()
        for chunk in response.iter_content(chunk_size=8192):
            if time.monotonic() > deadline:
                raise requests.Timeout(f"Fetching {url} took longer than {timeout}s")
            body.extend(chunk)
    return json.loads(bytes(body))


def parse_community_rules(payload) -> List[CommunityRuleModel]:
    return _rules_adapter.validate_python(payload)


def fetch_community_rules(
    url: str = DEFAULT_COMMUNITY_URL,
    timeout: float = REQUEST_TIMEOUT,
    cache_dir: Path | None = DEFAULT_CACHE_DIR,
    ttl: float = CACHE_TTL_SECONDS,
) -> List[CommunityRuleModel]:
    """Fetch the shared special-cases table.

    A fresh cached copy is used when present. Any network or parse failure
    is logged as a warning and gives an empty list, so a scan never fails
    because the rule feed is unreachable.
    """
    cache_path = cache_dir / CACHE_FILE_NAME if cache_dir is not None else None

    if cache_path is not None and _is_fresh(cache_path, ttl):
        try:
            rules = parse_community_rules(json.loads(cache_path.read_text(encoding="utf-8")))
            logger.debug("Loaded %d community rules from cache %s", len(rules), cache_path)
            return rules
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable community rule cache %s: %s", cache_path, e)

    try:
        payload = _download(url, timeout)
        rules = parse_community_rules(payload)
    except (requests.RequestException, ValueError, ValidationError) as e:
        logger.warning("Could not fetch community rules from %s: %s", url, e)
        return []

    if cache_path is not None:
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            cache_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write community rule cache %s: %s", cache_path, e)

    logger.info("Fetched %d community rules from %s", len(rules), url)
    return rules
