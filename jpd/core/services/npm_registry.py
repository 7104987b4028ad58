"""
npm registry search — feeds ``install --search``.

Queries the public search endpoint and returns the hits as plain
models; choosing among them is the CLI's job.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from pydantic import BaseModel

from jpd import __version__
from jpd.core.errors import ExecutionError

logger = logging.getLogger(__name__)

REGISTRY_SEARCH_URL = "https://registry.npmjs.org/-/v1/search"
DEFAULT_RESULT_SIZE = 20


class PackageInfo(BaseModel):
    """One search hit."""

    name: str
    version: str = ""
    description: str = ""

    @property
    def label(self) -> str:
        text = f"{self.name}@{self.version}" if self.version else self.name
        if self.description:
            text += f"  {self.description[:60]}"
        return text


def search_packages(
    query: str,
    size: int = DEFAULT_RESULT_SIZE,
    timeout: int = 10,
) -> list[PackageInfo]:
    """Search the npm registry.

    Raises:
        ExecutionError: On network failure or an unexpected response.
    """
    params = urllib.parse.urlencode({"text": query, "size": size})
    req = urllib.request.Request(
        f"{REGISTRY_SEARCH_URL}?{params}",
        headers={
            "Accept": "application/json",
            "User-Agent": f"jpd/{__version__}",
        },
    )
    logger.debug("Searching npm registry for %r", query)

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            payload = json.loads(resp.read())
    except urllib.error.HTTPError as e:
        raise ExecutionError(f"npm registry search failed with http {e.code}") from e
    except (urllib.error.URLError, TimeoutError) as e:
        reason = getattr(e, "reason", e)
        raise ExecutionError(f"npm registry search failed: {str(reason).lower()}") from e
    except json.JSONDecodeError as e:
        raise ExecutionError("npm registry returned invalid json") from e

    results: list[PackageInfo] = []
    for obj in payload.get("objects", []):
        pkg = obj.get("package") or {}
        if not pkg.get("name"):
            continue
        results.append(
            PackageInfo(
                name=pkg["name"],
                version=pkg.get("version", ""),
                description=pkg.get("description") or "",
            )
        )

    logger.info("npm registry: %d result(s) for %r", len(results), query)
    return results
