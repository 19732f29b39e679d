# =============================================================================
# core/http.py  —  Minimal JSON-over-HTTP helper for the live providers
# =============================================================================
#
# Every live provider goes through fetch_json(), so there is exactly one
# place that turns network/parse problems into ProviderError.  Callers catch
# ProviderError and fall back to simulated data.
# =============================================================================

import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Mapping, Optional

from core.errors import ProviderError

DEFAULT_TIMEOUT_SECONDS = 5.0
USER_AGENT = "curl/7.68.0"  # wttr.in only serves JSON to curl-like clients


def fetch_json(
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """GET `url` (with optional query params) and decode the JSON body."""
    if params:
        url = f"{url}?{urllib.parse.urlencode(params)}"
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT, **(headers or {})})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return json.loads(response.read().decode())
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        raise ProviderError(f"request to {url} failed: {e}") from e
    except ValueError as e:
        raise ProviderError(f"invalid JSON from {url}: {e}") from e
