from typing import Any, Dict, Union

import requests

from inverse_mod.config import Mode
from inverse_mod.errors import RemoteError

DEFAULT_ENDPOINT = "http://127.0.0.1:8000/api"


def fetch_outcome(
    base: int,
    modulus: int,
    mode: Union[Mode, str] = Mode.GUARANTEED,
    endpoint: str = DEFAULT_ENDPOINT,
    *,
    steps: bool = False,
    timeout: float = 10,
) -> Dict[str, Any]:
    """Ask a running API server for the inverse of base mod modulus."""
    route = "inverse-mod" if steps else "inverse-mod-z"
    url = f"{endpoint.rstrip('/')}/{route}"
    response = requests.get(
        url,
        params={"x": base, "y": modulus, "mode": Mode(mode).value},
        timeout=timeout,
    )
    if response.status_code != 200:
        raise RemoteError(f"Failed to get {url}: {response.status_code} {response.text}")
    return response.json()
