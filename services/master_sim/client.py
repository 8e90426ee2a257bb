from __future__ import annotations
import httpx

class MasterSimClient:
    def __init__(self, base_url: str, timeout_s: float = 2.0):
        self._client = httpx.Client(base_url=base_url, timeout=timeout_s)

    def close(self) -> None:
        self._client.close()

    def health(self) -> dict:
        r = self._client.get("/health")
        r.raise_for_status()
        return r.json()

    def status(self) -> dict:
        r = self._client.get("/status")
        r.raise_for_status()
        return r.json()

    def reset(self) -> dict:
        r = self._client.post("/control/reset")
        r.raise_for_status()
        return r.json()

    def set_servers(self, servers: list[str]) -> dict:
        r = self._client.put("/control/servers", json={"servers": servers})
        r.raise_for_status()
        return r.json()

    def servers(self) -> list[str]:
        r = self._client.get("/control/servers")
        r.raise_for_status()
        return r.json()["servers"]

    def set_faults(self, **faults) -> dict:
        r = self._client.post("/control/faults", json=faults)
        r.raise_for_status()
        return r.json()

    def faults(self) -> dict:
        r = self._client.get("/control/faults")
        r.raise_for_status()
        return r.json()
