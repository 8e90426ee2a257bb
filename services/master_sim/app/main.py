import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI
from pydantic import BaseModel, Field, field_validator

from services.master_sim.app.core.protocol import SimModel
from masterstat.config.settings import get_settings
from masterstat.models import GameServerAddress

log = logging.getLogger("master_sim")

SETTINGS = get_settings()

@asynccontextmanager
async def lifespan(app: FastAPI):
    loop = asyncio.get_running_loop()
    transport, _ = await loop.create_datagram_endpoint(
        MasterProto,
        local_addr=(SETTINGS.sim_udp_host, SETTINGS.sim_udp_port),
    )
    app.state.udp_transport = transport
    log.info("master simulator listening on udp %s:%d", SETTINGS.sim_udp_host, SETTINGS.sim_udp_port)
    try:
        yield
    finally:
        transport.close()

app = FastAPI(title="QuakeWorld Master Simulator", version="0.1.0", lifespan=lifespan)

MODEL = SimModel()

class FaultsIn(BaseModel):
    delay_ms: int = Field(0, ge=0, le=5000)
    drop_rate: float = Field(0.0, ge=0.0, le=1.0)
    corrupt_rate: float = Field(0.0, ge=0.0, le=1.0)
    corrupt_mode: Literal["header", "truncate"] = "header"

class ServersIn(BaseModel):
    servers: list[str] = Field(default_factory=list)

    @field_validator("servers")
    @classmethod
    def _check_addresses(cls, v: list[str]) -> list[str]:
        for s in v:
            GameServerAddress.parse(s)
        return v

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/status")
def status():
    return {
        "servers": len(MODEL.servers),
        "request_count": MODEL.request_count,
        "reset_count": MODEL.reset_count,
        "faults": MODEL.faults.as_dict(),
    }

@app.post("/control/reset")
def reset():
    MODEL.reset()
    return {"status": "reset", "reset_count": MODEL.reset_count}

@app.put("/control/servers")
def set_servers(body: ServersIn):
    MODEL.set_servers([GameServerAddress.parse(s) for s in body.servers])
    return {"status": "servers_updated", "servers": [str(s) for s in MODEL.servers]}

@app.get("/control/servers")
def get_servers():
    return {"servers": [str(s) for s in MODEL.servers]}

@app.post("/control/faults")
def set_faults(f: FaultsIn):
    MODEL.faults.delay_ms = f.delay_ms
    MODEL.faults.drop_rate = f.drop_rate
    MODEL.faults.corrupt_rate = f.corrupt_rate
    MODEL.faults.corrupt_mode = f.corrupt_mode
    return {"status": "faults_updated", "faults": f.model_dump()}

@app.get("/control/faults")
def get_faults():
    return MODEL.faults.as_dict()

class MasterProto(asyncio.DatagramProtocol):
    def connection_made(self, transport):
        # stored for sendto() when replying
        self.transport = transport

    def datagram_received(self, data: bytes, addr):
        loop = asyncio.get_running_loop()

        if MODEL.faults.should_drop():
            log.debug("dropped request from %s:%d", *addr)
            return

        resp_pkt = MODEL.handle(data)

        # corrupt AFTER encoding so the client sees exactly what went over the wire
        if MODEL.faults.should_corrupt():
            resp_pkt = MODEL.faults.corrupt(resp_pkt)

        delay = MODEL.faults.delay_ms / 1000.0
        if delay > 0:
            loop.call_later(delay, self.transport.sendto, resp_pkt, addr)
        else:
            self.transport.sendto(resp_pkt, addr)

if __name__ == "__main__":
    import uvicorn
    from urllib.parse import urlsplit

    url = urlsplit(SETTINGS.sim_http)
    uvicorn.run(app, host=url.hostname, port=url.port, reload=False)
