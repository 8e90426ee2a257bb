import pytest

from masterstat import GameServerAddress, query_single

@pytest.mark.smoke
def test_query_simulated_master(sim_api, sim_master):
    sim_api.set_servers(["192.168.1.1:27500", "10.0.0.5:27501"])

    servers = query_single(sim_master, timeout_s=2.0)

    assert servers == [GameServerAddress.parse("192.168.1.1:27500"), GameServerAddress.parse("10.0.0.5:27501")]
    assert sim_api.status()["request_count"] == 1

@pytest.mark.smoke
def test_query_empty_master(sim_api, sim_master):
    assert query_single(sim_master, timeout_s=2.0) == []
