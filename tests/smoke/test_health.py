def test_health(sim_api):
    resp = sim_api.health()
    assert resp["status"] == "ok"

def test_reset_fixture_gives_clean_state(sim_api):
    status = sim_api.status()
    assert status["servers"] == 0
    assert status["request_count"] == 0
    assert status["faults"]["drop_rate"] == 0.0
