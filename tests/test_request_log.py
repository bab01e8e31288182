# =============================================================================
# tests/test_request_log.py - request logging middleware
# =============================================================================

import logging


def _messages(caplog):
    return [r.getMessage() for r in caplog.records if r.name == "users_api.request"]


def test_start_and_completion_are_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="users_api.request")
    client.get("/users?limit=5")
    start, done = _messages(caplog)
    assert start == "[Request] GET /users?limit=5 - Start"
    assert done.startswith("[Request] GET /users?limit=5 - Completed 200 in ")
    assert done.endswith("ms")


def test_rejected_requests_are_logged_too(client, caplog):
    caplog.set_level(logging.INFO, logger="users_api.request")
    client.post("/users", json={})
    assert "[Request] POST /users - Completed 401 in " in _messages(caplog)[-1]
