from __future__ import annotations

import gameclient.__main__ as cli
from gameclient import build_context
from gameclient.services import MemoryMarkerStore


def _patch_context(monkeypatch, transport):
    def fake_build_context(**kwargs):
        return build_context(
            base_url="http://testserver",
            transport=transport,
            markers=MemoryMarkerStore(),
        )

    monkeypatch.setattr(cli, "build_context", fake_build_context)


def test_leaderboard_command_prints_rows(monkeypatch, capsys, transport, backend):
    backend.scores[2] = [{"playerName": "amy", "timeSec": 10.5, "createdAt": "t"}]
    _patch_context(monkeypatch, transport)

    assert cli.main(["leaderboard", "2"]) == 0
    out = capsys.readouterr().out
    assert "Level 2 - Leaderboard" in out
    assert "amy" in out and "10.500s" in out


def test_leaderboard_command_reports_outage(monkeypatch, capsys, transport):
    transport.down.add("*")
    _patch_context(monkeypatch, transport)

    assert cli.main(["leaderboard", "2"]) == 1
    assert "No leaderboard data received" in capsys.readouterr().out


def test_login_command_with_resume(monkeypatch, capsys, transport, backend):
    backend.progress["alice"] = {"username": "alice", "level": 3, "coins": 9, "lastScene": "3"}
    _patch_context(monkeypatch, transport)

    assert cli.main(["login", "alice", "--password", "wonderland", "--resume"]) == 0
    out = capsys.readouterr().out
    assert "Logged in as alice" in out
    assert "Resume loads scene 3" in out


def test_login_command_bad_password(monkeypatch, capsys, transport):
    _patch_context(monkeypatch, transport)
    assert cli.main(["login", "alice", "--password", "nope"]) == 1
    assert "Login failed" in capsys.readouterr().out


def test_submit_command(monkeypatch, capsys, transport, backend):
    _patch_context(monkeypatch, transport)
    assert cli.main(["submit", "2", "12.345", "--user", "bob", "--password", "builder"]) == 0
    assert "Stored 00:12.345 on level 2" in capsys.readouterr().out
    assert backend.scores[2][0]["playerName"] == "bob"
