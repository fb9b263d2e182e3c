from __future__ import annotations

from pathlib import Path

from memorymatch.services.telemetry import TelemetryService, game_payload

from _helpers import ordered_game


def test_log_appends_json_lines(tmp_path: Path) -> None:
    telemetry = TelemetryService(tmp_path / "nested" / "telemetry.jsonl")
    telemetry.log("boot", {"ok": True})
    telemetry.log("boot", {"ok": False, "error": "missing"})

    records = telemetry.read_all()
    assert [r["type"] for r in records] == ["boot", "boot"]
    assert records[1]["payload"] == {"ok": False, "error": "missing"}
    assert "ts" in records[0]


def test_log_game_records_result(tmp_path: Path) -> None:
    game = ordered_game(pair_count=1, player_count=2)
    game.select_card(0)
    game.select_card(1)
    game.resolve_pending_selection()

    telemetry = TelemetryService(tmp_path / "telemetry.jsonl")
    telemetry.log_game("complete", game.state, elapsed=12.5)

    (record,) = telemetry.read_all()
    assert record["type"] == "complete"
    assert record["payload"] == {
        **game_payload(game.state),
        "elapsed": 12.5,
    }
    assert record["payload"]["status"] == "complete"
    assert record["payload"]["scores"] == [1, 0]


def test_read_all_without_file(tmp_path: Path) -> None:
    assert TelemetryService(tmp_path / "none.jsonl").read_all() == []
