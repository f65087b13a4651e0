"""End-to-end tests for the analysis pipeline and command line report."""

import json

import pytest

from flight_budget.analyze import analyze_export, load_logbook
from flight_budget.cli import main
from flight_budget.errors import EmptyResultError

from conftest import FLIGHT_LINES, make_export


class TestLoadLogbook:
    def test_counts(self, sample_export):
        logbook = load_logbook(sample_export)
        assert len(logbook.records) == 4
        assert logbook.aircraft_flights == 3
        assert logbook.simulator_sessions == 1

    def test_no_valid_rows(self):
        text = make_export(FLIGHT_LINES[3:5])
        with pytest.raises(EmptyResultError) as exc_info:
            load_logbook(text)
        assert exc_info.value.details["rows_read"] == 2


class TestAnalyzeExport:
    """Tests for the analyze_export pipeline."""

    def test_sample_totals(self, sample_export, now):
        result, err = analyze_export(sample_export, now=now)
        assert err is None
        hours = result.hours
        assert hours.total_time == pytest.approx(6.5)
        assert hours.pic_time == pytest.approx(4.5)
        assert hours.pic_xc == pytest.approx(3.5)
        assert hours.dual_received == pytest.approx(3.5)
        assert hours.actual_instrument == pytest.approx(0.5)
        assert hours.simulated_instrument == pytest.approx(1.0)
        assert hours.sim_time == pytest.approx(1.5)
        assert hours.sim_instrument_time == pytest.approx(1.0)
        assert hours.batd_time == pytest.approx(1.5)
        assert hours.instrument_total == pytest.approx(2.5)
        assert hours.instrument_dual_airplane == pytest.approx(1.5)
        assert hours.recent_instrument == pytest.approx(1.5)
        assert hours.day_xc == pytest.approx(3.5)
        assert hours.long_xc == pytest.approx(3.5)
        assert hours.solo_long_xc == pytest.approx(3.5)
        assert hours.ir_250nm_xc == 1

    def test_recency_moves_with_evaluation_date(self, sample_export):
        from datetime import datetime
        result, _ = analyze_export(sample_export, now=datetime(2024, 5, 2))
        assert result.hours.recent_instrument == 0

    def test_certificate_evaluation(self, sample_export, now):
        result, err = analyze_export(sample_export, certificate="ir", now=now)
        assert err is None
        ev = result.evaluation
        assert ev.certificate == "ir"
        assert len(ev.results) == 6
        assert ev.results[4].completed          # 250 nm instrument cross-country
        assert ev.dual_needed == pytest.approx(40 - 2.5)
        assert ev.solo_needed == pytest.approx(50 - 3.5)

    def test_aircraft(self, sample_export, now):
        result, _ = analyze_export(sample_export, now=now)
        assert [a.aircraft_id for a in result.aircraft] == ["N12345", "SIM1", "SIM2"]

    def test_summary(self, sample_export, now):
        result, _ = analyze_export(sample_export, now=now)
        assert result.summary == "Processed 3 flights and 1 simulator session."

    def test_summary_without_simulators(self, now):
        result, _ = analyze_export(make_export(FLIGHT_LINES[:1]), now=now)
        assert result.summary == "Processed 1 flight."

    @pytest.mark.parametrize("text,message", [
        ("Some Other Logbook,\nFlights Table,\nDate,AircraftID\n", "Not a valid ForeFlight export"),
        ("ForeFlight Logbook Import,\nAircraft Table,\n", "Could not find Flights Table in CSV"),
        (make_export(FLIGHT_LINES[3:5]), "No valid flights found"),
    ])
    def test_errors_are_returned(self, text, message):
        result, err = analyze_export(text)
        assert result is None
        assert err == message

    def test_trailing_comma_keeps_the_flight(self, now):
        lines = list(FLIGHT_LINES)
        lines[1] += ","
        result, err = analyze_export(make_export(lines), now=now)
        assert err is None
        assert result.hours.total_time == pytest.approx(6.5)
        assert result.hours.ir_250nm_xc == 1

    def test_unreadable_path_is_returned(self, tmp_path):
        result, err = analyze_export(str(tmp_path / "missing.csv"))
        assert result is None
        assert err.startswith("Could not read logbook")

    def test_unknown_certificate_is_returned(self, sample_export):
        result, err = analyze_export(sample_export, certificate="atp")
        assert result is None
        assert "atp" in err


class TestCli:
    """Tests for the flight-budget command."""

    def test_text_report(self, sample_export, tmp_path, capsys):
        path = tmp_path / "logbook.csv"
        path.write_text(sample_export, encoding="utf-8")

        code = main(["--input", str(path), "--cert", "ir", "--now", "2024-05-01"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Processed 3 flights and 1 simulator session." in out
        assert "Instrument Rating requirements:" in out
        assert "1.5 BATD hours included" in out

    def test_json_report(self, sample_export, tmp_path, capsys):
        path = tmp_path / "logbook.csv"
        path.write_text(sample_export, encoding="utf-8")

        assert main(["--input", str(path), "--json", "--now", "2024-05-01"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["flights"] == 3
        assert payload["hours"]["picXC"] == pytest.approx(3.5)
        assert payload["hours"]["ir250nmXC"] == 1
        assert "requirements" not in payload

    def test_bad_file(self, tmp_path, capsys):
        path = tmp_path / "other.csv"
        path.write_text("Date,Route\n2024-01-01,KPWM-KBOS\n", encoding="utf-8")

        assert main(["--input", str(path)]) == 1
        assert "Not a valid ForeFlight export" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["--input", str(tmp_path / "missing.csv")]) == 1
        assert "error: Could not read logbook" in capsys.readouterr().err
