from __future__ import annotations

import json
from pathlib import Path

import pytest

from tools import build_nearby_catalog as cli


def test_arg_parser_accepts_epoch_choices() -> None:
    parser = cli.build_arg_parser()
    args = parser.parse_args(["--cns3", "a.dat", "--gjac", "b.dat", "--source-epoch", "J2000"])
    assert args.source_epoch == "J2000"
    assert args.samples is None
    with pytest.raises(SystemExit):
        parser.parse_args(["--source-epoch", "J1991.25"])


def test_main_requires_both_catalogues(tmp_path: Path) -> None:
    assert cli.main(["--cns3", str(tmp_path / "catalog.dat")]) == 2


def test_main_reports_nothing_imported(tmp_path: Path) -> None:
    assert cli.main(["--cns3", str(tmp_path / "a.dat"), "--gjac", str(tmp_path / "b.dat")]) == 1


def test_main_writes_json_summary(tmp_path: Path, cns3_line, gjac_line, proxima_cns3, proxima_gjac, capsys) -> None:
    cns3 = tmp_path / "catalog.dat"
    cns3.write_text(cns3_line(**proxima_cns3) + "\n", encoding="utf-8")
    gjac = tmp_path / "gj_ac.dat"
    gjac.write_text(gjac_line(**proxima_gjac) + "\n", encoding="utf-8")
    names = tmp_path / "names.csv"
    names.write_text("GJ 551,Proxima Centauri\n", encoding="utf-8")
    report = tmp_path / "report.json"

    code = cli.main(
        ["--cns3", str(cns3), "--gjac", str(gjac), "--names", str(names), "--json", str(report), "--log-level", "warning"]
    )

    assert code == 0
    payload = json.loads(report.read_text())
    assert [info["catalog"] for info in payload] == ["GJ AC", "CNS3"]
    cns3_info = payload[1]
    assert cns3_info["star_count"] == 1
    assert cns3_info["with_hip"] == 1
    assert cns3_info["named"] == 1
    assert cns3_info["sample_stars"][0]["names"] == ["Proxima Centauri"]
    assert payload[0]["vmag_range"] is None
    out = capsys.readouterr().out
    assert "CNS3: 1 star(s)" in out
    assert "Proxima Centauri" in out


def test_settings_file_seeds_paths(tmp_path: Path, cns3_line, proxima_cns3) -> None:
    cns3 = tmp_path / "catalog.dat"
    cns3.write_text(cns3_line(**proxima_cns3) + "\n", encoding="utf-8")
    settings = tmp_path / "settings.json"
    settings.write_text(
        json.dumps({"cns3_path": str(cns3), "gjac_path": str(tmp_path / "missing.dat"), "report_samples": 0}),
        encoding="utf-8",
    )
    assert cli.main(["--settings", str(settings)]) == 0
