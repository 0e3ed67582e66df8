import pytest

from sra2otu.cli import build_parser, main
from sra2otu.plan.types import Artifacts


@pytest.fixture
def config(write_config, fake_tools, project, tmp_path):
    return write_config({
        **fake_tools.as_settings(),
        "work_dir": project,
        "classifier": tmp_path / "classifier.qza",
        "cpu": 2,
        "show_tools": False,
    })


def test_run_end_to_end(config, project, capsys):
    main(["run", "--config", str(config)])
    assert Artifacts.from_work_dir(project).otu_table_tsv.is_file()
    assert "[ok] OTU table" in capsys.readouterr().out
    assert (project / "sra2otu.log").is_file()


def test_missing_list_exits_1(config, project, fake_tools, capsys):
    (project / "srr.txt").unlink()
    with pytest.raises(SystemExit) as ei:
        main(["run", "--config", str(config)])
    assert ei.value.code == 1
    assert "SRR list file not found" in capsys.readouterr().err
    assert fake_tools.calls() == []


def test_tool_exit_status_passed_through(config, fake_tools):
    fake_tools.fail("tools import")
    with pytest.raises(SystemExit) as ei:
        main(["run", "--config", str(config)])
    assert ei.value.code == 5


def test_step_commands(config, project):
    for cmd in ("fetch", "manifest", "import", "denoise", "classify", "export"):
        main([cmd, "--config", str(config)])
    assert Artifacts.from_work_dir(project).otu_table_tsv.is_file()


def test_cli_overrides(config, fake_tools):
    main(["fetch", "--config", str(config), "--cpu", "1", "--dry-run"])
    assert fake_tools.calls() == []


def test_default_config_in_cwd(config, project, monkeypatch):
    monkeypatch.chdir(config.parent)
    assert config.name == "sra2otu.yaml"
    main(["fetch"])
    assert (project / "SRR0000001" / "SRR0000001_1.fastq").is_file()


def test_init_writes_template(tmp_path, capsys):
    out = tmp_path / "cfg" / "sra2otu.yaml"
    main(["init", "--output-file", str(out), "--cpu", "16"])
    assert "cpu: 16" in out.read_text()
    with pytest.raises(SystemExit) as ei:
        main(["init", "--output-file", str(out)])
    assert ei.value.code == 2


def test_doctor(config, capsys):
    main(["doctor", "--config", str(config)])
    out = capsys.readouterr().out
    assert "[check] qiime: OK" in out
    assert "environment looks good" in out


def test_doctor_reports_missing(config, tmp_path, capsys):
    with pytest.raises(SystemExit) as ei:
        main(["doctor", "--config", str(config), "--classifier", str(tmp_path / "none.qza")])
    assert ei.value.code == 2
    assert "[check] classifier: MISSING" in capsys.readouterr().out


def test_subcommand_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_show_tools_flag_defaults_to_none():
    args = build_parser().parse_args(["run"])
    assert args.show_tools is None
    assert build_parser().parse_args(["run", "--no-show-tools"]).show_tools is False


def test_fetch_runs_without_classifier(write_config, fake_tools, project, capsys):
    cfg = write_config({**fake_tools.as_settings(), "work_dir": project, "show_tools": False}, name="nocls.yaml")
    main(["fetch", "--config", str(cfg)])
    main(["manifest", "--config", str(cfg)])
    assert Artifacts.from_work_dir(project).manifest.is_file()
    with pytest.raises(SystemExit) as ei:
        main(["classify", "--config", str(cfg)])
    assert ei.value.code == 1
    assert "classifier is not configured" in capsys.readouterr().err


def test_doctor_flags_unset_classifier(write_config, fake_tools, project, capsys):
    cfg = write_config({**fake_tools.as_settings(), "work_dir": project}, name="nocls.yaml")
    with pytest.raises(SystemExit) as ei:
        main(["doctor", "--config", str(cfg)])
    assert ei.value.code == 2
    assert "[check] classifier: MISSING (not configured)" in capsys.readouterr().out
