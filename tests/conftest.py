import json
import logging
import stat
import sys
from pathlib import Path

import pytest
import yaml

from sra2otu.config.load import load_settings
from sra2otu.utils.logger import setup_logger


# ---------------------------------------------------------------------------
# Fake external tools: tiny Python scripts with the same CLI shape as
# prefetch / fasterq-dump / qiime / biom. Each call is appended to
# $SRA2OTU_CALLS as one JSON line.
# ---------------------------------------------------------------------------

_COMMON = """\
import json, os, sys
from pathlib import Path

def record(tool):
    log = os.environ.get("SRA2OTU_CALLS")
    if log:
        with open(log, "a", encoding="utf-8") as fh:
            fh.write(json.dumps({"tool": tool, "argv": sys.argv[1:]}) + "\\n")

def opt(name):
    argv = sys.argv[1:]
    return argv[argv.index(name) + 1]

def failing(key):
    return key in os.environ.get("SRA2OTU_FAIL", "").split(",")
"""

FAKE_PREFETCH = _COMMON + """
record("prefetch")
acc = sys.argv[1]
if failing(acc):
    sys.exit(3)
out = Path(opt("--output-directory")) / acc
out.mkdir(parents=True, exist_ok=True)
(out / f"{acc}.sra").write_text("SRA " + acc)
"""

FAKE_FASTERQ = _COMMON + """
record("fasterq-dump")
archive = Path(sys.argv[-1])
acc = archive.stem
if not archive.is_file():
    sys.exit(4)
if failing("split:" + acc):
    sys.exit(4)
outdir = Path(opt("--outdir"))
outdir.mkdir(parents=True, exist_ok=True)
for mate in ("1", "2"):
    (outdir / f"{acc}_{mate}.fastq").write_text(f"@{acc}.{mate}\\nACGT\\n+\\nIIII\\n")
"""

FAKE_QIIME = _COMMON + """
record("qiime")
sub = " ".join(sys.argv[1:3])
if failing(sub):
    sys.exit(5)

def need(p):
    if not Path(p).exists():
        sys.stderr.write(f"missing {p}\\n")
        sys.exit(6)
    return Path(p).read_text()

if sub == "tools import":
    body = need(opt("--input-path"))
    Path(opt("--output-path")).write_text("demux\\n" + body)
elif sub == "dada2 denoise-paired":
    body = need(opt("--i-demultiplexed-seqs"))
    Path(opt("--o-table")).write_text("table\\n" + body)
    Path(opt("--o-representative-sequences")).write_text("rep-seqs\\n" + body)
    Path(opt("--o-denoising-stats")).write_text("stats\\n")
elif sub == "feature-classifier classify-sklearn":
    need(opt("--i-classifier"))
    body = need(opt("--i-reads"))
    Path(opt("--o-classification")).write_text("taxonomy\\n" + body)
elif sub == "tools export":
    src = Path(opt("--input-path"))
    body = need(src)
    out = Path(opt("--output-path"))
    out.mkdir(parents=True, exist_ok=True)
    if src.name.startswith("table"):
        (out / "feature-table.biom").write_text("biom\\n" + body)
    else:
        (out / "taxonomy.tsv").write_text("Feature ID\\tTaxon\\tConfidence\\n")
else:
    sys.exit(2)
"""

FAKE_BIOM = _COMMON + """
record("biom")
body = Path(opt("-i")).read_text()
Path(opt("-o")).write_text("# Constructed from biom file\\n" + body)
"""


def _write_exe(path: Path, body: str) -> Path:
    path.write_text(f"#!{sys.executable}\n" + body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_tools(tmp_path, monkeypatch):
    """Install fake executables; returns a helper exposing paths and recorded calls."""
    bindir = tmp_path / "bin"
    bindir.mkdir()
    calls = tmp_path / "calls.jsonl"
    monkeypatch.setenv("SRA2OTU_CALLS", str(calls))
    monkeypatch.delenv("SRA2OTU_FAIL", raising=False)

    class Tools:
        prefetch = _write_exe(bindir / "prefetch", FAKE_PREFETCH)
        fasterq_dump = _write_exe(bindir / "fasterq-dump", FAKE_FASTERQ)
        qiime = _write_exe(bindir / "qiime", FAKE_QIIME)
        biom = _write_exe(bindir / "biom", FAKE_BIOM)

        @staticmethod
        def calls():
            if not calls.exists():
                return []
            return [json.loads(ln) for ln in calls.read_text().splitlines() if ln.strip()]

        @staticmethod
        def fail(*keys):
            monkeypatch.setenv("SRA2OTU_FAIL", ",".join(keys))

        @classmethod
        def as_settings(cls):
            return {
                "prefetch": str(cls.prefetch),
                "fasterq_dump": str(cls.fasterq_dump),
                "qiime": str(cls.qiime),
                "biom": str(cls.biom),
            }

    return Tools


@pytest.fixture
def project(tmp_path):
    """A work_dir with an SRR list and a (fake) classifier."""
    work = tmp_path / "work"
    work.mkdir()
    (work / "srr.txt").write_text("SRR0000003\nSRR0000001\nSRR0000002\n", encoding="utf-8")
    classifier = tmp_path / "classifier.qza"
    classifier.write_text("classifier")
    return work


@pytest.fixture
def make_settings(project, tmp_path):
    def _make(**overrides):
        data = {
            "work_dir": project,
            "classifier": tmp_path / "classifier.qza",
            "cpu": 2,
            "show_tools": False,
        }
        data.update(overrides)
        return load_settings(None, data)

    return _make


@pytest.fixture
def write_config(tmp_path):
    def _write(data, name="sra2otu.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump({k: str(v) if isinstance(v, Path) else v for k, v in data.items()}))
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("sra2otu")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    setup_logger._configured = False
