# src/sra2otu/config/schema.py
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, NonNegativeInt, PositiveInt, field_validator, model_validator

DEFAULT_ACCESSION_LIST = "srr.txt"
DEFAULT_LOG_FILE = "sra2otu.log"


class Settings(BaseModel):
    """Immutable run configuration; built once and handed to every step."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # executables (bare names are looked up on PATH)
    prefetch: str = "prefetch"
    fasterq_dump: str = "fasterq-dump"
    qiime: str = "qiime"
    biom: str = "biom"

    # locations
    work_dir: Path
    accession_list: Path
    classifier: Optional[Path] = None     # only the classify step needs it
    log_file: Path

    # concurrency budget: fetch pool size, DADA2 threads, sklearn jobs
    cpu: PositiveInt = 1
    fasterq_threads: Optional[PositiveInt] = None

    # import
    input_format: str = "PairedEndFastqManifestPhred33V2"
    import_type: str = "SampleData[PairedEndSequencesWithQuality]"

    # DADA2; 0 means no trimming / truncation
    trim_left_f: NonNegativeInt = 0
    trim_left_r: NonNegativeInt = 0
    trunc_len_f: NonNegativeInt = 0
    trunc_len_r: NonNegativeInt = 0

    # behaviour
    accession_pattern: str = r"^[SED]RR\d+$"
    strict_manifest: bool = False
    keep_going: bool = False
    resume: bool = False
    dry_run: bool = False
    show_tools: bool = True

    @model_validator(mode="before")
    @classmethod
    def _fill_derived_paths(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        work_dir = data.get("work_dir")
        if work_dir is None:
            return data
        if data.get("accession_list") is None:
            data["accession_list"] = Path(work_dir) / DEFAULT_ACCESSION_LIST
        if data.get("log_file") is None:
            data["log_file"] = Path(work_dir) / DEFAULT_LOG_FILE
        return data

    @field_validator("work_dir", "accession_list", "classifier", "log_file")
    @classmethod
    def _absolute(cls, v: Optional[Path]) -> Optional[Path]:
        if v is None:
            return v
        return Path(v).expanduser().resolve()

    @field_validator("accession_pattern")
    @classmethod
    def _check_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"accession_pattern is not a valid regex: {e}") from e
        return v

    @field_validator("prefetch", "fasterq_dump", "qiime", "biom")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("executable path must not be empty")
        return v
