from sra2otu.plan.build import STEP_ORDER, build_plan
from sra2otu.plan.types import Artifacts, archive_path, read_paths


def test_fixed_order(make_settings):
    plan = build_plan(make_settings())
    assert plan.names == STEP_ORDER == (
        "fetch", "manifest", "import", "denoise", "classify", "export", "convert",
    )


def test_every_input_is_an_earlier_output_or_operator_file(make_settings):
    settings = make_settings()
    plan = build_plan(settings)
    operator_inputs = {settings.accession_list, settings.classifier}
    produced = set()
    for step in plan.steps:
        for p in step.inputs:
            assert p in produced or p in operator_inputs, (step.name, p)
        produced.update(step.outputs)


def test_each_artifact_has_one_producer(make_settings):
    plan = build_plan(make_settings())
    outputs = [p for s in plan.steps for p in s.outputs]
    assert len(outputs) == len(set(outputs))


def test_artifact_layout(tmp_path):
    a = Artifacts.from_work_dir(tmp_path)
    assert a.manifest == tmp_path / "samples.manifest"
    assert a.demux_qza.name == "data.qza"
    assert a.table_export_dir == tmp_path / "otu" / "table"
    assert a.taxonomy_export_dir == tmp_path / "otu" / "taxonomy"
    assert a.table_biom == tmp_path / "otu" / "table" / "feature-table.biom"
    assert a.otu_table_tsv == tmp_path / "otu" / "otu_table.tsv"


def test_read_and_archive_paths(tmp_path):
    fwd, rev = read_paths(tmp_path, "SRR7")
    assert fwd == tmp_path / "SRR7" / "SRR7_1.fastq"
    assert rev == tmp_path / "SRR7" / "SRR7_2.fastq"
    assert archive_path(tmp_path, "SRR7") == tmp_path / "SRR7" / "SRR7.sra"


def test_step_helpers(make_settings):
    plan = build_plan(make_settings())
    imp = plan.step("import")
    assert not imp.outputs_exist()
    assert imp.missing_inputs() == (plan.artifacts.manifest,)
    assert not plan.step("fetch").outputs_exist()
