"""Tests for Typer CLI interface."""

import sys

import pytest
from typer.testing import CliRunner

from sv_props import __version__
from sv_props.cli import app, main

runner = CliRunner(env={"NO_COLOR": "1", "TERM": "dumb"})

EXPECTED_HEADER = [
    "chr",
    "start",
    "end",
    "id",
    "size",
    "vac",
    "vaf",
    "singleton",
    "missingrate",
    "svtype",
    "precise",
    "ci",
    "refgq",
    "altgq",
    "rdratio",
    "medianrc",
    "refratio",
    "altratio",
    "fic",
    "rsq",
    "hwepval",
]


class TestCLIHelp:
    """Tests for CLI help and basic structure."""

    def test_help_command(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "VCF" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestCLIProps:
    def test_deletion_cohort(self, deletion_vcf_file):
        result = runner.invoke(app, [str(deletion_vcf_file)])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert len(lines) == 3
        assert lines[0].split("\t") == EXPECTED_HEADER

        deletion = dict(zip(EXPECTED_HEADER, lines[1].split("\t"), strict=True))
        assert deletion["chr"] == "chr1"
        assert deletion["start"] == "1000"
        assert deletion["end"] == "1050"
        assert deletion["id"] == "DEL00000001"
        assert deletion["size"] == "50"
        assert deletion["vac"] == "1"
        assert deletion["vaf"] == "0.166667"
        assert deletion["singleton"] == "S3"
        assert deletion["missingrate"] == "0.25"
        assert deletion["svtype"] == "DEL"
        assert deletion["precise"] == "0"
        assert deletion["ci"] == "20"
        assert deletion["refgq"] == "50"
        assert deletion["altgq"] == "20"
        assert deletion["rdratio"] == "0.454545"
        assert deletion["medianrc"] == "110"
        assert deletion["refratio"] == "0.0666667"
        assert deletion["altratio"] == "0.5"
        assert deletion["fic"] == "0.9"
        assert deletion["rsq"] == "0.8"
        assert deletion["hwepval"] == "0.5"

        insertion = dict(zip(EXPECTED_HEADER, lines[2].split("\t"), strict=True))
        assert insertion["end"] == "5000"
        assert insertion["size"] == "120"
        assert insertion["vac"] == "4"
        assert insertion["vaf"] == "0.5"
        assert insertion["singleton"] == "NA"
        assert insertion["missingrate"] == "0"
        assert insertion["precise"] == "1"
        assert insertion["refgq"] == "80"
        assert insertion["altgq"] == "60"
        assert insertion["refratio"] == "0"
        assert insertion["altratio"] == "0.5"
        assert insertion["rdratio"] == "1"

    def test_no_records_writes_header(self, sv_vcf_generator, tmp_path):
        path = sv_vcf_generator.generate_file([], ["S1"], directory=tmp_path)

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["\t".join(EXPECTED_HEADER)]

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, [str(tmp_path / "nonexistent.vcf")])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert "chr\tstart" not in result.output

    def test_multiallelic_genotype_fails(self, sv_vcf_generator, synthetic_sv_factory, tmp_path):
        variant = synthetic_sv_factory(
            alt="<DEL>,<DUP>",
            info={"SVTYPE": "CNV", "END": 2000},
            format_fields={"S1": {"GT": "1/2"}},
        )
        path = sv_vcf_generator.generate_file([variant], ["S1"], directory=tmp_path)

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 1
        assert "biallelic" in result.output

    def test_sites_only_vcf(self, sv_vcf_generator, synthetic_sv_factory, tmp_path):
        variant = synthetic_sv_factory(info={"SVTYPE": "DEL", "END": 1500})
        path = sv_vcf_generator.generate_file([variant], [], directory=tmp_path)

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert len(lines) == 2
        row = dict(zip(EXPECTED_HEADER, lines[1].split("\t"), strict=True))
        assert row["size"] == "500"
        assert row["vac"] == "0"
        assert row["vaf"] == "nan"
        assert row["missingrate"] == "nan"
        assert row["singleton"] == "NA"

    def test_record_without_gt_field(self, sv_vcf_generator, synthetic_sv_factory, tmp_path):
        variant = synthetic_sv_factory(
            sv_id="NOGT1",
            info={"SVTYPE": "DEL", "END": 2000},
            format_fields={"S1": {"GQ": 30}},
        )
        path = sv_vcf_generator.generate_file([variant], ["S1"], directory=tmp_path)

        result = runner.invoke(app, [str(path)])

        assert result.exit_code == 1
        assert "no GT field" in result.output
        assert "NOGT1" in result.output
        assert "None" not in result.output

    def test_config_file(self, deletion_vcf_file, tmp_path):
        config_path = tmp_path / "sv_props.toml"
        config_path.write_text('[sv_props]\ndelimiter = ","\nfloat_precision = 3\n')

        result = runner.invoke(app, [str(deletion_vcf_file), "--config", str(config_path)])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[0].split(",") == EXPECTED_HEADER
        assert lines[1].split(",")[6] == "0.167"

    def test_invalid_config(self, deletion_vcf_file, tmp_path):
        config_path = tmp_path / "sv_props.toml"
        config_path.write_text("[sv_props]\nfloat_precision = -1\n")

        result = runner.invoke(app, [str(deletion_vcf_file), "--config", str(config_path)])

        assert result.exit_code == 1


class TestMainEntryPoint:
    """Argument-count errors exit with status 1."""

    def test_no_arguments(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["sv-props"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        assert "Traceback" not in capsys.readouterr().err

    def test_too_many_arguments(self, monkeypatch, deletion_vcf_file, capsys):
        monkeypatch.setattr(sys, "argv", ["sv-props", str(deletion_vcf_file), "extra.vcf"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "Traceback" not in captured.err
        assert captured.out == ""

    def test_unopenable_file(self, monkeypatch, tmp_path):
        monkeypatch.setattr(sys, "argv", ["sv-props", str(tmp_path / "nope.vcf")])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1

    def test_success(self, monkeypatch, deletion_vcf_file, capsys):
        monkeypatch.setattr(sys, "argv", ["sv-props", str(deletion_vcf_file)])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 0
        assert len(capsys.readouterr().out.splitlines()) == 3
