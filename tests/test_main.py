"""Tests for the command line entry point."""

import json
import logging
from pathlib import Path

import pytest
import yaml

from cplb_validate.__main__ import (
    EXIT_LOAD_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    check_configuration,
    main,
)


@pytest.fixture(autouse=True)
def _fixed_nic(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep default NIC lookup off the host routing table."""
    monkeypatch.setattr("cplb_validate.validation.vrrp.get_default_nic", lambda: "eth0")


class TestCheckConfiguration:
    """Tests for check_configuration."""

    def test_valid_config(
        self,
        tmp_path: Path,
        sample_document: str,
        capsys: pytest.CaptureFixture[str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test a valid config prints the defaulted spec."""
        path = tmp_path / "cplb.yaml"
        path.write_text(sample_document)

        with caplog.at_level(logging.INFO):
            exit_code = check_configuration(str(path))

        assert exit_code == EXIT_SUCCESS
        assert "Configuration is valid" in caplog.text
        assert "ERROR SUMMARY" not in caplog.text

        output = yaml.safe_load(capsys.readouterr().out)
        assert output["type"] == "Keepalived"
        assert output["keepalived"]["vrrpInstances"][0]["virtualRouterID"] == 51
        assert output["keepalived"]["virtualServers"][0]["lbKind"] == "DR"

    def test_json_output(
        self, tmp_path: Path, sample_document: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test JSON output format."""
        path = tmp_path / "cplb.yaml"
        path.write_text(sample_document)

        assert check_configuration(str(path), output="json") == EXIT_SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert output["keepalived"]["virtualServers"][0]["persistenceTimeoutSeconds"] == 360

    def test_validation_errors(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test every validation error is summarized and nothing is printed."""
        path = tmp_path / "cplb.yaml"
        path.write_text(
            "type: Foo\n"
            "keepalived:\n"
            "  vrrpInstances:\n"
            "    - virtualIPs: [10.0.0.1]\n"
            "      authPass: waytoolongpassword\n"
            "  virtualServers:\n"
            "    - ipAddress: 10.0.0.1\n"
            "      lbAlgo: bogus\n"
        )

        with caplog.at_level(logging.INFO):
            exit_code = check_configuration(str(path))

        assert exit_code == EXIT_VALIDATION_ERROR
        assert capsys.readouterr().out == ""
        assert "ERROR SUMMARY" in caplog.text
        assert "Total errors: 4" in caplog.text
        assert "unsupported CPLB type: Foo" in caplog.text
        assert "AuthPass must be 8 characters or less" in caplog.text
        assert "VirtualIPs must be a CIDR. Got: 10.0.0.1" in caplog.text
        assert "invalid LBAlgo: bogus" in caplog.text

    def test_external_address_from_cluster_config(
        self,
        tmp_path: Path,
        cluster_config_document: str,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test the external address in a ClusterConfig conflicts with virtual servers."""
        path = tmp_path / "k0s.yaml"
        path.write_text(cluster_config_document)

        with caplog.at_level(logging.ERROR):
            exit_code = check_configuration(str(path))

        assert exit_code == EXIT_VALIDATION_ERROR
        assert "cannot be used together" in caplog.text

    def test_external_address_override(
        self, tmp_path: Path, cluster_config_document: str
    ) -> None:
        """Test an explicit empty external address overrides the file."""
        path = tmp_path / "k0s.yaml"
        path.write_text(cluster_config_document)

        assert check_configuration(str(path), external_address="") == EXIT_SUCCESS

    def test_missing_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test a missing file is a load error."""
        with caplog.at_level(logging.ERROR):
            exit_code = check_configuration(str(tmp_path / "missing.yaml"))
        assert exit_code == EXIT_LOAD_ERROR
        assert "not found" in caplog.text

    def test_schema_error(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test a schema error is a load error."""
        path = tmp_path / "cplb.yaml"
        path.write_text("enabled: maybe-not\n")
        with caplog.at_level(logging.ERROR):
            exit_code = check_configuration(str(path))
        assert exit_code == EXIT_LOAD_ERROR
        assert "Failed to load configuration" in caplog.text

    def test_undecodable_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test a file that is not valid UTF-8 is a load error."""
        path = tmp_path / "cplb.yaml"
        path.write_bytes(b"type: \xff\xfe\n")
        with caplog.at_level(logging.ERROR):
            exit_code = check_configuration(str(path))
        assert exit_code == EXIT_LOAD_ERROR
        assert "Invalid YAML/JSON" in caplog.text

    def test_no_spec(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test a file without load balancing configuration is accepted."""
        path = tmp_path / "k0s.yaml"
        path.write_text("apiVersion: k0s.k0sproject.io/v1beta1\nkind: ClusterConfig\nspec: {}\n")
        with caplog.at_level(logging.INFO):
            exit_code = check_configuration(str(path))
        assert exit_code == EXIT_SUCCESS
        assert "No control plane load balancing configuration" in caplog.text


class TestMain:
    """Tests for argument handling."""

    def test_main_success(self, tmp_path: Path, sample_document: str) -> None:
        """Test main returns the exit code of check_configuration."""
        path = tmp_path / "cplb.yaml"
        path.write_text(sample_document)
        assert main([str(path), "-o", "json"]) == EXIT_SUCCESS

    def test_main_external_address_flag(self, tmp_path: Path, sample_document: str) -> None:
        """Test --external-address is passed through."""
        path = tmp_path / "cplb.yaml"
        path.write_text(sample_document)
        assert main([str(path), "--external-address", "10.0.0.10"]) == EXIT_VALIDATION_ERROR

    def test_main_rejects_unknown_output(self, tmp_path: Path) -> None:
        """Test invalid output format is rejected by argparse."""
        with pytest.raises(SystemExit):
            main([str(tmp_path / "x.yaml"), "-o", "xml"])
