"""Configuration file loading and serialization.

Reads a control plane load balancing block from a YAML or JSON file and
converts it into a ``LoadBalancingSpec``. The file may contain either the bare
block or a complete k0s ``ClusterConfig`` document, in which case the block is
taken from ``spec.network.controlPlaneLoadBalancing`` and the API external
address from ``spec.api.externalAddress``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from cplb_validate.models import LoadBalancingSpec

logger = logging.getLogger(__name__)

# Fields serialized even when empty (required in the JSON schema)
ALWAYS_EMITTED = frozenset({"authPass", "ipAddress"})

# Integers where 0 is a real value rather than "unset"
KEEP_ZERO_INTS = frozenset({"virtualRouterID", "advertInterval", "weight"})


class ConfigLoadError(ValueError):
    """Raised when a configuration file cannot be loaded."""


@dataclass
class LoadedConfig:
    """Result of loading a configuration file.

    Attributes:
        spec: The load balancing spec, or None if the document has none
        external_address: API external address found in a ClusterConfig document
    """

    spec: LoadBalancingSpec | None
    external_address: str = ""


class ConfigLoader:
    """Loader for control plane load balancing configuration files."""

    def __init__(self, path: str | Path) -> None:
        """Initialize the loader.

        Args:
            path: Path to a YAML or JSON configuration file
        """
        self.path = Path(path)

    def load(self) -> LoadedConfig:
        """Read the file and build the spec.

        Returns:
            LoadedConfig with the deserialized spec and external address

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigLoadError: If the file is malformed or does not match the schema
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.path}")

        document = self._read_document()
        if document is None:
            logger.info("Configuration file %s is empty", self.path)
            return LoadedConfig(spec=None)

        if self._is_cluster_config(document):
            logger.debug("Reading %s as a k0s ClusterConfig", self.path)
            block, external_address = self._extract_from_cluster_config(document)
        else:
            block, external_address = document, ""

        if block is None:
            return LoadedConfig(spec=None, external_address=external_address)

        try:
            spec = LoadBalancingSpec.model_validate(block)
        except ValidationError as e:
            raise ConfigLoadError(f"Invalid configuration in {self.path}: {e}") from e

        return LoadedConfig(spec=spec, external_address=external_address)

    def _read_document(self) -> dict[str, Any] | None:
        """Parse the file contents.

        JSON is a subset of YAML, so both formats go through the YAML parser.
        The raw bytes are handed over so that the parser detects UTF-8 or
        UTF-16 (with BOM) itself and reports undecodable input as a YAML error.

        Raises:
            ConfigLoadError: If the file cannot be read or parsed
        """
        try:
            content = self.path.read_bytes()
        except OSError as e:
            raise ConfigLoadError(f"Cannot read {self.path}: {e}") from e

        try:
            document = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Invalid YAML/JSON in {self.path}: {e}") from e

        if document is None:
            return None
        if not isinstance(document, dict):
            raise ConfigLoadError(
                f"Expected a mapping at the top of {self.path}, got {type(document).__name__}"
            )
        return document

    @staticmethod
    def _is_cluster_config(document: dict[str, Any]) -> bool:
        return "spec" in document and ("kind" in document or "apiVersion" in document)

    def _extract_from_cluster_config(
        self, document: dict[str, Any]
    ) -> tuple[dict[str, Any] | None, str]:
        """Pull the CPLB block and external address out of a ClusterConfig.

        Raises:
            ConfigLoadError: If a section on the way is not a mapping
        """
        spec = self._section(document, "spec")
        network = self._section(spec, "network")
        api = self._section(spec, "api")

        external_address = api.get("externalAddress") or ""
        if not isinstance(external_address, str):
            raise ConfigLoadError(f"spec.api.externalAddress in {self.path} must be a string")

        return network.get("controlPlaneLoadBalancing"), external_address

    def _section(self, parent: dict[str, Any], key: str) -> dict[str, Any]:
        value = parent.get(key) or {}
        if not isinstance(value, dict):
            raise ConfigLoadError(f"Section '{key}' in {self.path} must be a mapping")
        return value


def load_spec(path: str | Path) -> LoadedConfig:
    """Load a configuration file.

    This is a convenience function that creates a ConfigLoader and calls load().

    Args:
        path: Path to a YAML or JSON file

    Returns:
        LoadedConfig with the spec and external address

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigLoadError: If the file is malformed or does not match the schema
    """
    return ConfigLoader(path).load()


def _omit_empty(data: Any) -> Any:
    if isinstance(data, list):
        return [_omit_empty(item) for item in data]
    if not isinstance(data, dict):
        return data

    result: dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if key in ALWAYS_EMITTED or key in KEEP_ZERO_INTS:
            result[key] = _omit_empty(value)
            continue
        if value is False or value == "" or value == [] or (
            isinstance(value, int) and not isinstance(value, bool) and value == 0
        ):
            continue
        result[key] = _omit_empty(value)
    return result


def dump_spec(spec: LoadBalancingSpec) -> dict[str, Any]:
    """Serialize a spec using JSON field names, omitting unset fields.

    Args:
        spec: Spec to serialize

    Returns:
        Plain dictionary suitable for json.dumps or yaml.safe_dump
    """
    return _omit_empty(spec.model_dump(by_alias=True))
