"""Loading of comparison settings from YAML files."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .asserter import LogAsserter
from .exceptions import ConfigError
from .logger import SimpleLogger
from .models import ComparatorConfig
from .tester import XmlTester
from .xml_filter import XmlFilter


_KNOWN_SECTIONS = {"comparator", "filter"}
_COMPARATOR_FLAGS = ("ignore_element_tag_names", "fail_fast")
_FILTER_LISTS = ("element_local_names", "xpaths")


@dataclass
class TesterSettings:
    """Comparator configuration plus the filter to apply when asserting."""
    comparator: ComparatorConfig = field(default_factory=ComparatorConfig)
    filter: Optional[XmlFilter] = None

    def create_tester(self, asserter: LogAsserter, logger: Optional[SimpleLogger] = None) -> XmlTester:
        return XmlTester(asserter, logger=logger, config=self.comparator)

    @classmethod
    def from_dict(cls, data: Optional[dict], path: Optional[str] = None) -> TesterSettings:
        """
        Build settings from a parsed configuration document.

        Args:
            data: Mapping with optional 'comparator' and 'filter' sections
            path: Source file, used in error messages

        Returns:
            TesterSettings
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping", path)

        unknown = set(data) - _KNOWN_SECTIONS
        if unknown:
            raise ConfigError(f"Unknown configuration sections: {', '.join(sorted(unknown))}", path)

        comparator_data = _section(data, "comparator", path)
        for flag in _COMPARATOR_FLAGS:
            if flag in comparator_data and not isinstance(comparator_data[flag], bool):
                raise ConfigError(f"comparator.{flag} must be true or false", path)
        unknown = set(comparator_data) - set(_COMPARATOR_FLAGS)
        if unknown:
            raise ConfigError(f"Unknown comparator settings: {', '.join(sorted(unknown))}", path)

        comparator = ComparatorConfig(
            ignore_element_tag_names=comparator_data.get("ignore_element_tag_names", False),
            fail_fast=comparator_data.get("fail_fast", False)
        )

        filter_data = _section(data, "filter", path)
        for key in _FILTER_LISTS:
            value = filter_data.get(key, [])
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"filter.{key} must be a list of strings", path)
        if not isinstance(filter_data.get("namespaces", {}), dict):
            raise ConfigError("filter.namespaces must be a mapping of prefix to URI", path)

        xml_filter = XmlFilter.from_dict(filter_data) if filter_data else None
        return cls(comparator=comparator, filter=xml_filter)


def _section(data: dict, name: str, path: Optional[str]) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' section must be a mapping", path)
    return section


def load_config(path: str) -> TesterSettings:
    """
    Load settings from a YAML file.

    Args:
        path: Path to the YAML configuration file

    Returns:
        TesterSettings
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}", str(config_path))

    with open(config_path, 'r') as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse configuration file: {e}", str(config_path)) from e

    return TesterSettings.from_dict(data, str(config_path))
