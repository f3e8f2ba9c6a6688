"""Pytest configuration and shared fixtures for the treediff test suite.

This module provides shared fixtures, test configuration, and Hypothesis
profiles used across the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=30)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "property: Hypothesis property-based tests")


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    """Run a test from an empty directory with no config file discoverable.

    Config discovery walks from the working directory to the filesystem root
    and then checks the home directory, so both are redirected into
    ``tmp_path``.
    """
    work_dir = tmp_path / "work"
    home_dir = tmp_path / "home"
    work_dir.mkdir()
    home_dir.mkdir()
    monkeypatch.chdir(work_dir)
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("TREEDIFF_CONFIG", raising=False)
    return work_dir


@pytest.fixture
def sample_json_pair() -> tuple[str, str]:
    """Provide two JSON documents that differ in several ways.

    Returns
    -------
    tuple of str
        First and second document text

    """
    first = """{
  "name": "calendar",
  "season": 2024,
  "races": [
    {"round": 1, "venue": "Bahrain"},
    {"round": 2, "venue": "Jeddah"}
  ],
  "draft": false
}"""
    second = """{
  "season": "2024",
  "name": "calendar",
  "races": [
    {"round": 1, "venue": "Bahrain"},
    {"round": 2, "venue": "Melbourne"},
    {"round": 3, "venue": "Suzuka"}
  ],
  "published": true
}"""
    return first, second


@pytest.fixture
def sample_xml_pair() -> tuple[str, str]:
    """Provide two XML documents with tag, attribute and text differences.

    Returns
    -------
    tuple of str
        First and second document text

    """
    first = """<catalog version="1">
  <book id="b1" lang="en">
    <title>Dune</title>
  </book>
  <book id="b2">
    <title>Emma</title>
  </book>
</catalog>"""
    second = """<catalog version="2">
  <book lang="en" id="b1">
    <title>Dune</title>
  </book>
  <book id="b2">
    <title>Persuasion</title>
  </book>
  <magazine id="m1"/>
</catalog>"""
    return first, second
