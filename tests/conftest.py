"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from modulemd_yaml.models import Dependencies, ModuleDocument


@pytest.fixture
def testmodule() -> ModuleDocument:
    """Return the smallest realistic mdversion 2 document."""
    doc = ModuleDocument(
        mdversion=2,
        name="testmodule",
        stream="master",
        summary="Test",
        description="A test module.",
    )
    doc.add_module_license("MIT")
    return doc


@pytest.fixture
def testmodule_yaml() -> str:
    """Return the emitted form of ``testmodule``."""
    return """\
document: modulemd
version: 2
data:
  name: testmodule
  stream: master
  summary: Test
  description: >
    A test module.
  license:
    module:
      - MIT
"""


@pytest.fixture
def full_module() -> ModuleDocument:
    """Return an mdversion 2 document with every field set."""
    deps = Dependencies()
    deps.add_buildrequires("platform", ["f29", "f28"])
    deps.add_requires_single("platform", "f28")
    deps.add_requires_single("python3", "3.6")

    return ModuleDocument(
        mdversion=2,
        name="foo",
        stream="bar",
        version=20180101,
        summary="An example module",
        description="A longer description",
        module_licenses=["MIT"],
        content_licenses=["GPLv2+", "Beerware"],
        dependencies=[deps],
    )


@pytest.fixture
def full_module_yaml() -> str:
    """Return the emitted form of ``full_module``."""
    return """\
document: modulemd
version: 2
data:
  name: foo
  stream: bar
  version: 20180101
  summary: An example module
  description: >
    A longer description
  license:
    module:
      - MIT
    content:
      - Beerware
      - GPLv2+
  dependencies:
    - buildrequires:
        platform:
          - f28
          - f29
      requires:
        platform:
          - f28
        python3:
          - '3.6'
"""


@pytest.fixture
def v1_module() -> ModuleDocument:
    """Return an mdversion 1 document with one dependency block."""
    deps = Dependencies(
        buildrequires={"base-runtime": ["master"]},
        requires={"base-runtime": ["master"]},
    )
    return ModuleDocument(
        mdversion=1,
        name="foo",
        stream="stable",
        version=1,
        summary="Old format",
        description="Version one document",
        module_licenses=["MIT"],
        dependencies=[deps],
    )


@pytest.fixture
def v1_module_yaml() -> str:
    """Return the emitted form of ``v1_module``."""
    return """\
document: modulemd
version: 1
data:
  name: foo
  stream: stable
  version: 1
  summary: Old format
  description: >
    Version one document
  license:
    module:
      - MIT
  dependencies:
    buildrequires:
      base-runtime: master
    requires:
      base-runtime: master
"""


@pytest.fixture
def testmodule_file(tmp_path: Path, testmodule_yaml: str) -> Path:
    """Write ``testmodule_yaml`` to a file and return its path."""
    path = tmp_path / "testmodule.yaml"
    path.write_text(testmodule_yaml)
    return path
