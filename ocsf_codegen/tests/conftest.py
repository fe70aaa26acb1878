from __future__ import annotations

import importlib.util
import itertools
import json
import sys
from pathlib import Path

import pytest

from ocsf_codegen.pipeline import CodeGeneratorConfig, PipelineGenerator

TEST_DATA_DIR = Path(__file__).parent / "test_data"
SAMPLE_SCHEMA = TEST_DATA_DIR / "ocsf_sample.json"

_module_ids = itertools.count()


def load_generated_module(code: str, directory: Path):
    """Write generated code to directory and import it under a unique name."""
    name = f"ocsf_generated_{next(_module_ids)}"
    path = directory / f"{name}.py"
    path.write_text(code, encoding="utf-8")

    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    # dataclasses and dataclasses_json resolve annotations through sys.modules
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="session")
def sample_schema() -> dict:
    with open(SAMPLE_SCHEMA, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture(scope="session")
def ocsf_types(sample_schema, tmp_path_factory):
    """The sample schema generated with the default configuration."""
    code = PipelineGenerator(sample_schema).generate()
    return load_generated_module(code, tmp_path_factory.mktemp("generated"))


@pytest.fixture
def generate_module(tmp_path):
    """Factory generating and importing a module from a schema and config."""

    def _generate(schema, config: CodeGeneratorConfig | None = None):
        code = PipelineGenerator(schema, config).generate()
        return load_generated_module(code, tmp_path)

    return _generate


@pytest.fixture
def load_sample():
    def _load(name: str) -> dict:
        with open(TEST_DATA_DIR / name, encoding="utf-8") as f:
            return json.load(f)

    return _load
