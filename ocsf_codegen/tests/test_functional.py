"""
Functional tests driven by JSON test cases.

Each case in test_data/functional/*_tests.json holds a schema (inline or as
a file name under test_data), an optional config, and patterns the generated
module must or must not contain.
"""

from __future__ import annotations

import ast
import json
from pathlib import Path

import pytest

from ocsf_codegen.pipeline import CodeGeneratorConfig, PipelineGenerator

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    test_cases = []

    for json_file in sorted((TEST_DATA_DIR / "functional").glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _load_schema(test_case):
    """Load schema from test case (either inline or from file)."""
    if "schema" in test_case:
        return test_case["schema"]
    elif "schema_file" in test_case:
        with open(TEST_DATA_DIR / test_case["schema_file"]) as f:
            return json.load(f)
    else:
        raise ValueError("Test case must have either 'schema' or 'schema_file'")


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda case: case["name"])
def test_functional_generation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    config = CodeGeneratorConfig.from_dict({"add_generation_comment": False, **test_case.get("config", {})})
    generated_code = PipelineGenerator(_load_schema(test_case), config).generate()

    ast.parse(generated_code)

    for expected in test_case.get("expected_python", []):
        assert expected in generated_code, f"Expected pattern '{expected}' not found in Python output"

    for pattern in test_case.get("expected_not_contains", []):
        assert pattern not in generated_code, f"Unexpected pattern '{pattern}' found in Python output"


if __name__ == "__main__":
    pytest.main([__file__])
