# tests/report/test_report_markdown.py
"""
Testes do relatório Markdown derivado do Manifest final.

Os testes asseguram que:
- todas as seções obrigatórias estão presentes
- Steps aparecem na ordem do Event Log
- falhas e paradas são descritas na seção Failure
- o relatório é determinístico para o mesmo Manifest
"""

import pytest

from contractflow.core.engine.engine import Engine
from contractflow.report.report_md import REQUIRED_SECTIONS, generate_report_md
from contractflow.services.base import CompilationResult, ServiceBundle

from tests._fakes import FakeCompiler


@pytest.mark.asyncio
async def test_report_for_successful_run(engine, token_workflow):
    result = await engine.start(token_workflow)

    md = generate_report_md(result.manifest, summary=result.data["summary"])

    for section in REQUIRED_SECTIONS:
        assert section in md
    assert "- **Status**: `success`" in md
    assert md.index("**Create Project**") < md.index("**Compile Contract**") < md.index("**Deploy Contract**")
    assert "No step failed." in md
    assert "Workflow Execution Summary" in md
    assert generate_report_md(result.manifest, summary=result.data["summary"]) == md


@pytest.mark.asyncio
async def test_report_describes_failure(config, sepolia, token_workflow):
    compiler = FakeCompiler(CompilationResult(errors=["syntax error"]))
    engine = Engine(services=ServiceBundle(compiler=compiler), config=config, network=sepolia)
    result = await engine.start(token_workflow)

    md = generate_report_md(result.manifest)

    assert "- **Compile Contract**: syntax error" in md
    assert "  - type: `ExternalServiceError`" in md
    assert "No summary available." in md
    assert "**Generate ABI**" not in md


def test_report_for_stopped_run_without_steps():
    manifest = {
        "manifest_version": 1,
        "run": {"run_id": "r1", "status": "stopped"},
        "inputs": {},
        "steps": {},
        "events": [],
    }
    md = generate_report_md(manifest)
    assert "No step was started in this run." in md
    assert "Run stopped by user before completion." in md


def test_report_requires_manifest():
    with pytest.raises(ValueError):
        generate_report_md({})
