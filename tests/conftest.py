"""Shared test fixtures for the bugsweep test suite."""

from pathlib import Path
from types import SimpleNamespace
from typing import List, Sequence

import pytest

from bugsweep.analysis.spotbugs.runner import AnalysisRequest, SpotBugsRunner
from bugsweep.build.application.task_graph import TaskGraph
from bugsweep.build.application.tasks import NoOpTask
from bugsweep.build.domain.enums import VariantKind
from bugsweep.build.domain.models import Variant
from bugsweep.shared.infrastructure.execution.command_executor import CommandResult
from bugsweep.violations.evaluation import EvaluateViolationsTask
from bugsweep.violations.sink import ViolationSink

SAMPLE_REPORT = """<?xml version="1.0" encoding="UTF-8"?>
<BugCollection version="4.8.3" sequence="0" timestamp="1700000000000" analysisTimestamp="1700000000000" release="">
  <Project projectName=""/>
  <BugInstance type="NP_NULL_ON_SOME_PATH" priority="1" rank="6" abbrev="NP" category="CORRECTNESS">
    <ShortMessage>Possible null pointer dereference</ShortMessage>
    <LongMessage>Possible null pointer dereference of value in com.x.Foo.bar()</LongMessage>
    <Class classname="com.x.Foo" primary="true">
      <SourceLine classname="com.x.Foo" start="3" end="40" sourcefile="Foo.java" sourcepath="com/x/Foo.java"/>
    </Class>
    <SourceLine classname="com.x.Foo" start="12" end="12" sourcefile="Foo.java" sourcepath="com/x/Foo.java" primary="true"/>
  </BugInstance>
  <BugInstance type="DM_DEFAULT_ENCODING" priority="2" rank="19" abbrev="Dm" category="I18N">
    <ShortMessage>Reliance on default encoding</ShortMessage>
    <LongMessage>Found reliance on default encoding in com.x.Bar.read()</LongMessage>
    <Class classname="com.x.Bar" primary="true">
      <SourceLine classname="com.x.Bar" start="5" end="20" sourcefile="Bar.java" sourcepath="com/x/Bar.java"/>
    </Class>
  </BugInstance>
</BugCollection>
"""


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def java_project(tmp_path):
    """
    Project with two source roots and one classes directory.

    ``Stale.class`` has no source; ``gen/Gen.java`` lives under a
    ``gen`` package that tests may exclude.
    """
    source_dir = tmp_path / "src" / "main" / "java"
    classes_dir = tmp_path / "build" / "classes" / "java" / "main"

    _touch(source_dir / "com" / "x" / "Foo.java", "package com.x; class Foo {}")
    _touch(source_dir / "com" / "x" / "Bar.java", "package com.x; class Bar {}")
    _touch(source_dir / "com" / "x" / "gen" / "Gen.java", "package com.x.gen; class Gen {}")
    _touch(source_dir / "com" / "x" / "notes.txt", "not a source")

    for name in ("Foo.class", "Foo$Inner.class", "Bar.class", "Stale.class"):
        _touch(classes_dir / "com" / "x" / name)
    _touch(classes_dir / "com" / "x" / "gen" / "Gen.class")

    return SimpleNamespace(root=tmp_path, source_dir=source_dir, classes_dir=classes_dir)


@pytest.fixture
def graph():
    return TaskGraph()


@pytest.fixture
def sink():
    return ViolationSink()


@pytest.fixture
def evaluate(graph, sink):
    return graph.register(EvaluateViolationsTask(violations=sink))


class FakeRunner(SpotBugsRunner):
    """Writes a canned report instead of launching Java."""

    def __init__(self, report: str = SAMPLE_REPORT, exit_code: int = 0, write_report: bool = True):
        super().__init__(tool_classpath=[Path("/opt/spotbugs/lib/spotbugs.jar")])
        self.report = report
        self.exit_code = exit_code
        self.write_report = write_report
        self.requests: List[AnalysisRequest] = []

    async def analyze_async(self, request: AnalysisRequest) -> CommandResult:
        self.requests.append(request)
        if self.write_report:
            request.xml_report.parent.mkdir(parents=True, exist_ok=True)
            request.xml_report.write_text(self.report)
        return CommandResult(command="spotbugs", exit_code=self.exit_code, stdout="", stderr="", duration=0.0)


class FakeRenderer:
    """Records render calls and writes a stub HTML file."""

    def __init__(self):
        self.calls = []

    async def render_async(self, xml_report: Path, html_report: Path, classpath: Sequence[Path]) -> None:
        self.calls.append((xml_report, html_report, list(classpath)))
        html_report.write_text("<html></html>")


@pytest.fixture
def sample_report():
    """BugCollection with one priority-1 and one priority-2 bug."""
    return SAMPLE_REPORT


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def make_variant(graph):
    """Factory registering a pre-built compile task for each variant it creates."""

    def _make(name, source_dirs=(), output_dirs=(), kind=VariantKind.SOURCE_SET, classpath=()):
        compile_task = f"compile{name[:1].upper()}{name[1:]}Java"
        if compile_task not in graph:
            graph.register(NoOpTask(compile_task))
        return Variant(
            name=name,
            kind=kind,
            source_dirs=tuple(source_dirs),
            output_dirs=tuple(output_dirs),
            compile_task=compile_task,
            classpath=tuple(classpath),
        )

    return _make
